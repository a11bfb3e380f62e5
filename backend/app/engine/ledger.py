"""
Completion ledger: which users finished which lessons.

Uses INSERT ... ON CONFLICT DO UPDATE keyed on ``(user_id, lesson_id)``
so that concurrent completions of the same pair can never produce two
rows. The ledger does not commit; the caller's transaction does.
"""

from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, Set

from sqlalchemy import select, exists
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from app.core.database import id_in_range
from app.core.errors import NotFoundError
from app.models.course import Lesson
from app.models.progress import LessonCompletion


_UPSERT_DIALECTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class CompletionLedger:
    """Reads and writes LessonCompletion rows through an injected session."""

    def __init__(self, db: Session):
        self.db = db

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        try:
            return _UPSERT_DIALECTS[dialect]
        except KeyError:
            raise RuntimeError(f"Completion upsert not supported on {dialect}") from None

    def record_completion(self, user_id: int, lesson_id: int) -> LessonCompletion:
        """
        Record that ``user_id`` finished ``lesson_id``.

        Repeat calls refresh ``completed_at`` on the existing row.

        Raises:
            NotFoundError: The lesson does not exist
        """
        lesson_found = id_in_range(lesson_id) and self.db.scalar(
            select(exists().where(Lesson.id == lesson_id))
        )
        if not lesson_found:
            raise NotFoundError("Lesson not found")

        stmt = self._insert()(LessonCompletion).values(
            user_id=user_id,
            lesson_id=lesson_id,
            completed_at=datetime.now(timezone.utc),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "lesson_id"],
            set_={"completed_at": stmt.excluded.completed_at},
        )
        self.db.execute(stmt)

        return self.db.scalars(
            select(LessonCompletion)
            .where(
                LessonCompletion.user_id == user_id,
                LessonCompletion.lesson_id == lesson_id,
            )
            .execution_options(populate_existing=True)
        ).one()

    def is_completed(self, user_id: int, lesson_id: int) -> bool:
        return bool(
            self.db.scalar(
                select(
                    exists().where(
                        LessonCompletion.user_id == user_id,
                        LessonCompletion.lesson_id == lesson_id,
                    )
                )
            )
        )

    def completed_lesson_ids(self, user_id: int, course_id: int) -> Set[int]:
        """Lessons of one course the user has completed, in a single query."""
        rows = self.db.scalars(
            select(LessonCompletion.lesson_id)
            .join(Lesson, Lesson.id == LessonCompletion.lesson_id)
            .where(
                LessonCompletion.user_id == user_id,
                Lesson.course_id == course_id,
            )
        )
        return set(rows)

    def completed_lessons_by_course(self, user_id: int) -> Dict[int, Set[int]]:
        """
        All of a user's completions, partitioned by course.

        One query regardless of how many courses are involved; list views
        use this instead of calling ``completed_lesson_ids`` per course.
        """
        rows = self.db.execute(
            select(Lesson.course_id, LessonCompletion.lesson_id)
            .join(Lesson, Lesson.id == LessonCompletion.lesson_id)
            .where(LessonCompletion.user_id == user_id)
        )

        by_course: Dict[int, Set[int]] = defaultdict(set)
        for course_id, lesson_id in rows:
            by_course[course_id].add(lesson_id)
        return dict(by_course)

    def completed_course_ids_for_user(self, user_id: int) -> Set[int]:
        """Courses in which the user has completed at least one lesson."""
        return set(self.completed_lessons_by_course(user_id))
