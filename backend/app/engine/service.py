"""
Progress engine facade used by the routers.

Wires the ledger, projector and ownership checks around one injected
database session.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from app.models.course import Course, Lesson
from app.models.progress import LessonCompletion
from app.models.user import UserRole
from . import guard
from .ledger import CompletionLedger
from .projector import ProgressProjector
from .types import CourseDetailView, CourseSummaryView, LessonView


class ProgressEngine:
    """
    Entry point for completion tracking and ownership checks.

    Args:
        db: Session the ledger reads and writes through
    """

    def __init__(self, db: Session):
        self.db = db
        self.ledger = CompletionLedger(db)
        self.projector = ProgressProjector(self.ledger)

    def record_completion(self, user_id: int, lesson_id: int) -> LessonCompletion:
        """Record a completion idempotently. Raises NotFoundError for unknown lessons."""
        return self.ledger.record_completion(user_id, lesson_id)

    def course_view(
        self,
        course: Course,
        lessons: Sequence[Lesson],
        viewer_id: Optional[int],
    ) -> CourseDetailView:
        return self.projector.project_course_detail(course, lessons, viewer_id)

    def course_summary(
        self,
        course: Course,
        lesson_count: int,
        viewer_id: Optional[int],
    ) -> CourseSummaryView:
        return self.projector.project_course_summary(course, lesson_count, viewer_id)

    def course_summaries(
        self,
        courses_with_counts: Iterable[Tuple[Course, int]],
        viewer_id: Optional[int],
    ) -> List[CourseSummaryView]:
        return self.projector.project_course_summaries(courses_with_counts, viewer_id)

    def lesson_view(self, lesson: Lesson, viewer_id: Optional[int]) -> LessonView:
        return self.projector.project_lesson_detail(lesson, viewer_id)

    def authorize_course_mutation(self, course: Course, user_id: int, role: UserRole) -> bool:
        return guard.can_mutate_course(course, user_id, role)

    def authorize_lesson_creation(self, course: Course, user_id: int) -> bool:
        return guard.can_create_lesson(course, user_id)
