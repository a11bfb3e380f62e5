"""
Progress projector.

Derives per-course and per-lesson completion statistics for a viewer.
Nothing here writes. A viewer of ``None`` is an anonymous read and always
sees zero progress, whatever the ledger holds for other users.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from app.models.course import Course, Lesson
from .ledger import CompletionLedger
from .types import CourseDetailView, CourseProgress, CourseSummaryView, LessonView


def calculate_progress(completed: int, total: int) -> int:
    """
    Integer completion percentage, rounded half up.

    Uses integer arithmetic on the exact ratio, so 1/3 -> 33, 2/3 -> 67
    and 1/8 (12.5) -> 13. An empty course is 0.
    """
    if total <= 0:
        return 0
    completed = max(0, min(completed, total))
    return (200 * completed + total) // (2 * total)


def _stats(completed: int, total: int) -> CourseProgress:
    return CourseProgress(
        number_of_lessons=total,
        completed_lessons=completed,
        progress=calculate_progress(completed, total),
    )


class ProgressProjector:
    """Builds view projections on top of a CompletionLedger."""

    def __init__(self, ledger: CompletionLedger):
        self.ledger = ledger

    def project_course_detail(
        self,
        course: Course,
        lessons: Sequence[Lesson],
        viewer_id: Optional[int],
    ) -> CourseDetailView:
        """Full course view with ``is_completed`` on every lesson."""
        if viewer_id is None:
            completed_ids: Set[int] = set()
        else:
            lesson_ids = {lesson.id for lesson in lessons}
            completed_ids = self.ledger.completed_lesson_ids(viewer_id, course.id) & lesson_ids

        return CourseDetailView(
            course=course,
            stats=_stats(len(completed_ids), len(lessons)),
            lessons=[
                LessonView.from_lesson(lesson, lesson.id in completed_ids)
                for lesson in lessons
            ],
        )

    def project_course_summary(
        self,
        course: Course,
        lesson_count: int,
        viewer_id: Optional[int],
        completions: Optional[Mapping[int, Set[int]]] = None,
    ) -> CourseSummaryView:
        """
        List-row statistics for one course.

        ``completions`` is the viewer's ledger partitioned by course (see
        ``CompletionLedger.completed_lessons_by_course``). Pass it when
        projecting many courses so the ledger is read once per list.
        """
        if viewer_id is None:
            return CourseSummaryView(course=course, stats=_stats(0, lesson_count))

        if completions is None:
            completions = self.ledger.completed_lessons_by_course(viewer_id)

        completed = len(completions.get(course.id, ()))
        return CourseSummaryView(course=course, stats=_stats(completed, lesson_count))

    def project_course_summaries(
        self,
        courses_with_counts: Iterable[Tuple[Course, int]],
        viewer_id: Optional[int],
    ) -> List[CourseSummaryView]:
        """Summaries for a whole list with at most one ledger read."""
        completions: Dict[int, Set[int]] = {}
        if viewer_id is not None:
            completions = self.ledger.completed_lessons_by_course(viewer_id)

        return [
            self.project_course_summary(course, count, viewer_id, completions)
            for course, count in courses_with_counts
        ]

    def project_lesson_detail(self, lesson: Lesson, viewer_id: Optional[int]) -> LessonView:
        if viewer_id is None:
            return LessonView.from_lesson(lesson, False)
        return LessonView.from_lesson(lesson, self.ledger.is_completed(viewer_id, lesson.id))
