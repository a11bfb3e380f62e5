"""
View types produced by the progress projector.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.models.course import Course, Lesson


@dataclass(frozen=True)
class CourseProgress:
    """Completion statistics for one (course, viewer) pair."""

    number_of_lessons: int
    completed_lessons: int
    progress: int  # integer percentage, 0-100


@dataclass(frozen=True)
class LessonView:
    """A lesson annotated with whether the viewer completed it."""

    id: int
    course_id: int
    title: str
    subtitle: Optional[str]
    type: str
    content: Dict[str, Any]
    is_completed: bool

    @classmethod
    def from_lesson(cls, lesson: Lesson, is_completed: bool) -> "LessonView":
        return cls(
            id=lesson.id,
            course_id=lesson.course_id,
            title=lesson.title,
            subtitle=lesson.subtitle,
            type=lesson.type,
            content=lesson.content,
            is_completed=is_completed,
        )


@dataclass(frozen=True)
class CourseSummaryView:
    """List-row projection: a course and its statistics, no lesson bodies."""

    course: Course
    stats: CourseProgress


@dataclass(frozen=True)
class CourseDetailView:
    """Detail projection: statistics plus every lesson with its flag."""

    course: Course
    stats: CourseProgress
    lessons: List[LessonView] = field(default_factory=list)
