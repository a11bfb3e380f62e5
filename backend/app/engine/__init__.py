"""
Course progress and completion tracking engine.

- identity: optional/mandatory caller identity from a bearer token
- guard: ownership predicates for course and lesson mutations
- ledger: idempotent lesson completion records
- projector: completion statistics for course and lesson views
- service: the ProgressEngine facade
"""

from .identity import Identity, resolve_identity, require_identity
from .guard import can_mutate_course, can_create_lesson
from .ledger import CompletionLedger
from .projector import ProgressProjector, calculate_progress
from .service import ProgressEngine
from .types import CourseProgress, LessonView, CourseSummaryView, CourseDetailView

__all__ = [
    "Identity",
    "resolve_identity",
    "require_identity",
    "can_mutate_course",
    "can_create_lesson",
    "CompletionLedger",
    "ProgressProjector",
    "calculate_progress",
    "ProgressEngine",
    "CourseProgress",
    "LessonView",
    "CourseSummaryView",
    "CourseDetailView"
]
