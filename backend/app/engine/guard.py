"""
Ownership checks for course and lesson mutations.

Pure predicates over domain objects. Callers turn a ``False`` into a
forbidden response and a missing course into not-found.
"""

from app.models.course import Course
from app.models.user import UserRole


def can_mutate_course(course: Course, acting_user_id: int, acting_role: UserRole) -> bool:
    """
    Whether the acting user may update or (un)publish the course.

    Only the creator may. ``acting_role`` is accepted but grants nothing:
    admins approve teachers, they do not edit other people's courses.
    """
    return course.created_by == acting_user_id


def can_create_lesson(course: Course, acting_user_id: int) -> bool:
    """Whether the acting user may add a lesson under the course."""
    return course.created_by == acting_user_id
