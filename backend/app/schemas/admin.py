"""
Admin schemas for TeachHub.
"""

from .auth import UserResponse
from .base import CamelModel


class TeacherApproved(CamelModel):
    message: str
    user: UserResponse
