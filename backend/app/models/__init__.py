"""
Database models for TeachHub.

This module contains all SQLAlchemy models for the application:
- User model for authentication, roles and approval
- Course and Lesson models for learning content
- LessonCompletion for tracking which lessons a user finished
"""

from app.core.database import Base

# Import all models to ensure they're registered with SQLAlchemy
from .user import User, UserRole
from .course import Course, Lesson, ContentStatus, LessonType
from .progress import LessonCompletion

# Export all models
__all__ = [
    "Base",
    "User",
    "UserRole",
    "Course",
    "Lesson",
    "ContentStatus",
    "LessonType",
    "LessonCompletion"
]
