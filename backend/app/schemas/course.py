"""
Course schemas for TeachHub.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import Field

from app.models.course import ContentStatus, LessonType
from app.models.user import UserRole
from .base import CamelModel


class CourseCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    thumbnail: Optional[str] = Field(None, max_length=500)
    duration: Optional[int] = Field(None, ge=0, description="Duration in minutes")


class CourseUpdate(CamelModel):
    """Partial update; only fields present in the body are changed."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    thumbnail: Optional[str] = Field(None, max_length=500)
    duration: Optional[int] = Field(None, ge=0)


class CreatorSummary(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    role: UserRole


class CourseResponse(CamelModel):
    id: int
    title: str
    description: str
    thumbnail: Optional[str] = None
    duration: Optional[int] = None
    status: ContentStatus
    created_by: int
    created_at: datetime
    updated_at: datetime
    published_at: Optional[datetime] = None


class CourseStatus(CamelModel):
    message: str
    status: ContentStatus
    published_at: Optional[datetime] = None


class CourseListItem(CourseResponse):
    creator: CreatorSummary
    number_of_lessons: int
    completed_lessons: int
    progress: int


class CourseLessonItem(CamelModel):
    id: int
    title: str
    subtitle: Optional[str] = None
    type: LessonType
    is_completed: bool


class CourseDetail(CourseListItem):
    lessons: List[CourseLessonItem]
