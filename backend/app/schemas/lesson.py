"""
Lesson schemas for TeachHub.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import Field

from app.models.course import LessonType
from .base import CamelModel


class LessonCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    subtitle: Optional[str] = Field(None, max_length=255)
    type: LessonType = LessonType.TEXT
    course_id: int
    content: Dict[str, Any]


class LessonResponse(CamelModel):
    id: int
    course_id: int
    title: str
    subtitle: Optional[str] = None
    type: LessonType
    content: Dict[str, Any]
    created_at: datetime


class LessonDetail(CamelModel):
    id: int
    course_id: int
    title: str
    subtitle: Optional[str] = None
    type: LessonType
    content: Dict[str, Any]
    is_completed: bool


class CompletionResponse(CamelModel):
    message: str
    lesson_id: int
    completed_at: datetime
