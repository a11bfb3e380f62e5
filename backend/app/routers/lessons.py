"""
Lessons router for TeachHub.

Handles lesson creation under owned courses, lesson details with the
caller's completion flag, and marking lessons complete.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_by_id, get_db
from app.core.errors import ForbiddenError, NotFoundError
from app.engine import ProgressEngine
from app.engine.identity import Identity
from app.models.course import Course, Lesson
from app.routers.auth import (
    get_current_identity,
    get_current_teacher,
    get_optional_identity,
    get_progress_engine
)
from app.schemas.lesson import (
    LessonCreate,
    LessonResponse,
    LessonDetail,
    CompletionResponse
)


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=LessonResponse, status_code=status.HTTP_201_CREATED)
async def create_lesson(
    lesson_data: LessonCreate,
    teacher: Identity = Depends(get_current_teacher),
    engine: ProgressEngine = Depends(get_progress_engine),
    db: Session = Depends(get_db)
) -> Lesson:
    """
    Create a lesson under a course the caller owns.
    """
    course = get_by_id(db, Course, lesson_data.course_id)

    if not course:
        raise NotFoundError("Course not found")

    if not engine.authorize_lesson_creation(course, teacher.user_id):
        logger.warning(
            f"Lesson creation denied: course_id={course.id} user_id={teacher.user_id}"
        )
        raise ForbiddenError("You can only add lessons to your own courses")

    new_lesson = Lesson(
        course_id=course.id,
        title=lesson_data.title,
        subtitle=lesson_data.subtitle,
        type=lesson_data.type.value,
        content=lesson_data.content
    )

    db.add(new_lesson)
    db.commit()
    db.refresh(new_lesson)

    logger.info(f"Lesson created: lesson_id={new_lesson.id} course_id={course.id}")

    return new_lesson


@router.get("/{lesson_id}", response_model=LessonDetail)
async def get_lesson(
    lesson_id: int,
    identity: Optional[Identity] = Depends(get_optional_identity),
    engine: ProgressEngine = Depends(get_progress_engine),
    db: Session = Depends(get_db)
) -> LessonDetail:
    """
    Get a lesson with full content and whether the caller completed it.
    """
    lesson = get_by_id(db, Lesson, lesson_id)

    if not lesson:
        raise NotFoundError("Lesson not found")

    viewer_id = identity.user_id if identity is not None else None
    view = engine.lesson_view(lesson, viewer_id)
    return LessonDetail.model_validate(view)


@router.post("/{lesson_id}/complete", response_model=CompletionResponse)
async def complete_lesson(
    lesson_id: int,
    identity: Identity = Depends(get_current_identity),
    engine: ProgressEngine = Depends(get_progress_engine),
    db: Session = Depends(get_db)
) -> dict:
    """
    Mark a lesson as complete. Safe to repeat; only the timestamp changes.
    """
    completion = engine.record_completion(identity.user_id, lesson_id)
    db.commit()

    logger.info(f"Lesson completed: lesson_id={lesson_id} user_id={identity.user_id}")

    return {
        "message": "Lesson marked as complete",
        "lesson_id": lesson_id,
        "completed_at": completion.completed_at
    }
