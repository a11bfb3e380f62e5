"""
Courses router for TeachHub.

Handles course creation, listing and details with per-viewer progress,
and owner-only updates and publishing.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy import select, func
from sqlalchemy.orm import Session, joinedload, selectinload

from app.core.database import get_by_id, get_db, id_in_range
from app.core.errors import ForbiddenError, NotFoundError
from app.engine import ProgressEngine
from app.engine.identity import Identity
from app.engine.types import CourseDetailView, CourseSummaryView
from app.models.course import Course, Lesson, ContentStatus
from app.routers.auth import (
    get_current_identity,
    get_current_teacher,
    get_optional_identity,
    get_progress_engine
)
from app.schemas.course import (
    CourseCreate,
    CourseUpdate,
    CourseResponse,
    CourseStatus,
    CourseListItem,
    CourseDetail,
    CourseLessonItem,
    CreatorSummary
)


logger = logging.getLogger(__name__)

router = APIRouter()


def _viewer_id(identity: Optional[Identity]) -> Optional[int]:
    return identity.user_id if identity is not None else None


def _list_item(view: CourseSummaryView) -> CourseListItem:
    return CourseListItem(
        **CourseResponse.model_validate(view.course).model_dump(),
        creator=CreatorSummary.model_validate(view.course.creator),
        number_of_lessons=view.stats.number_of_lessons,
        completed_lessons=view.stats.completed_lessons,
        progress=view.stats.progress
    )


def _detail(view: CourseDetailView) -> CourseDetail:
    return CourseDetail(
        **CourseResponse.model_validate(view.course).model_dump(),
        creator=CreatorSummary.model_validate(view.course.creator),
        number_of_lessons=view.stats.number_of_lessons,
        completed_lessons=view.stats.completed_lessons,
        progress=view.stats.progress,
        lessons=[
            CourseLessonItem(
                id=lesson.id,
                title=lesson.title,
                subtitle=lesson.subtitle,
                type=lesson.type,
                is_completed=lesson.is_completed
            )
            for lesson in view.lessons
        ]
    )


def _get_owned_course(
    db: Session,
    engine: ProgressEngine,
    course_id: int,
    identity: Identity
) -> Course:
    course = get_by_id(db, Course, course_id)

    if not course:
        raise NotFoundError("Course not found")

    if not engine.authorize_course_mutation(course, identity.user_id, identity.role):
        logger.warning(
            f"Course mutation denied: course_id={course_id} user_id={identity.user_id}"
        )
        raise ForbiddenError("You can only modify your own courses")

    return course


@router.post("", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
async def create_course(
    course_data: CourseCreate,
    teacher: Identity = Depends(get_current_teacher),
    db: Session = Depends(get_db)
) -> Course:
    """
    Create a new course owned by the caller. Teacher or admin only.
    """
    new_course = Course(
        **course_data.model_dump(),
        created_by=teacher.user_id,
        status=ContentStatus.DRAFT.value
    )

    db.add(new_course)
    db.commit()
    db.refresh(new_course)

    logger.info(f"Course created: course_id={new_course.id} by user_id={teacher.user_id}")

    return new_course


@router.get("", response_model=List[CourseListItem])
async def list_courses(
    identity: Optional[Identity] = Depends(get_optional_identity),
    engine: ProgressEngine = Depends(get_progress_engine),
    db: Session = Depends(get_db)
) -> List[CourseListItem]:
    """
    List all courses with lesson counts and the caller's progress.

    Drafts are listed alongside published courses.
    """
    courses = db.scalars(
        select(Course)
        .options(joinedload(Course.creator))
        .order_by(Course.created_at.desc(), Course.id.desc())
    ).all()

    lesson_counts = dict(
        db.execute(
            select(Lesson.course_id, func.count(Lesson.id)).group_by(Lesson.course_id)
        ).all()
    )

    views = engine.course_summaries(
        ((course, lesson_counts.get(course.id, 0)) for course in courses),
        _viewer_id(identity)
    )
    return [_list_item(view) for view in views]


@router.get("/{course_id}", response_model=CourseDetail)
async def get_course(
    course_id: int,
    identity: Optional[Identity] = Depends(get_optional_identity),
    engine: ProgressEngine = Depends(get_progress_engine),
    db: Session = Depends(get_db)
) -> CourseDetail:
    """
    Get a course with its lessons and the caller's completion state.
    """
    course = None
    if id_in_range(course_id):
        course = db.scalars(
            select(Course)
            .where(Course.id == course_id)
            .options(joinedload(Course.creator), selectinload(Course.lessons))
        ).first()

    if not course:
        raise NotFoundError("Course not found")

    view = engine.course_view(course, course.lessons, _viewer_id(identity))
    return _detail(view)


@router.put("/{course_id}", response_model=CourseResponse)
async def update_course(
    course_id: int,
    course_update: CourseUpdate,
    identity: Identity = Depends(get_current_identity),
    engine: ProgressEngine = Depends(get_progress_engine),
    db: Session = Depends(get_db)
) -> Course:
    """
    Update a course. Only its creator may do this.
    """
    course = _get_owned_course(db, engine, course_id, identity)

    changes = {}
    for field, value in course_update.model_dump(exclude_unset=True).items():
        # title and description are required columns
        if value is None and field in ("title", "description"):
            continue
        if getattr(course, field) != value:
            changes[field] = value
            setattr(course, field, value)

    if changes:
        db.commit()
        db.refresh(course)
        logger.info(f"Course updated: course_id={course_id} fields={sorted(changes)}")

    return course


@router.post("/{course_id}/publish", response_model=CourseStatus)
async def publish_course(
    course_id: int,
    identity: Identity = Depends(get_current_identity),
    engine: ProgressEngine = Depends(get_progress_engine),
    db: Session = Depends(get_db)
) -> dict:
    """
    Publish a course. The status is informational and does not hide drafts.
    """
    course = _get_owned_course(db, engine, course_id, identity)

    if course.is_published:
        return {
            "message": "Course is already published",
            "status": course.status,
            "published_at": course.published_at
        }

    course.status = ContentStatus.PUBLISHED.value
    course.published_at = datetime.now(timezone.utc)
    db.commit()

    logger.info(f"Course published: course_id={course_id}")

    return {
        "message": "Course published successfully",
        "status": course.status,
        "published_at": course.published_at
    }


@router.post("/{course_id}/unpublish", response_model=CourseStatus)
async def unpublish_course(
    course_id: int,
    identity: Identity = Depends(get_current_identity),
    engine: ProgressEngine = Depends(get_progress_engine),
    db: Session = Depends(get_db)
) -> dict:
    """
    Move a course back to draft.
    """
    course = _get_owned_course(db, engine, course_id, identity)

    if not course.is_published:
        return {"message": "Course is not published", "status": course.status}

    course.status = ContentStatus.DRAFT.value
    db.commit()

    logger.info(f"Course unpublished: course_id={course_id}")

    return {"message": "Course unpublished successfully", "status": course.status}
