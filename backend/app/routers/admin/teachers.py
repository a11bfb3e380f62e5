"""
Admin teachers router for TeachHub.

Lists teacher accounts waiting for approval and approves them.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.database import get_by_id, get_db
from app.core.errors import NotFoundError
from app.engine.identity import Identity
from app.models.user import User, UserRole
from app.routers.admin import get_current_admin
from app.schemas.admin import TeacherApproved
from app.schemas.auth import UserResponse


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/pending", response_model=List[UserResponse])
async def list_pending_teachers(
    db: Session = Depends(get_db)
) -> List[User]:
    """
    List teachers whose accounts have not been approved yet.
    """
    return list(
        db.scalars(
            select(User)
            .where(
                User.role == UserRole.TEACHER.value,
                User.is_approved.is_(False)
            )
            .order_by(User.created_at, User.id)
        )
    )


@router.put("/{user_id}/approve", response_model=TeacherApproved)
async def approve_teacher(
    user_id: int,
    admin: Identity = Depends(get_current_admin),
    db: Session = Depends(get_db)
) -> dict:
    """
    Approve a teacher so they can log in.
    """
    user = get_by_id(db, User, user_id)

    if not user or user.role != UserRole.TEACHER.value:
        raise NotFoundError("Teacher not found")

    user.is_approved = True
    db.commit()
    db.refresh(user)

    logger.info(f"Teacher approved: user_id={user.id} by admin_id={admin.user_id}")

    return {
        "message": "Teacher approved successfully",
        "user": UserResponse.model_validate(user)
    }
