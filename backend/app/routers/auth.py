"""
Authentication router for TeachHub.

Handles student and teacher registration and login, and provides the
identity dependencies the other routers use.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import get_by_id, get_db
from app.core.errors import ConflictError, ForbiddenError, NotFoundError, UnauthenticatedError
from app.core.security import create_access_token, get_password_hash, verify_password
from app.engine import ProgressEngine
from app.engine.identity import Identity, resolve_identity, require_identity
from app.models.user import User, UserRole
from app.schemas.auth import (
    AuthResponse,
    TeacherRegistered,
    UserLogin,
    UserRegister,
    UserResponse
)


logger = logging.getLogger(__name__)

router = APIRouter()

# Bearer scheme; auto_error is off so anonymous reads reach the handler
bearer_scheme = HTTPBearer(auto_error=False)


# Dependencies
def _token(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[Identity]:
    """
    Identity of the caller, or None for anonymous requests.
    """
    return resolve_identity(_token(credentials))


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> Identity:
    """
    Identity of the caller; rejects requests without a valid token
    or whose user no longer exists.
    """
    identity = require_identity(_token(credentials))

    if get_by_id(db, User, identity.user_id) is None:
        logger.warning(f"Token for unknown user rejected: user_id={identity.user_id}")
        raise UnauthenticatedError("Could not validate credentials")

    return identity


def get_current_teacher(
    identity: Identity = Depends(get_current_identity)
) -> Identity:
    """
    Require the teacher role (admins pass as well).
    """
    if not identity.is_teacher:
        raise ForbiddenError("Require Teacher Role")
    return identity


def get_progress_engine(db: Session = Depends(get_db)) -> ProgressEngine:
    return ProgressEngine(db)


def _issue_token(user: User) -> str:
    return create_access_token(
        subject=str(user.id),
        additional_claims={"role": user.role}
    )


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        **UserResponse.model_validate(user).model_dump(),
        access_token=_issue_token(user)
    )


def _create_user(db: Session, user_data: UserRegister, role: UserRole, is_approved: bool) -> User:
    new_user = User(
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email.lower(),
        hashed_password=get_password_hash(user_data.password),
        role=role.value,
        is_approved=is_approved
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already exists")
    db.refresh(new_user)
    return new_user


# Endpoints
@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: Session = Depends(get_db)
) -> AuthResponse:
    """
    Register a new student. Students are approved immediately.
    """
    new_user = _create_user(db, user_data, UserRole.STUDENT, is_approved=True)
    logger.info(f"Student registered: user_id={new_user.id}")

    return _auth_response(new_user)


@router.post("/register/teacher", response_model=TeacherRegistered, status_code=status.HTTP_201_CREATED)
async def register_teacher(
    user_data: UserRegister,
    db: Session = Depends(get_db)
) -> dict:
    """
    Register a new teacher. The account stays pending until an admin approves it.
    """
    new_user = _create_user(db, user_data, UserRole.TEACHER, is_approved=False)
    logger.info(f"Teacher registered, pending approval: user_id={new_user.id}")

    return {
        "message": "Teacher registered successfully. Please wait for admin approval.",
        "user_id": new_user.id
    }


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: Session = Depends(get_db)
) -> AuthResponse:
    """
    Log in with email and password.
    """
    user = db.scalars(
        select(User).where(User.email == credentials.email.lower())
    ).first()

    if not user:
        raise NotFoundError("User not found")

    if not verify_password(credentials.password, user.hashed_password):
        logger.warning(f"Failed login attempt: user_id={user.id}")
        raise UnauthenticatedError("Invalid password")

    if not user.can_login:
        raise ForbiddenError("Your account is pending approval. Please contact the admin.")

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()

    return _auth_response(user)
