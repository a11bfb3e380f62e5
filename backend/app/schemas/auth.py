"""
Authentication schemas for TeachHub.
"""

from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from app.models.user import UserRole
from .base import CamelModel


class UserRegister(CamelModel):
    """Body for both student and teacher registration."""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    role: UserRole
    is_approved: bool
    created_at: Optional[datetime] = None


class AuthResponse(UserResponse):
    """User info plus a bearer token."""
    access_token: str
    token_type: str = "bearer"


class TeacherRegistered(CamelModel):
    message: str
    user_id: int
