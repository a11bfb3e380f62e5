"""
Core module for the TeachHub backend.

This module contains core functionality including:
- Configuration management
- Database engine and session factories
- Security utilities (JWT, password hashing)
- Domain error types
"""

from .config import settings
from .database import get_db, get_by_id, create_db_engine, create_session_factory
from .errors import (
    DomainError,
    NotFoundError,
    ForbiddenError,
    UnauthenticatedError,
    ConflictError
)
from .security import (
    create_access_token,
    verify_password,
    get_password_hash,
    verify_token
)

__all__ = [
    "settings",
    "get_db",
    "get_by_id",
    "create_db_engine",
    "create_session_factory",
    "DomainError",
    "NotFoundError",
    "ForbiddenError",
    "UnauthenticatedError",
    "ConflictError",
    "create_access_token",
    "verify_password",
    "get_password_hash",
    "verify_token"
]
