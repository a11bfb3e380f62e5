"""
API routers for TeachHub.

This module contains all API endpoint routers:
- auth: Registration and login, plus identity dependencies
- courses: Course CRUD, listing and progress views
- lessons: Lesson creation, details and completion
- admin: Teacher approval
"""

from fastapi import APIRouter

# Import individual routers
from .auth import router as auth_router
from .courses import router as courses_router
from .lessons import router as lessons_router

# Import admin sub-routers
from .admin import admin_router

# Create main API router
api_router = APIRouter()

# Include all routers with their prefixes
api_router.include_router(
    auth_router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    courses_router,
    prefix="/courses",
    tags=["courses"]
)

api_router.include_router(
    lessons_router,
    prefix="/lessons",
    tags=["lessons"]
)

api_router.include_router(
    admin_router,
    prefix="/admin",
    tags=["admin"]
)

# Export all routers
__all__ = [
    "api_router",
    "auth_router",
    "courses_router",
    "lessons_router",
    "admin_router"
]
