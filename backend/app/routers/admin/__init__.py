"""
Admin routers for TeachHub.

This module contains all admin-specific API endpoints:
- teachers: reviewing and approving teacher registrations
"""

from fastapi import APIRouter, Depends

from app.core.errors import ForbiddenError
from app.engine.identity import Identity
from app.routers.auth import get_current_identity


# Dependency to verify admin access
async def get_current_admin(
    identity: Identity = Depends(get_current_identity)
) -> Identity:
    """
    Verify that the current user has admin privileges.
    """
    if not identity.is_admin:
        raise ForbiddenError("Require Admin Role")
    return identity


# Imported after get_current_admin is defined; sub-routers depend on it
from .teachers import router as teachers_router  # noqa: E402


# Create admin router
admin_router = APIRouter()

admin_router.include_router(
    teachers_router,
    prefix="/teachers",
    tags=["admin-teachers"],
    dependencies=[Depends(get_current_admin)]
)
