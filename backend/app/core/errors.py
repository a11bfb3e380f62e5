"""
Domain error types for TeachHub.

The engine raises these instead of HTTP exceptions; ``app.main`` maps
them to transport responses.
"""

from fastapi import status


class DomainError(Exception):
    """Base class for errors the API maps to a status code."""
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DomainError):
    """Referenced course, lesson or user does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ForbiddenError(DomainError):
    """Authenticated, but not allowed to perform the action."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class UnauthenticatedError(DomainError):
    """No resolvable identity on a path that requires one."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class ConflictError(DomainError):
    """Write collides with existing state (e.g. duplicate email)."""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"
