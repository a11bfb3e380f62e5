"""
Caller identity resolved from a bearer token.

Read paths take ``Optional[Identity]``: ``None`` is a normal value meaning
an anonymous viewer. Write paths go through ``require_identity``.
"""

from dataclasses import dataclass
from typing import Optional

from app.core.errors import UnauthenticatedError
from app.core.security import verify_token
from app.models.user import UserRole


@dataclass(frozen=True)
class Identity:
    """The acting user for a request."""

    user_id: int
    role: UserRole

    @property
    def is_teacher(self) -> bool:
        return self.role in (UserRole.TEACHER, UserRole.ADMIN)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def resolve_identity(token: Optional[str]) -> Optional[Identity]:
    """
    Resolve a token to an identity.

    Missing, expired or malformed tokens all yield ``None``; this never
    raises.
    """
    if not token:
        return None

    payload = verify_token(token)
    if payload is None:
        return None

    try:
        return Identity(user_id=int(payload["sub"]), role=UserRole(payload["role"]))
    except (KeyError, TypeError, ValueError):
        return None


def require_identity(token: Optional[str]) -> Identity:
    """Resolve a token or raise ``UnauthenticatedError``."""
    if not token:
        raise UnauthenticatedError("No token provided")

    identity = resolve_identity(token)
    if identity is None:
        raise UnauthenticatedError("Unauthorized")
    return identity
