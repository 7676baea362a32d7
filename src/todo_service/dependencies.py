"""Shared FastAPI dependencies."""

from fastapi import Header

from .errors import NotAuthenticatedError

OWNER_HEADER = "X-User-Id"


def require_owner(owner_id: str | None) -> str:
    """Return the caller identity or fail with 401."""
    if not owner_id or not owner_id.strip():
        raise NotAuthenticatedError("Login required.")
    return owner_id.strip()


def get_current_owner(x_user_id: str | None = Header(default=None, alias=OWNER_HEADER)) -> str:
    """Caller identity as forwarded by the authenticating gateway."""
    return require_owner(x_user_id)
