"""Shared dependencies for API routes."""
from fastapi import Header

from app.config.settings import get_settings

settings = get_settings()


async def get_current_user_id(
    x_user_id: str | None = Header(None, alias="X-User-Id"),
) -> str:
    """Get the acting user id.

    Falls back to default_user_id if no X-User-Id header is provided.

    Args:
        x_user_id: X-User-Id header value

    Returns:
        Acting user id recorded as creator of new programs, plans and items
    """
    if not x_user_id or not x_user_id.strip():
        return settings.default_user_id
    return x_user_id.strip()
