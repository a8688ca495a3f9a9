"""
Backend API key check for write operations.

Upload, delete and tag mutations require the ``x-api-key`` header to match
BACKEND_API_KEY. Development mode skips the check.
"""

from typing import Annotated

from fastapi import Depends, Header

from portfolio_api.config import Settings, get_settings
from portfolio_api.core.exceptions import ForbiddenError
from portfolio_api.core.security import constant_time_compare


async def require_api_key(
    settings: Annotated[Settings, Depends(get_settings)],
    x_api_key: str | None = Header(default=None),
) -> None:
    """
    Dependency that rejects requests without a valid backend API key.

    Raises:
        ForbiddenError: If the key is missing or does not match
    """
    if settings.DEV_MODE:
        return

    if not x_api_key:
        raise ForbiddenError("Forbidden: No backend API key provided.")

    # Fail closed when no key is configured
    if not settings.BACKEND_API_KEY or not constant_time_compare(x_api_key, settings.BACKEND_API_KEY):
        raise ForbiddenError("Forbidden: invalid backend API key.")


RequireApiKey = Depends(require_api_key)
