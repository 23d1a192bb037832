"""Learner identity resolution.

Sessions and credentials live outside this service. In single-user mode every
request belongs to DEFAULT_USER_ID; in header mode a trusted gateway forwards
the authenticated learner id.
"""

import logging
from uuid import UUID

from fastapi import Request

from academy.auth.exceptions import InvalidUserHeaderError, MissingUserHeaderError, UnknownAuthProviderError
from academy.config.settings import get_settings


logger = logging.getLogger(__name__)

DEFAULT_USER_ID = UUID("00000000-0000-0000-0000-000000000001")


async def get_user_id(request: Request) -> UUID:
    """Resolve the learner id for the current request."""
    settings = get_settings()

    if settings.AUTH_PROVIDER == "none":
        if settings.ENVIRONMENT == "production":
            logger.error("AUTH_PROVIDER='none' is not allowed in production!")
            msg = "Single-user mode (AUTH_PROVIDER='none') is not allowed in production."
            raise ValueError(msg)
        return DEFAULT_USER_ID

    if settings.AUTH_PROVIDER == "header":
        header = settings.AUTH_USER_HEADER
        raw_value = request.headers.get(header)
        if not raw_value:
            logger.warning(f"Request to {request.url.path} without {header} header")
            raise MissingUserHeaderError(header)
        try:
            return UUID(raw_value.strip())
        except ValueError as e:
            raise InvalidUserHeaderError(header) from e

    logger.error(f"Unknown auth provider: {settings.AUTH_PROVIDER}")
    raise UnknownAuthProviderError(settings.AUTH_PROVIDER)
