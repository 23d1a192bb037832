"""AuthContext and FastAPI dependencies pairing the learner id with a session."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from academy.auth.config import get_user_id
from academy.database.session import DbSession


class UserContext:
    """Request-scoped learner context."""

    def __init__(self, user_id: UUID, session: AsyncSession) -> None:
        self.user_id = user_id
        self.session = session


async def _get_user_id(request: Request) -> UUID:
    """Resolve the learner id once per request and remember it on request.state."""
    if getattr(request.state, "user_id", None) is not None:
        return request.state.user_id
    user_id = await get_user_id(request)
    request.state.user_id = user_id
    return user_id


async def get_auth_context(
    session: DbSession,
    user_id: Annotated[UUID, Depends(_get_user_id)],
) -> UserContext:
    """Build the request-scoped UserContext."""
    return UserContext(user_id=user_id, session=session)


CurrentAuth = Annotated[UserContext, Depends(get_auth_context)]
