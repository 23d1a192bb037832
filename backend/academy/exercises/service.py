"""Recording and listing exercise attempts."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.exceptions import ResourceNotFoundError

from .models import Exercise, ExerciseAttempt
from .schemas import ExerciseAttemptCreate


logger = logging.getLogger(__name__)

RECENT_ATTEMPTS_LIMIT = 20


class ExerciseService:
    """Service for exercise attempts."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def record_attempt(self, user_id: UUID, data: ExerciseAttemptCreate) -> ExerciseAttempt:
        """Store an attempt for an existing exercise."""
        if await self.session.get(Exercise, data.exercise_id) is None:
            raise ResourceNotFoundError("Exercise", str(data.exercise_id))

        attempt = ExerciseAttempt(user_id=user_id, **data.model_dump())
        self.session.add(attempt)
        await self.session.commit()
        await self.session.refresh(attempt)

        logger.info(f"Recorded {data.result} attempt for user {user_id}, exercise {data.exercise_id}")
        return attempt

    async def list_attempts(self, user_id: UUID, exercise_id: UUID) -> list[ExerciseAttempt]:
        """Newest attempts first, capped at RECENT_ATTEMPTS_LIMIT."""
        result = await self.session.execute(
            select(ExerciseAttempt)
            .where(ExerciseAttempt.user_id == user_id, ExerciseAttempt.exercise_id == exercise_id)
            .order_by(ExerciseAttempt.created_at.desc())
            .limit(RECENT_ATTEMPTS_LIMIT)
        )
        return list(result.scalars().all())
