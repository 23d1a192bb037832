"""Learner profile persistence."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from .models import LearnerProfile
from .schemas import ProfileUpdate


logger = logging.getLogger(__name__)


class ProfileService:
    """Service for reading and writing learner profiles."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_profile(self, user_id: UUID) -> LearnerProfile | None:
        return await self.session.get(LearnerProfile, user_id)

    async def upsert_profile(self, user_id: UUID, data: ProfileUpdate) -> LearnerProfile:
        """Store onboarding answers and mark onboarding complete."""
        profile = await self.session.get(LearnerProfile, user_id)
        if profile is None:
            profile = LearnerProfile(user_id=user_id)
            self.session.add(profile)

        profile.age_range = data.age_range
        profile.experience_level = data.experience_level
        profile.goals = [goal.strip() for goal in data.goals if goal.strip()]
        profile.learning_preferences = list(data.learning_preferences)
        profile.weekly_time_commitment_h = data.weekly_time_commitment_h
        profile.onboarding_complete = True

        await self.session.commit()
        await self.session.refresh(profile)

        logger.info(f"Saved profile for user {user_id} with {len(profile.goals)} goals")
        return profile
