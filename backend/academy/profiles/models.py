"""Learner profile captured during onboarding."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from academy.database.base import Base, JSONType


__all__ = ["LearnerProfile"]


class LearnerProfile(Base):
    """Onboarding answers used to personalize recommendations."""

    __tablename__ = "learner_profiles"

    user_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    age_range: Mapped[str | None] = mapped_column(String(20), nullable=True)
    experience_level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    goals: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    learning_preferences: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    weekly_time_commitment_h: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    onboarding_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
