"""Schemas for the learner profile (onboarding answers)."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


AgeRange = Literal["UNDER_13", "AGE_13_17", "AGE_18_24", "AGE_25_44", "AGE_45_60", "AGE_60_PLUS"]
ExperienceLevel = Literal["NONE", "BASIC_PAST", "BASIC", "INTERMEDIATE", "ADVANCED"]
LearningPreference = Literal["VISUAL", "STEP_BY_STEP", "PROJECT_FIRST", "THEORY_FIRST"]


class ProfileUpdate(BaseModel):
    """Onboarding form submission."""

    age_range: AgeRange
    experience_level: ExperienceLevel
    goals: list[str] = Field(..., min_length=1, max_length=6, description="Learning goals in the learner's words")
    learning_preferences: list[LearningPreference] = Field(..., min_length=1, max_length=4)
    weekly_time_commitment_h: int = Field(..., ge=1, le=40, description="Hours per week")
    avoid_phi_acknowledged: Literal[True] = Field(..., description="Learner acknowledged the no-PHI policy")

    model_config = ConfigDict(extra="forbid")


class ProfileResponse(BaseModel):
    user_id: UUID
    age_range: str | None = None
    experience_level: str | None = None
    goals: list[str] = Field(default_factory=list)
    learning_preferences: list[str] = Field(default_factory=list)
    weekly_time_commitment_h: int
    onboarding_complete: bool
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
