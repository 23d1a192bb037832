"""Schemas for the recommendations API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PathStepResponse(BaseModel):
    """One step of the personalized path."""

    lesson_id: UUID = Field(..., description="Lesson ID")
    title: str = Field(..., description="Lesson title")
    reason: str = Field(..., description="Why this lesson is on the path")


class RecommendationSnapshotResponse(BaseModel):
    """Stored recommendation as returned to clients."""

    id: UUID = Field(..., description="Snapshot ID")
    user_id: UUID = Field(..., description="Learner ID")
    lesson_id: UUID | None = Field(None, description="Recommended lesson, null when everything is completed")
    module_id: UUID | None = Field(None, description="Module of the recommended lesson")
    reason: str = Field(..., description="Human-readable explanation")
    personalized_path: list[PathStepResponse] = Field(default_factory=list, description="Suggested next steps")
    created_at: datetime = Field(..., description="When the recommendation was computed")

    model_config = ConfigDict(from_attributes=True)


class RecommendationEnvelope(BaseModel):
    """Wrapper matching the `{"recommendation": ...}` response shape."""

    recommendation: RecommendationSnapshotResponse | None = None
