"""Schemas for progress API."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProgressUpdate(BaseModel):
    """Schema for updating a lesson's progress."""

    lesson_id: UUID = Field(..., description="Lesson ID")
    status: Literal["NOT_STARTED", "IN_PROGRESS", "COMPLETED"] = Field(..., description="Lesson status")
    percent: int = Field(..., ge=0, le=100, description="Completion percentage")


class ProgressResponse(BaseModel):
    """Schema for a stored progress record."""

    id: UUID
    user_id: UUID
    lesson_id: UUID
    status: str
    percent: int
    last_seen_at: datetime | None = None
    completed_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ProgressEnvelope(BaseModel):
    progress: ProgressResponse


class StreakResponse(BaseModel):
    """Consecutive days with at least one completed lesson."""

    streak: int
