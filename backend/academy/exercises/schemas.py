"""Schemas for exercise attempts."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


MAX_SNAPSHOT_LENGTH = 12000
MAX_FEEDBACK_LENGTH = 1200


class ExerciseAttemptCreate(BaseModel):
    """Attempt reported after the sandbox harness ran the learner's code."""

    exercise_id: UUID = Field(..., description="Exercise ID")
    html_snapshot: str = Field("", max_length=MAX_SNAPSHOT_LENGTH)
    css_snapshot: str = Field("", max_length=MAX_SNAPSHOT_LENGTH)
    js_snapshot: str = Field("", max_length=MAX_SNAPSHOT_LENGTH)
    result: Literal["PASS", "FAIL", "ERROR"] = Field(..., description="Harness verdict")
    feedback: str = Field("", max_length=MAX_FEEDBACK_LENGTH)


class ExerciseAttemptResponse(BaseModel):
    id: UUID
    user_id: UUID
    exercise_id: UUID
    html_snapshot: str
    css_snapshot: str
    js_snapshot: str
    result: str
    feedback: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ExerciseAttemptEnvelope(BaseModel):
    attempt: ExerciseAttemptResponse


class ExerciseAttemptList(BaseModel):
    attempts: list[ExerciseAttemptResponse] = Field(default_factory=list)
