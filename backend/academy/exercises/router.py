"""Exercise attempt endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from academy.auth import CurrentAuth

from .schemas import ExerciseAttemptCreate, ExerciseAttemptEnvelope, ExerciseAttemptList, ExerciseAttemptResponse
from .service import ExerciseService


router = APIRouter(prefix="/api/v1", tags=["exercises"])


@router.post("/attempts", status_code=status.HTTP_201_CREATED)
async def create_attempt(data: ExerciseAttemptCreate, auth: CurrentAuth) -> ExerciseAttemptEnvelope:
    """Record a sandbox attempt."""
    attempt = await ExerciseService(auth.session).record_attempt(auth.user_id, data)
    return ExerciseAttemptEnvelope(attempt=ExerciseAttemptResponse.model_validate(attempt))


@router.get("/exercises/{exercise_id}/attempts")
async def list_attempts(exercise_id: UUID, auth: CurrentAuth) -> ExerciseAttemptList:
    """List the learner's recent attempts for an exercise."""
    attempts = await ExerciseService(auth.session).list_attempts(auth.user_id, exercise_id)
    return ExerciseAttemptList(attempts=[ExerciseAttemptResponse.model_validate(item) for item in attempts])
