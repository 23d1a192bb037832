"""Progress tracking API endpoints."""

import logging

from fastapi import APIRouter

from academy.auth import CurrentAuth

from .schemas import ProgressEnvelope, ProgressResponse, ProgressUpdate, StreakResponse
from .service import ProgressService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/progress", tags=["progress"])


@router.post("")
async def update_progress(update: ProgressUpdate, auth: CurrentAuth) -> ProgressEnvelope:
    """Create or update progress for a lesson."""
    service = ProgressService(auth.session)
    progress = await service.upsert_progress(auth.user_id, update.lesson_id, update.status, update.percent)
    return ProgressEnvelope(progress=ProgressResponse.model_validate(progress))


@router.get("/streak")
async def get_streak(auth: CurrentAuth) -> StreakResponse:
    """Get the learner's current daily completion streak."""
    service = ProgressService(auth.session)
    return StreakResponse(streak=await service.get_streak(auth.user_id))
