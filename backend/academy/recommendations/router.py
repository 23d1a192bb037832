"""Recommendation API endpoints."""

import logging

from fastapi import APIRouter

from academy.auth import CurrentAuth

from .schemas import RecommendationEnvelope, RecommendationSnapshotResponse
from .service import RecommendationService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/recommendations", tags=["recommendations"])


@router.get("")
async def get_latest_recommendation(auth: CurrentAuth) -> RecommendationEnvelope:
    """Return the most recent stored recommendation without recomputing."""
    service = RecommendationService(auth.session)
    snapshot = await service.get_latest(auth.user_id)
    if snapshot is None:
        return RecommendationEnvelope(recommendation=None)
    return RecommendationEnvelope(recommendation=RecommendationSnapshotResponse.model_validate(snapshot))


@router.post("")
async def refresh_recommendation(auth: CurrentAuth) -> RecommendationEnvelope:
    """Recompute the recommendation from the learner's current signals."""
    service = RecommendationService(auth.session)
    snapshot = await service.calculate_and_store(auth.user_id)
    return RecommendationEnvelope(recommendation=RecommendationSnapshotResponse.model_validate(snapshot))
