"""Learner profile endpoints."""

from fastapi import APIRouter

from academy.auth import CurrentAuth
from academy.exceptions import ResourceNotFoundError

from .schemas import ProfileResponse, ProfileUpdate
from .service import ProfileService


router = APIRouter(prefix="/api/v1/profile", tags=["profile"])


@router.get("")
async def get_profile(auth: CurrentAuth) -> ProfileResponse:
    """Get the learner's onboarding profile."""
    profile = await ProfileService(auth.session).get_profile(auth.user_id)
    if profile is None:
        raise ResourceNotFoundError("Profile", str(auth.user_id))
    return ProfileResponse.model_validate(profile)


@router.put("")
async def update_profile(data: ProfileUpdate, auth: CurrentAuth) -> ProfileResponse:
    """Create or replace the learner's onboarding profile."""
    profile = await ProfileService(auth.session).upsert_profile(auth.user_id, data)
    return ProfileResponse.model_validate(profile)
