"""
Own-profile API Endpoints
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends, HTTPException, status

from talenteval.api.deps import get_current_user, get_profile_store
from talenteval.auth import AuthUser
from talenteval.core.models import UserProfile
from talenteval.core.schemas import ProfileSchema, ProfileUpdate
from talenteval.storage.profiles import ProfileStore

router = APIRouter()


async def _own_profile(profiles: ProfileStore, user: AuthUser) -> UserProfile:
    profile = await profiles.get_profile(user.uid)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile


@router.get("/", response_model=ProfileSchema)
async def get_my_profile(
    user: AuthUser = Depends(get_current_user),
    profiles: ProfileStore = Depends(get_profile_store),
) -> UserProfile:
    """Own profile. Available to pending accounts so they can see their status."""
    return await _own_profile(profiles, user)


@router.put("/", response_model=ProfileSchema)
async def update_my_profile(
    payload: ProfileUpdate,
    user: AuthUser = Depends(get_current_user),
    profiles: ProfileStore = Depends(get_profile_store),
) -> UserProfile:
    await _own_profile(profiles, user)
    await profiles.update_profile(user.uid, payload.model_dump(exclude_none=True))
    return await _own_profile(profiles, user)
