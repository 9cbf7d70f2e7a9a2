"""
User Administration API Endpoints

Admin-only management of profiles, roles, status and the activity log.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends, HTTPException, Query, status

from talenteval.api.deps import get_profile_store, require_admin_profile
from talenteval.config import settings
from talenteval.core.models import ActivityLogEntry, UserProfile
from talenteval.core.roles import Role
from talenteval.core.schemas import ActivitySchema, ProfileSchema, RoleUpdate, StatusUpdate
from talenteval.storage.profiles import ProfileStore

router = APIRouter(dependencies=[Depends(require_admin_profile)])


async def _get_or_404(profiles: ProfileStore, uid: str) -> UserProfile:
    profile = await profiles.get_profile(uid)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User profile not found: {uid}",
        )
    return profile


@router.get("/", response_model=list[ProfileSchema])
async def list_users(
    role: Role | None = Query(None, description="Only profiles with this role"),
    active_only: bool = Query(False, description="Only active profiles"),
    profiles: ProfileStore = Depends(get_profile_store),
) -> list[UserProfile]:
    if role is not None:
        return await profiles.list_profiles_by_role(role, active_only=active_only)
    if active_only:
        return await profiles.list_active_profiles()
    return await profiles.list_all_profiles()


@router.get("/activities", response_model=list[ActivitySchema])
async def list_activities(
    limit: int = Query(settings.ACTIVITY_LOG_LIMIT, ge=1, le=500),
    profiles: ProfileStore = Depends(get_profile_store),
) -> list[ActivityLogEntry]:
    return await profiles.list_activities(limit)


@router.get("/{uid}", response_model=ProfileSchema)
async def get_user(uid: str, profiles: ProfileStore = Depends(get_profile_store)) -> UserProfile:
    return await _get_or_404(profiles, uid)


@router.put("/{uid}/role", response_model=ProfileSchema)
async def assign_role(
    uid: str, payload: RoleUpdate, profiles: ProfileStore = Depends(get_profile_store)
) -> UserProfile:
    """Set a user's role, with optional student and team assignments."""
    assignments = payload.assignments.model_dump() if payload.assignments else None
    await profiles.set_role(uid, payload.role, assignments)
    return await _get_or_404(profiles, uid)


@router.put("/{uid}/status", response_model=ProfileSchema)
async def update_status(
    uid: str, payload: StatusUpdate, profiles: ProfileStore = Depends(get_profile_store)
) -> UserProfile:
    """Approve (active), suspend (inactive) or reset (pending) an account."""
    await profiles.set_status(uid, payload.status)
    return await _get_or_404(profiles, uid)


@router.get("/{uid}/activities", response_model=list[ActivitySchema])
async def list_user_activities(
    uid: str,
    limit: int = Query(settings.ACTIVITY_LOG_LIMIT, ge=1, le=500),
    profiles: ProfileStore = Depends(get_profile_store),
) -> list[ActivityLogEntry]:
    return await profiles.list_user_activities(uid, limit)
