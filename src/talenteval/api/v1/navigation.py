"""
Navigation API Endpoint

Lets a client ask which page a path resolves to and whether the caller may
open it, mirroring the guards the server applies to its own endpoints.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from typing import Any

from fastapi import APIRouter, Depends, Query

from talenteval.api.deps import get_optional_user, get_profile_store
from talenteval.auth import AuthUser
from talenteval.routing import navigate, path_for
from talenteval.storage.profiles import ProfileStore

router = APIRouter()


@router.get("/")
async def resolve_navigation(
    path: str = Query(..., min_length=1, description="Requested page path, query included"),
    user: AuthUser | None = Depends(get_optional_user),
    profiles: ProfileStore = Depends(get_profile_store),
) -> dict[str, Any]:
    route, decision = await navigate(path, user, profiles)

    redirect = None
    if decision.redirect is not None:
        redirect = {
            "name": decision.redirect,
            "path": path_for(decision.redirect),
            "query": decision.query,
        }

    return {
        "route": route.name,
        "allowed": decision.allowed,
        "redirect": redirect,
    }
