"""
Shared FastAPI dependencies.

Stores and the auth service are constructed per request from injectable
factories, so tests can swap the database or the identity provider through
app.dependency_overrides.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from talenteval.auth import AuthService, AuthUser, IdentityClient
from talenteval.config import settings
from talenteval.core.database import AsyncSessionLocal
from talenteval.core.errors import AuthFailureError
from talenteval.core.models import UserProfile
from talenteval.routing import NavigationDecision, check_access
from talenteval.storage.profiles import ProfileStore
from talenteval.storage.records import RecordStore

logger = logging.getLogger(__name__)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return AsyncSessionLocal


def get_record_store(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> RecordStore:
    return RecordStore(session_factory)


def get_profile_store(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ProfileStore:
    return ProfileStore(session_factory)


def get_identity_client() -> IdentityClient:
    return IdentityClient.from_settings()


def get_auth_service(client: IdentityClient = Depends(get_identity_client)) -> AuthService:
    return AuthService(client)


def _request_token(request: Request) -> str | None:
    """ID token from the Authorization header, falling back to the session cookie."""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token:
        return token.strip()
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_optional_user(
    request: Request, auth: AuthService = Depends(get_auth_service)
) -> AuthUser | None:
    """The signed-in user, or None for anonymous requests and rejected tokens."""
    token = _request_token(request)
    if not token:
        return None
    try:
        return await auth.verify_token(token)
    except AuthFailureError as e:
        logger.info(f"Rejected session token: {e.message}")
        return None


async def get_current_user(user: AuthUser | None = Depends(get_optional_user)) -> AuthUser:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required"
        )
    return user


def _raise_for(decision: NavigationDecision) -> None:
    if decision.allowed:
        return
    if decision.redirect == "login":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required"
        )
    if decision.redirect == "pending-approval":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account pending approval")
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")


async def require_active_profile(
    request: Request,
    user: AuthUser | None = Depends(get_optional_user),
    profiles: ProfileStore = Depends(get_profile_store),
) -> UserProfile:
    """Profile of a signed-in user with an active account."""
    decision, profile = await check_access(user, profiles, request.url.path)
    _raise_for(decision)
    assert profile is not None
    return profile


async def require_admin_profile(
    request: Request,
    user: AuthUser | None = Depends(get_optional_user),
    profiles: ProfileStore = Depends(get_profile_store),
) -> UserProfile:
    """Profile of a signed-in, active administrator."""
    decision, profile = await check_access(user, profiles, request.url.path, admin=True)
    _raise_for(decision)
    assert profile is not None
    return profile
