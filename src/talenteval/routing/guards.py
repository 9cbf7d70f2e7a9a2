"""
Navigation guards.

Each guard runs a fixed, short-circuiting sequence of checks:
identity, profile existence, profile status, then (admin areas) role.
A failure while fetching the profile counts as "no profile".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from talenteval.auth import AuthUser
from talenteval.core.errors import TalentEvalError
from talenteval.core.models import UserProfile
from talenteval.core.roles import ProfileStatus, Role
from talenteval.storage.profiles import ProfileStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigationDecision:
    """Outcome of a guard: allow, or redirect to a named route."""

    allowed: bool
    redirect: str | None = None
    query: dict[str, str] = field(default_factory=dict)

    @classmethod
    def allow(cls) -> NavigationDecision:
        return cls(allowed=True)

    @classmethod
    def redirect_to(cls, route_name: str, **query: str) -> NavigationDecision:
        return cls(allowed=False, redirect=route_name, query=query)


async def _load_profile(profiles: ProfileStore, user: AuthUser) -> UserProfile | None:
    try:
        return await profiles.get_profile(user.uid)
    except TalentEvalError as e:
        logger.error(f"Auth guard error: {e.message}", extra={"uid": user.uid})
        return None


async def check_access(
    user: AuthUser | None, profiles: ProfileStore, to_path: str, *, admin: bool = False
) -> tuple[NavigationDecision, UserProfile | None]:
    """Run the guard sequence and also return the profile it loaded."""
    if user is None:
        return NavigationDecision.redirect_to("login", redirect=to_path), None

    profile = await _load_profile(profiles, user)
    if profile is None:
        return NavigationDecision.redirect_to("login"), None

    if profile.status != ProfileStatus.ACTIVE.value:
        return NavigationDecision.redirect_to("pending-approval"), profile

    if admin and profile.role != Role.ADMIN.value:
        return NavigationDecision.redirect_to("unauthorized"), profile

    return NavigationDecision.allow(), profile


async def require_auth(
    user: AuthUser | None, profiles: ProfileStore, to_path: str
) -> NavigationDecision:
    """Guard for the signed-in dashboard area."""
    decision, _ = await check_access(user, profiles, to_path)
    return decision


async def require_admin(
    user: AuthUser | None, profiles: ProfileStore, to_path: str
) -> NavigationDecision:
    """Guard for admin areas: require_auth plus an ADMIN role."""
    decision, _ = await check_access(user, profiles, to_path, admin=True)
    return decision


def require_no_auth(user: AuthUser | None) -> NavigationDecision:
    """Guard for login/register pages: signed-in users go to the dashboard."""
    if user is not None:
        return NavigationDecision.redirect_to("dashboard")
    return NavigationDecision.allow()
