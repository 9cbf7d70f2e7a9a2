"""
Named route table and navigation resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import urlsplit

from talenteval.auth import AuthUser
from talenteval.storage.profiles import ProfileStore

from .guards import NavigationDecision, require_admin, require_auth, require_no_auth


class Guard(StrEnum):
    PUBLIC = "public"
    GUEST = "guest"
    AUTH = "auth"
    ADMIN = "admin"


@dataclass(frozen=True)
class Route:
    name: str
    path: str
    guard: Guard


ROUTES: tuple[Route, ...] = (
    # Auth pages (signed-out users only)
    Route("login", "/auth/login", Guard.GUEST),
    Route("register", "/auth/register", Guard.GUEST),
    Route("reset-password", "/auth/reset-password", Guard.GUEST),
    # Dashboard area
    Route("dashboard", "/", Guard.AUTH),
    Route("profile", "/profile", Guard.AUTH),
    Route("students", "/students", Guard.AUTH),
    Route("evaluations", "/evaluations", Guard.AUTH),
    Route("reports", "/reports", Guard.AUTH),
    # Admin area
    Route("admin-dashboard", "/admin", Guard.ADMIN),
    Route("admin-users", "/admin/users", Guard.ADMIN),
    Route("admin-assignments", "/admin/assignments", Guard.ADMIN),
    # Status pages
    Route("pending-approval", "/pending-approval", Guard.PUBLIC),
    Route("unauthorized", "/unauthorized", Guard.PUBLIC),
)

NOT_FOUND = Route("not-found", "/:pathMatch(.*)*", Guard.PUBLIC)

_BY_PATH = {route.path: route for route in ROUTES}
_BY_NAME = {route.name: route for route in (*ROUTES, NOT_FOUND)}


def resolve(full_path: str) -> Route:
    """Match a requested path (query string ignored) to a named route."""
    path = urlsplit(full_path).path or "/"
    if path != "/":
        path = path.rstrip("/")
    return _BY_PATH.get(path, NOT_FOUND)


def path_for(name: str) -> str:
    """Path of a named route."""
    return _BY_NAME[name].path


async def navigate(
    full_path: str, user: AuthUser | None, profiles: ProfileStore
) -> tuple[Route, NavigationDecision]:
    """Run the guard of the route matching `full_path`."""
    route = resolve(full_path)

    if route.guard is Guard.GUEST:
        decision = require_no_auth(user)
    elif route.guard is Guard.AUTH:
        decision = await require_auth(user, profiles, full_path)
    elif route.guard is Guard.ADMIN:
        decision = await require_admin(user, profiles, full_path)
    else:
        decision = NavigationDecision.allow()

    return route, decision
