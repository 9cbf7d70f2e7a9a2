"""
Tests for navigation guards and the route table.
"""

import pytest

from talenteval.auth import AuthUser
from talenteval.core.errors import StorageUnavailableError
from talenteval.routing import (
    NOT_FOUND,
    NavigationDecision,
    navigate,
    path_for,
    require_admin,
    require_auth,
    require_no_auth,
    resolve,
)
from talenteval.storage.profiles import ProfileStore

USER = AuthUser(uid="uid-1", email="t@school.edu")


async def _profile(store: ProfileStore, role: str = "TEACHER", status: str = "active") -> None:
    await store.create_profile(USER.uid, {"email": USER.email, "role": role, "status": status})


class TestRequireAuth:
    async def test_no_user_redirects_to_login_with_target(self, profile_store: ProfileStore):
        decision = await require_auth(None, profile_store, "/students?page=2")

        assert decision == NavigationDecision.redirect_to("login", redirect="/students?page=2")

    async def test_missing_profile_redirects_to_login(self, profile_store: ProfileStore):
        decision = await require_auth(USER, profile_store, "/students")

        assert decision.redirect == "login"
        assert decision.query == {}

    async def test_pending_goes_to_pending_approval(self, profile_store: ProfileStore):
        await _profile(profile_store, status="pending")

        decision = await require_auth(USER, profile_store, "/students")

        assert decision.redirect == "pending-approval"

    async def test_inactive_goes_to_pending_approval(self, profile_store: ProfileStore):
        await _profile(profile_store, status="inactive")

        assert (await require_auth(USER, profile_store, "/")).redirect == "pending-approval"

    async def test_active_allowed(self, profile_store: ProfileStore):
        await _profile(profile_store)

        assert (await require_auth(USER, profile_store, "/students")).allowed is True

    async def test_profile_fetch_failure_treated_as_missing(self, profile_store, monkeypatch):
        async def unavailable(user_id):
            raise StorageUnavailableError("Failed to get user profile")

        monkeypatch.setattr(profile_store, "get_profile", unavailable)

        decision = await require_auth(USER, profile_store, "/students")

        assert decision.redirect == "login"


class TestRequireAdmin:
    async def test_active_teacher_unauthorized(self, profile_store: ProfileStore):
        await _profile(profile_store, role="TEACHER")

        decision = await require_admin(USER, profile_store, "/admin/users")

        assert decision.redirect == "unauthorized"

    async def test_pending_admin_goes_to_pending_approval(self, profile_store: ProfileStore):
        await _profile(profile_store, role="ADMIN", status="pending")

        assert (await require_admin(USER, profile_store, "/admin")).redirect == "pending-approval"

    async def test_active_admin_allowed(self, profile_store: ProfileStore):
        await _profile(profile_store, role="ADMIN")

        assert (await require_admin(USER, profile_store, "/admin")).allowed is True

    async def test_no_user_keeps_target(self, profile_store: ProfileStore):
        decision = await require_admin(None, profile_store, "/admin/users")

        assert decision.query == {"redirect": "/admin/users"}


def test_require_no_auth():
    assert require_no_auth(None).allowed is True
    assert require_no_auth(USER).redirect == "dashboard"


class TestRouteTable:
    @pytest.mark.parametrize(
        "path,name",
        [
            ("/", "dashboard"),
            ("/auth/login", "login"),
            ("/students/", "students"),
            ("/admin/users?tab=roles", "admin-users"),
            ("/pending-approval", "pending-approval"),
        ],
    )
    def test_resolve(self, path, name):
        assert resolve(path).name == name

    def test_unknown_path_is_not_found(self):
        assert resolve("/nowhere") is NOT_FOUND

    def test_path_for(self):
        assert path_for("login") == "/auth/login"
        assert path_for("admin-dashboard") == "/admin"


class TestNavigate:
    async def test_signed_in_user_bounced_from_login(self, profile_store: ProfileStore):
        route, decision = await navigate("/auth/login", USER, profile_store)

        assert route.name == "login"
        assert decision.redirect == "dashboard"

    async def test_status_pages_are_public(self, profile_store: ProfileStore):
        _, decision = await navigate("/unauthorized", None, profile_store)

        assert decision.allowed is True

    async def test_admin_area_for_teacher(self, profile_store: ProfileStore):
        await _profile(profile_store)

        route, decision = await navigate("/admin/assignments", USER, profile_store)

        assert route.name == "admin-assignments"
        assert decision.redirect == "unauthorized"
