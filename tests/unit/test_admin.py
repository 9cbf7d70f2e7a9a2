"""
Tests for admin account bootstrap.
"""

import pytest

from talenteval.admin import create_admin_user
from talenteval.core.errors import AuthFailureError
from talenteval.routing import require_admin


async def test_creates_active_admin(auth_service, profile_store):
    profile = await create_admin_user(auth_service, profile_store, "head@school.edu", "secret123")

    assert profile.role == "ADMIN"
    assert profile.status == "active"
    assert profile.display_name == "Admin User"
    assert await profile_store.has_permission(profile.id, "manage_users") is True

    decision = await require_admin(auth_service.current_user, profile_store, "/admin")
    assert decision.allowed is True


async def test_existing_account_rejected(auth_service, profile_store):
    await create_admin_user(auth_service, profile_store, "head@school.edu", "secret123")

    with pytest.raises(AuthFailureError, match="EMAIL_EXISTS"):
        await create_admin_user(auth_service, profile_store, "head@school.edu", "secret123")
