"""
Fixtures for API tests: an app client bound to the test database and the
fake identity provider, plus signed-in users of each kind.
"""

from collections.abc import Awaitable, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from talenteval.api.deps import get_identity_client, get_session_factory
from talenteval.core.roles import ProfileStatus, Role
from talenteval.main import app
from talenteval.storage.profiles import ProfileStore

MakeUser = Callable[..., Awaitable[dict[str, str]]]


@pytest.fixture
async def client(session_factory, identity_client) -> AsyncClient:
    """Create test client with database and identity provider overrides."""
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_identity_client] = lambda: identity_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(identity_provider, profile_store: ProfileStore) -> MakeUser:
    """Create an account plus profile; returns bearer auth headers."""

    async def _make(
        email: str, role: Role = Role.TEACHER, status: ProfileStatus = ProfileStatus.ACTIVE
    ) -> dict[str, str]:
        uid, token = identity_provider.create_account(email, "secret123")
        await profile_store.create_profile(uid, {"email": email, "role": role, "status": status})
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
async def teacher_headers(make_user: MakeUser) -> dict[str, str]:
    return await make_user("teacher@school.edu")


@pytest.fixture
async def admin_headers(make_user: MakeUser) -> dict[str, str]:
    return await make_user("admin@school.edu", role=Role.ADMIN)
