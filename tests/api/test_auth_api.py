"""
Tests for Auth API Endpoints
"""

from httpx import AsyncClient

from talenteval.config import settings

CREDENTIALS = {"email": "coach@school.edu", "password": "secret123"}


class TestRegister:
    async def test_creates_pending_profile(self, client: AsyncClient, profile_store, identity_provider):
        response = await client.post(
            "/api/v1/auth/register", json={**CREDENTIALS, "display_name": "Coach Kim"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["user"]["email"] == "coach@school.edu"
        assert body["id_token"]
        assert settings.SESSION_COOKIE_NAME in response.cookies

        profile = await profile_store.get_profile(body["user"]["uid"])
        assert profile.status == "pending"
        assert profile.role == "TEACHER"
        assert profile.display_name == "Coach Kim"
        assert identity_provider.oob_requests[0]["requestType"] == "VERIFY_EMAIL"

    async def test_existing_email_passes_provider_message(self, client: AsyncClient):
        await client.post("/api/v1/auth/register", json=CREDENTIALS)

        response = await client.post("/api/v1/auth/register", json=CREDENTIALS)

        assert response.status_code == 401
        assert response.json()["detail"] == "EMAIL_EXISTS"


class TestLogin:
    async def test_login_sets_session_cookie(self, client: AsyncClient, identity_provider):
        identity_provider.create_account(**CREDENTIALS)

        response = await client.post("/api/v1/auth/login", json=CREDENTIALS)

        assert response.status_code == 200
        assert response.json()["persistence"] == "SESSION"
        assert "max-age" not in response.headers["set-cookie"].lower()

    async def test_remember_me_persists_cookie(self, client: AsyncClient, identity_provider):
        identity_provider.create_account(**CREDENTIALS)

        response = await client.post("/api/v1/auth/login", json={**CREDENTIALS, "remember": True})

        assert response.json()["persistence"] == "LOCAL"
        assert f"max-age={settings.SESSION_COOKIE_MAX_AGE}" in response.headers["set-cookie"].lower()

    async def test_wrong_password(self, client: AsyncClient, identity_provider):
        identity_provider.create_account(**CREDENTIALS)

        response = await client.post(
            "/api/v1/auth/login", json={**CREDENTIALS, "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "INVALID_PASSWORD"

    async def test_cookie_session_identifies_user(self, client: AsyncClient, identity_provider):
        identity_provider.create_account(**CREDENTIALS)
        await client.post("/api/v1/auth/login", json=CREDENTIALS)

        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 200
        assert response.json()["email"] == "coach@school.edu"


async def test_logout_clears_cookie(client: AsyncClient, identity_provider):
    identity_provider.create_account(**CREDENTIALS)
    await client.post("/api/v1/auth/login", json=CREDENTIALS)

    response = await client.post("/api/v1/auth/logout")

    assert response.status_code == 204
    assert (await client.get("/api/v1/auth/me")).status_code == 401


async def test_reset_password(client: AsyncClient, identity_provider):
    identity_provider.create_account(**CREDENTIALS)

    response = await client.post("/api/v1/auth/reset-password", json={"email": CREDENTIALS["email"]})

    assert response.status_code == 202
    assert identity_provider.oob_requests[-1]["requestType"] == "PASSWORD_RESET"
