"""
Tests for User Administration and Profile API Endpoints
"""

from httpx import AsyncClient

from talenteval.core.roles import Role


class TestAdminAccess:
    async def test_teacher_forbidden(self, client: AsyncClient, teacher_headers):
        response = await client.get("/api/v1/users/", headers=teacher_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"

    async def test_anonymous_unauthorized(self, client: AsyncClient):
        assert (await client.get("/api/v1/users/")).status_code == 401


class TestUserManagement:
    async def test_list_filter_by_role(self, client: AsyncClient, admin_headers, make_user):
        await make_user("coach@school.edu", role=Role.COACH)

        response = await client.get("/api/v1/users/?role=COACH", headers=admin_headers)

        assert response.status_code == 200
        assert [u["email"] for u in response.json()] == ["coach@school.edu"]

    async def test_approve_pending_account(
        self, client: AsyncClient, admin_headers, make_user, identity_provider
    ):
        pending_headers = await make_user("new@school.edu", status="pending")
        uid = identity_provider.accounts["new@school.edu"]["localId"]

        response = await client.put(
            f"/api/v1/users/{uid}/status", json={"status": "active"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "active"
        assert (await client.get("/api/v1/students/", headers=pending_headers)).status_code == 200

    async def test_assign_role_and_log(
        self, client: AsyncClient, admin_headers, make_user, identity_provider
    ):
        await make_user("t@school.edu")
        uid = identity_provider.accounts["t@school.edu"]["localId"]

        response = await client.put(
            f"/api/v1/users/{uid}/role",
            json={"role": "COACH", "assignments": {"teams": [{"name": "U12", "students": ["s1"]}]}},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["role"] == "COACH"
        assert response.json()["assignments"]["teams"][0]["name"] == "U12"

        activities = await client.get(f"/api/v1/users/{uid}/activities", headers=admin_headers)
        assert activities.json()[0]["type"] == "role_update"

        recent = await client.get("/api/v1/users/activities?limit=1", headers=admin_headers)
        assert len(recent.json()) == 1

    async def test_unknown_user_404(self, client: AsyncClient, admin_headers):
        response = await client.put(
            "/api/v1/users/ghost/status", json={"status": "active"}, headers=admin_headers
        )

        assert response.status_code == 404

    async def test_role_and_active_filters_combine(
        self, client: AsyncClient, admin_headers, make_user
    ):
        await make_user("coach1@school.edu", role=Role.COACH)
        await make_user("coach2@school.edu", role=Role.COACH, status="pending")

        response = await client.get(
            "/api/v1/users/?role=COACH&active_only=true", headers=admin_headers
        )

        assert [u["email"] for u in response.json()] == ["coach1@school.edu"]


class TestOwnProfile:
    async def test_pending_user_can_read_own_profile(self, client: AsyncClient, make_user):
        headers = await make_user("new@school.edu", status="pending")

        response = await client.get("/api/v1/profile/", headers=headers)

        assert response.status_code == 200
        assert response.json()["status"] == "pending"

    async def test_update_display_name(self, client: AsyncClient, teacher_headers):
        response = await client.put(
            "/api/v1/profile/", json={"display_name": "Ms. Osei"}, headers=teacher_headers
        )

        assert response.status_code == 200
        assert response.json()["display_name"] == "Ms. Osei"
        assert response.json()["role"] == "TEACHER"
