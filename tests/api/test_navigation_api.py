"""
Tests for the Navigation API Endpoint
"""

from httpx import AsyncClient


async def test_anonymous_redirected_to_login_with_target(client: AsyncClient):
    response = await client.get("/api/v1/navigation/", params={"path": "/students?page=2"})

    assert response.status_code == 200
    assert response.json() == {
        "route": "students",
        "allowed": False,
        "redirect": {"name": "login", "path": "/auth/login", "query": {"redirect": "/students?page=2"}},
    }


async def test_teacher_in_admin_area(client: AsyncClient, teacher_headers):
    response = await client.get(
        "/api/v1/navigation/", params={"path": "/admin/users"}, headers=teacher_headers
    )

    assert response.json()["redirect"]["name"] == "unauthorized"


async def test_pending_user(client: AsyncClient, make_user):
    headers = await make_user("new@school.edu", status="pending")

    response = await client.get("/api/v1/navigation/", params={"path": "/"}, headers=headers)

    assert response.json()["redirect"]["path"] == "/pending-approval"


async def test_admin_allowed(client: AsyncClient, admin_headers):
    response = await client.get(
        "/api/v1/navigation/", params={"path": "/admin"}, headers=admin_headers
    )

    assert response.json() == {"route": "admin-dashboard", "allowed": True, "redirect": None}


async def test_unknown_path(client: AsyncClient):
    response = await client.get("/api/v1/navigation/", params={"path": "/nowhere"})

    assert response.json()["route"] == "not-found"
    assert response.json()["allowed"] is True
