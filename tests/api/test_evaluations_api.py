"""
Tests for Template and Evaluation API Endpoints
"""

from httpx import AsyncClient

TEMPLATE = {
    "name": "Sprint Assessment",
    "sport_type": "Track",
    "grade_level": "7",
    "criteria": [
        {"key": "speed-Acceleration", "name": "Acceleration"},
        {"key": "speed-Top speed", "name": "Top speed", "description": "Flying 30m"},
    ],
}


async def _setup(client: AsyncClient, headers: dict) -> tuple[str, str]:
    student = await client.post(
        "/api/v1/students/",
        json={"student_code": "S-001", "name": "Ana Li", "grade": "7"},
        headers=headers,
    )
    template = await client.post("/api/v1/templates/", json=TEMPLATE, headers=headers)
    return student.json()["id"], template.json()["id"]


class TestTemplates:
    async def test_create_and_replace_criteria(self, client: AsyncClient, teacher_headers):
        created = await client.post("/api/v1/templates/", json=TEMPLATE, headers=teacher_headers)

        assert created.status_code == 201
        assert len(created.json()["criteria"]) == 2

        updated = await client.put(
            f"/api/v1/templates/{created.json()['id']}",
            json={**TEMPLATE, "criteria": [{"key": "form-Posture", "name": "Posture"}]},
            headers=teacher_headers,
        )
        assert [c["key"] for c in updated.json()["criteria"]] == ["form-Posture"]

    async def test_delete(self, client: AsyncClient, teacher_headers):
        created = await client.post("/api/v1/templates/", json=TEMPLATE, headers=teacher_headers)
        template_id = created.json()["id"]

        assert (await client.delete(f"/api/v1/templates/{template_id}", headers=teacher_headers)).status_code == 204
        assert (await client.get(f"/api/v1/templates/{template_id}", headers=teacher_headers)).status_code == 404


class TestEvaluations:
    async def test_submit_and_list_for_student(self, client: AsyncClient, teacher_headers):
        student_id, template_id = await _setup(client, teacher_headers)

        response = await client.post(
            "/api/v1/evaluations/",
            json={
                "student_id": student_id,
                "template_id": template_id,
                "evaluator": "Coach Kim",
                "scores": {"speed-Acceleration": 4, "speed-Top speed": 5},
                "comments": {"speed-Acceleration": "Quick off the blocks"},
            },
            headers=teacher_headers,
        )

        assert response.status_code == 201
        assert response.json()["scores"] == {"speed-Acceleration": 4.0, "speed-Top speed": 5.0}

        by_query = await client.get(
            f"/api/v1/evaluations/?student_id={student_id}", headers=teacher_headers
        )
        by_student = await client.get(
            f"/api/v1/students/{student_id}/evaluations", headers=teacher_headers
        )
        assert len(by_query.json()) == 1
        assert by_query.json() == by_student.json()

    async def test_empty_scores_rejected(self, client: AsyncClient, teacher_headers):
        student_id, template_id = await _setup(client, teacher_headers)

        response = await client.post(
            "/api/v1/evaluations/",
            json={"student_id": student_id, "template_id": template_id, "evaluator": "X", "scores": {}},
            headers=teacher_headers,
        )

        assert response.status_code == 422
