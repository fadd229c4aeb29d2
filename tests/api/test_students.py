'''
Testing the students endpoints through the HTTP layer.
'''
import pytest
import httpx

from src.tutortrack_backend.database import models as db_models
from tests.constants import MISSING_STUDENT_ID

NEW_STUDENT = {
    "name": "Emma Johnson",
    "grade": "10th",
    "parentName": "Sarah Johnson",
    "parentEmail": "sarah@example.com",
    "parentPhone": "555-0101",
    "hourlyRate": 60,
}


@pytest.mark.anyio
class TestStudentsAPI:

    async def test_requires_authentication(self, client: httpx.AsyncClient):
        response = await client.get("/api/students")
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    async def test_create_and_list(self, client: httpx.AsyncClient, auth_headers: dict):
        response = await client.post("/api/students", json=NEW_STUDENT, headers=auth_headers)
        print(response.json())
        assert response.status_code == 201

        created = response.json()
        assert created["name"] == "Emma Johnson"
        assert created["hourlyRate"] == 60
        assert created["balance"] == 0
        assert created["totalPaid"] == 0
        assert "parent_email" not in created

        response = await client.get("/api/students", headers=auth_headers)
        assert response.status_code == 200
        assert [s["id"] for s in response.json()] == [created["id"]]

    async def test_create_ignores_balance_from_client(self, client: httpx.AsyncClient, auth_headers: dict):
        response = await client.post(
            "/api/students", json={**NEW_STUDENT, "balance": 500, "totalPaid": 20}, headers=auth_headers
        )
        assert response.status_code == 201
        assert response.json()["balance"] == 0
        assert response.json()["totalPaid"] == 0

    async def test_create_validation_error_is_400(self, client: httpx.AsyncClient, auth_headers: dict):
        response = await client.post("/api/students", json={"name": "No Parent"}, headers=auth_headers)
        assert response.status_code == 400
        assert isinstance(response.json()["detail"], str)
        assert "parentName" in response.json()["detail"] or "grade" in response.json()["detail"]

    async def test_get_update_delete(self, client: httpx.AsyncClient, auth_headers: dict, make_student):
        student = await make_student(name="Liam")

        response = await client.get(f"/api/students/{student.id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Liam"

        response = await client.patch(f"/api/students/{student.id}", json={"grade": "11th"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["grade"] == "11th"
        assert response.json()["name"] == "Liam"

        response = await client.delete(f"/api/students/{student.id}", headers=auth_headers)
        assert response.status_code == 204

        response = await client.get(f"/api/students/{student.id}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Student not found"

    async def test_other_tutor_cannot_see_student(
        self,
        client: httpx.AsyncClient,
        other_auth_headers: dict,
        make_student
    ):
        student = await make_student()
        response = await client.get(f"/api/students/{student.id}", headers=other_auth_headers)
        assert response.status_code == 404

    async def test_recalculate(
        self,
        client: httpx.AsyncClient,
        auth_headers: dict,
        make_student,
        make_class_session
    ):
        student = await make_student(hourly_rate=50, balance=12345)
        await make_class_session(student_ids=[student.id], duration_minutes=60)
        await make_class_session(student_ids=[student.id], duration_minutes=30, is_paid=True)

        response = await client.post(f"/api/students/{student.id}/recalculate", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["balance"] == 50
        assert response.json()["totalPaid"] == 25

    async def test_recalculate_unknown_student(self, client: httpx.AsyncClient, auth_headers: dict):
        response = await client.post(f"/api/students/{MISSING_STUDENT_ID}/recalculate", headers=auth_headers)
        assert response.status_code == 404

    async def test_patch_with_nulls_keeps_values(
        self,
        client: httpx.AsyncClient,
        auth_headers: dict,
        make_student
    ):
        """Explicit nulls are ignored instead of reaching the NOT NULL columns."""
        student = await make_student(name="Liam", hourly_rate=45)

        response = await client.patch(
            f"/api/students/{student.id}", json={"hourlyRate": None}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["hourlyRate"] == 45

        response = await client.patch(
            f"/api/students/{student.id}", json={"name": None, "grade": "12th"}, headers=auth_headers
        )
        print(response.json())
        assert response.status_code == 200
        assert response.json()["name"] == "Liam"
        assert response.json()["grade"] == "12th"
