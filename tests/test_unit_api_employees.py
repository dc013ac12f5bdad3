"""
Unit tests for the Employee endpoints.

Tests cover:
- Name validation and trimming
- Department reference checks on create and update
- departmentId list filter
"""

import pytest
from factories import acreate_department, acreate_employee

BASE = "/api/employees"


class TestCreateEmployee:
    @pytest.mark.anyio
    async def test_create_trims_names(self, authenticated_client, async_db_session):
        dept = await acreate_department(async_db_session)

        resp = await authenticated_client.post(
            BASE,
            json={
                "lastName": " Santos ",
                "firstName": "Ana  ",
                "middleName": "  Reyes",
                "departmentId": dept.id,
            },
        )

        assert resp.status_code == 201
        body = resp.json()
        assert body["lastName"] == "Santos"
        assert body["firstName"] == "Ana"
        assert body["middleName"] == "Reyes"
        assert body["departmentId"] == dept.id
        assert resp.headers["Location"] == f"{BASE}/{body['id']}"

    @pytest.mark.anyio
    async def test_missing_names_are_reported_per_field(self, authenticated_client):
        resp = await authenticated_client.post(BASE, json={"lastName": "", "firstName": None})

        assert resp.status_code == 400
        details = resp.json()["details"]
        assert details["lastName"] == ["Last name is required."]
        assert details["firstName"] == ["First name is required."]

    @pytest.mark.anyio
    async def test_whitespace_names_return_400(self, authenticated_client):
        resp = await authenticated_client.post(BASE, json={"lastName": "  ", "firstName": "\t"})

        assert resp.status_code == 400
        details = resp.json()["details"]
        assert details["lastName"] == ["Last name is required."]
        assert details["firstName"] == ["First name is required."]

    @pytest.mark.anyio
    async def test_unknown_department_returns_400(self, authenticated_client):
        resp = await authenticated_client.post(
            BASE, json={"lastName": "Santos", "firstName": "Ana", "departmentId": "nope"}
        )

        assert resp.status_code == 400
        assert resp.json()["error"] == "ValidationError"

    @pytest.mark.anyio
    async def test_name_too_long_returns_400(self, authenticated_client):
        resp = await authenticated_client.post(
            BASE, json={"lastName": "x" * 101, "firstName": "Ana"}
        )

        assert resp.status_code == 400
        assert "lastName" in resp.json()["details"]


class TestUpdateEmployee:
    @pytest.mark.anyio
    async def test_update_unknown_department_names_the_field(
        self, authenticated_client, async_db_session
    ):
        emp = await acreate_employee(async_db_session)

        resp = await authenticated_client.put(f"{BASE}/{emp.id}", json={"departmentId": "nope"})

        assert resp.status_code == 400
        assert resp.json()["details"]["departmentId"] == ["Department 'nope' does not exist."]

    @pytest.mark.anyio
    async def test_update_moves_employee_to_department(
        self, authenticated_client, async_db_session
    ):
        dept = await acreate_department(async_db_session)
        emp = await acreate_employee(async_db_session)

        resp = await authenticated_client.put(f"{BASE}/{emp.id}", json={"departmentId": dept.id})

        assert resp.status_code == 200
        assert resp.json()["departmentId"] == dept.id
        assert resp.json()["firstName"] == "Juan"

    @pytest.mark.anyio
    async def test_update_rejects_null_first_name(self, authenticated_client, async_db_session):
        emp = await acreate_employee(async_db_session)

        resp = await authenticated_client.put(f"{BASE}/{emp.id}", json={"firstName": None})

        assert resp.status_code == 400
        assert resp.json()["details"]["firstName"] == ["First name is required."]

    @pytest.mark.anyio
    async def test_update_rejects_whitespace_last_name(
        self, authenticated_client, async_db_session
    ):
        emp = await acreate_employee(async_db_session, last_name="Santos")

        resp = await authenticated_client.put(f"{BASE}/{emp.id}", json={"lastName": "   "})

        assert resp.status_code == 400
        assert resp.json()["details"]["lastName"] == ["Last name is required."]

        resp = await authenticated_client.get(f"{BASE}/{emp.id}")
        assert resp.json()["lastName"] == "Santos"


class TestListEmployees:
    @pytest.mark.anyio
    async def test_filter_by_department(self, authenticated_client, async_db_session):
        dept = await acreate_department(async_db_session)
        member = await acreate_employee(async_db_session, department_id=dept.id)
        await acreate_employee(async_db_session, first_name="Other")

        resp = await authenticated_client.get(BASE, params={"departmentId": dept.id})

        body = resp.json()
        assert body["itemCount"] == 1
        assert body["data"][0]["id"] == member.id
