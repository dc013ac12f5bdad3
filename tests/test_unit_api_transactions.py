"""
Unit tests for the Transaction endpoints.

Tests cover:
- Type validation
- Asset / employee / department reference checks
- Filters (including type)
"""

import pytest
from factories import acreate_asset, acreate_employee, acreate_transaction

from app.domain.enums import TransactionType

BASE = "/api/transactions"


class TestCreateTransaction:
    @pytest.mark.anyio
    async def test_issue_asset_to_employee(self, authenticated_client, async_db_session):
        asset = await acreate_asset(async_db_session)
        emp = await acreate_employee(async_db_session)

        resp = await authenticated_client.post(
            BASE,
            json={
                "assetId": asset.id,
                "type": "ISSUE",
                "employeeId": emp.id,
                "remarks": "  Handed over at onboarding ",
            },
        )

        assert resp.status_code == 201
        body = resp.json()
        assert body["type"] == "ISSUE"
        assert body["employeeId"] == emp.id
        assert body["remarks"] == "Handed over at onboarding"
        assert body["occurredAt"]
        assert resp.headers["Location"] == f"{BASE}/{body['id']}"

    @pytest.mark.anyio
    async def test_invalid_type_returns_400(self, authenticated_client, async_db_session):
        asset = await acreate_asset(async_db_session)

        resp = await authenticated_client.post(BASE, json={"assetId": asset.id, "type": "LOST"})

        assert resp.status_code == 400
        assert "type" in resp.json()["details"]

    @pytest.mark.anyio
    async def test_missing_asset_id_returns_400(self, authenticated_client):
        resp = await authenticated_client.post(BASE, json={"type": "RETURN"})

        assert resp.status_code == 400
        assert resp.json()["details"]["assetId"] == ["Asset id is required."]

    @pytest.mark.anyio
    async def test_unknown_asset_returns_400(self, authenticated_client):
        resp = await authenticated_client.post(
            BASE, json={"assetId": "no-such-asset", "type": "ISSUE"}
        )

        assert resp.status_code == 400


class TestUpdateTransaction:
    @pytest.mark.anyio
    async def test_change_type(self, authenticated_client, async_db_session):
        asset = await acreate_asset(async_db_session)
        txn = await acreate_transaction(async_db_session, asset_id=asset.id)

        resp = await authenticated_client.put(f"{BASE}/{txn.id}", json={"type": "TRANSFER"})

        assert resp.status_code == 200
        assert resp.json()["type"] == "TRANSFER"
        assert resp.json()["assetId"] == asset.id

    @pytest.mark.anyio
    async def test_unknown_employee_returns_400(self, authenticated_client, async_db_session):
        asset = await acreate_asset(async_db_session)
        txn = await acreate_transaction(async_db_session, asset_id=asset.id)

        resp = await authenticated_client.put(f"{BASE}/{txn.id}", json={"employeeId": "ghost"})

        assert resp.status_code == 400
        assert resp.json()["details"]["employeeId"] == ["Employee 'ghost' does not exist."]


class TestListTransactions:
    @pytest.mark.anyio
    async def test_filter_by_asset_and_type(self, authenticated_client, async_db_session):
        asset = await acreate_asset(async_db_session)
        other = await acreate_asset(async_db_session, name="Projector")
        await acreate_transaction(async_db_session, asset_id=asset.id)
        returned = await acreate_transaction(
            async_db_session, asset_id=asset.id, type=TransactionType.RETURN
        )
        await acreate_transaction(async_db_session, asset_id=other.id, type=TransactionType.RETURN)

        resp = await authenticated_client.get(
            BASE, params={"assetId": asset.id, "type": "RETURN"}
        )

        body = resp.json()
        assert body["itemCount"] == 1
        assert body["data"][0]["id"] == returned.id

    @pytest.mark.anyio
    async def test_invalid_type_filter_returns_400(self, authenticated_client):
        resp = await authenticated_client.get(BASE, params={"type": "LOST"})

        assert resp.status_code == 400
