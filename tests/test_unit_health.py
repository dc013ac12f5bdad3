"""
Unit tests for health check endpoints.

Tests cover:
- Liveness probe
- Database connectivity checks in the readiness probe
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from app.main import create_app


@pytest.mark.anyio
async def test_health_ok() -> None:
    """Health endpoint returns 200 without authentication."""
    client = TestClient(create_app())
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


@pytest.mark.anyio
async def test_readyz_ok_with_test_database(client, async_engine) -> None:
    """Readiness endpoint runs a query against the configured engine."""
    with patch("app.api.routes.health.get_async_engine", return_value=async_engine):
        resp = await client.get("/readyz")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "db": "ok"}


@patch("app.api.routes.health.get_async_engine")
@pytest.mark.anyio
async def test_readyz_returns_200_when_db_connection_succeeds(
    mock_get_engine: MagicMock,
) -> None:
    """Readiness endpoint returns 200 when database connection succeeds."""
    mock_engine = MagicMock()
    # Mock async connection context manager
    mock_conn = AsyncMock()
    mock_engine.connect.return_value.__aenter__.return_value = mock_conn
    mock_get_engine.return_value = mock_engine

    client = TestClient(create_app())
    resp = client.get("/readyz")

    assert resp.status_code == 200
    mock_conn.execute.assert_awaited_once()


@patch("app.api.routes.health.get_async_engine")
@pytest.mark.anyio
async def test_readyz_returns_503_when_db_connection_fails(
    mock_get_engine: MagicMock,
) -> None:
    """Readiness endpoint returns 503 and hides the cause when the database is down."""
    mock_engine = MagicMock()
    mock_engine.connect.return_value.__aenter__.side_effect = ConnectionError(
        "connection refused at db.internal:5432"
    )
    mock_get_engine.return_value = mock_engine

    client = TestClient(create_app())
    resp = client.get("/readyz")

    assert resp.status_code == 503
    assert resp.json() == {"ok": False, "db": "unavailable"}
