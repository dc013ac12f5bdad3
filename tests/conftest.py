"""
Pytest configuration and shared fixtures for API tests.

Provides:
- In-memory SQLite database (aiosqlite) created from the ORM metadata
- Per-request sessions for the app, plus a separate session for seeding
- Mock Keycloak users
- httpx AsyncClient fixtures over ASGITransport, with and without auth

Every test gets a fresh database.
"""

from __future__ import annotations

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]

# Add app to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Set test environment variables before importing app
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("KEYCLOAK_URL", "http://keycloak.test")
os.environ.setdefault("KEYCLOAK_REALM", "assets")
os.environ.setdefault("OBSERVABILITY_STRUCTURED_LOGS", "false")

import httpx  # noqa: E402 (import after env setup)
import pytest  # noqa: E402 (import after env setup)
from fastapi import FastAPI  # noqa: E402 (import after env setup)
from sqlalchemy.ext.asyncio import (  # noqa: E402 (import after env setup)
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402 (import after env setup)

from app.core.db import enable_sqlite_foreign_keys  # noqa: E402
from app.core.dependencies import get_async_db_session, get_current_user  # noqa: E402
from app.db.models import Base  # noqa: E402
from app.main import create_app  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def anyio_backend():
    return "asyncio"


# ============================================================================
# Database
# ============================================================================


@pytest.fixture(scope="function")
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Fresh in-memory database with all tables.

    StaticPool keeps the single SQLite connection alive, so every session
    created from this engine sees the same database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=async_engine, class_=AsyncSession, autoflush=False, expire_on_commit=False
    )


@pytest.fixture(scope="function")
async def async_db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for seeding data and inspecting the database from tests."""
    async with session_factory() as session:
        yield session


# ============================================================================
# Mock Users
# ============================================================================


def create_mock_token(sub: str = "test-user", roles: list[str] | None = None) -> dict[str, Any]:
    """Decoded Keycloak access-token payload."""
    return {
        "sub": sub,
        "preferred_username": sub,
        "iss": "http://keycloak.test/realms/assets",
        "realm_access": {"roles": roles or []},
        "exp": 9999999999,
    }


@pytest.fixture
def mock_user() -> dict[str, Any]:
    """Mock authenticated user."""
    return create_mock_token(sub="user-123")


# ============================================================================
# HTTP Clients
# ============================================================================


def _build_app(
    session_factory: async_sessionmaker[AsyncSession],
    user: dict[str, Any] | None = None,
) -> FastAPI:
    app = create_app()

    async def override_get_async_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db_session] = override_get_async_db

    if user is not None:

        async def override_get_current_user():
            return user

        app.dependency_overrides[get_current_user] = override_get_current_user

    return app


@pytest.fixture
async def client(session_factory: async_sessionmaker[AsyncSession]):
    """AsyncClient without authentication."""
    app = _build_app(session_factory)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def authenticated_client(
    session_factory: async_sessionmaker[AsyncSession], mock_user: dict[str, Any]
):
    """AsyncClient with an authenticated user."""
    app = _build_app(session_factory, mock_user)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
