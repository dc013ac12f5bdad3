"""
Database connection and session management.

Provides the async SQLAlchemy engine and session factory used by the
request-scoped session dependency.
"""

import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import settings

logger = logging.getLogger(__name__)

_async_engine: AsyncEngine | None = None
_async_sessionmaker: async_sessionmaker | None = None


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on FK enforcement (ON DELETE CASCADE / SET NULL) for SQLite connections."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_fresh_async_engine(url: str | None = None) -> AsyncEngine:
    """Create an async engine without caching.

    SQLite URLs (used by the test suite) get no pool sizing; every other
    backend gets the production pool configuration.
    """
    url = url or settings.database_url
    if not url:
        raise RuntimeError("DATABASE_URL is required")

    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=False)
        enable_sqlite_foreign_keys(engine)
        return engine

    return create_async_engine(
        url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=30,
        pool_recycle=3600,
        pool_pre_ping=True,  # Verify connections before use
        echo=False,
    )


def get_async_engine() -> AsyncEngine:
    """
    Create and configure the async SQLAlchemy engine.

    The engine (and its connection pool) is the only database state shared
    between requests.

    Returns:
        Configured async SQLAlchemy engine
    """
    global _async_engine

    if _async_engine is not None:
        return _async_engine

    _async_engine = create_fresh_async_engine()
    logger.info("Created async database engine", extra={"dialect": _async_engine.dialect.name})
    return _async_engine


def get_async_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """
    Get or create the async sessionmaker.

    Returns:
        Async sessionmaker factory
    """
    global _async_sessionmaker
    if _async_sessionmaker is not None:
        return _async_sessionmaker

    _async_sessionmaker = async_sessionmaker(
        bind=get_async_engine(),
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )
    return _async_sessionmaker


async def reset_async_engine() -> None:
    """Dispose the async engine and forget the sessionmaker (graceful shutdown, tests)."""
    global _async_engine, _async_sessionmaker

    if _async_engine is not None:
        await _async_engine.dispose()
    _async_engine = None
    _async_sessionmaker = None
