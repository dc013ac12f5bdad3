"""
Database schema commands.

Creates (or recreates) every table from the ORM metadata against DATABASE_URL.

Usage:
    uv run db-init           # Create missing tables
    uv run db-init --drop    # Drop all tables first
"""

from __future__ import annotations

import argparse
import asyncio

from app.core.db import create_fresh_async_engine
from app.db.models import Base


async def _init_schema(drop: bool) -> list[str]:
    engine = create_fresh_async_engine()
    try:
        async with engine.begin() as conn:
            if drop:
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()
    return sorted(Base.metadata.tables)


def main() -> None:
    parser = argparse.ArgumentParser(prog="db-init", description=__doc__.splitlines()[1])
    parser.add_argument("--drop", action="store_true", help="drop all tables before creating")
    args = parser.parse_args()

    tables = asyncio.run(_init_schema(args.drop))
    print(f"Schema ready: {', '.join(tables)}")
