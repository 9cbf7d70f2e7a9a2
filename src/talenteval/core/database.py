"""
Database engine and session factory.

The engine is created once from settings. Stores receive the session factory
explicitly (see talenteval.api.deps) rather than reaching for a global.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from talenteval.config import settings
from talenteval.core.models import Base

logger = logging.getLogger(__name__)


def build_engine(database_url: str, **overrides: Any) -> AsyncEngine:
    """Create an async engine with pool settings suited to the backend.

    SQLite does not support pool_size or max_overflow, and needs foreign keys
    switched on per connection.
    """
    engine_kwargs: dict[str, Any] = {"echo": False}

    if database_url.startswith("postgresql"):
        engine_kwargs.update({"pool_size": 10, "max_overflow": 20, "pool_pre_ping": True})

    engine_kwargs.update(overrides)
    new_engine = create_async_engine(database_url, **engine_kwargs)

    if database_url.startswith("sqlite"):

        @event.listens_for(new_engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    """Session factory used by every store."""
    return async_sessionmaker(bind, expire_on_commit=False, autoflush=False)


engine = build_engine(settings.DATABASE_URL)
AsyncSessionLocal = build_session_factory(engine)


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create all tables that do not exist yet."""
    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready", extra={"tables": sorted(Base.metadata.tables)})


async def close_db() -> None:
    """Dispose the engine's connection pool."""
    await engine.dispose()
