"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from transactions_service.core.config import DatabaseSettings, get_settings
from transactions_service.infrastructure.database.base import Base

# Execution option read by the SQLite "begin" hook; write units use IMMEDIATE.
SQLITE_BEGIN_OPTION = "sqlite_begin"

_engine: AsyncEngine | None = None


def _install_sqlite_hooks(engine: AsyncEngine) -> None:
    """Take over transaction start so write units can lock the database up front."""

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # pragma: no cover - driver hook
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):  # pragma: no cover - driver hook
        mode = conn.get_execution_options().get(SQLITE_BEGIN_OPTION, "DEFERRED")
        conn.exec_driver_sql(f"BEGIN {mode}")


def build_engine(database: DatabaseSettings, *, debug: bool = False) -> AsyncEngine:
    engine_kwargs: dict[str, Any] = {
        "echo": database.echo or debug,
    }
    is_sqlite = database.url.startswith("sqlite")
    if is_sqlite:
        engine_kwargs["connect_args"] = {"timeout": database.sqlite_busy_timeout}
    if database.pool_size is not None:
        engine_kwargs["pool_size"] = database.pool_size
    if database.max_overflow is not None:
        engine_kwargs["max_overflow"] = database.max_overflow

    engine = create_async_engine(database.url, **engine_kwargs)
    if is_sqlite:
        _install_sqlite_hooks(engine)
    return engine


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = build_engine(settings.database, debug=settings.debug)
    return _engine


async def dispose_engine() -> None:
    global _engine
    if _engine is not None:
        await _engine.dispose()
    _engine = None


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create database tables in development mode (migrations preferred)."""
    # imported late so models register on Base.metadata
    from transactions_service.db import models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
