"""Alembic environment for the wallet ledger schema.

Online runs migrate through the service's own async engine, so the target
database is whatever ``DATABASE__URL`` (or ``app.env``) points the service at.
``alembic upgrade --sql`` renders the same revisions as a script.
"""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from transactions_service.core.config import get_settings
from transactions_service.db import models  # noqa: F401  registers the ledger tables
from transactions_service.infrastructure.database.base import Base
from transactions_service.infrastructure.database.session import get_engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _configure(connection: Connection) -> None:
    # batch mode lets SQLite replay ALTERs against wallets/transfers
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


async def _migrate() -> None:
    async with get_engine().connect() as connection:
        await connection.run_sync(_configure)


if context.is_offline_mode():
    context.configure(url=get_settings().database_url, target_metadata=target_metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()
else:
    asyncio.run(_migrate())
