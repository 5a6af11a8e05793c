"""Shared fixtures: a throwaway SQLite database per test and a ledger on top of it."""

import pytest
import pytest_asyncio

from transactions_service.core.config import DatabaseSettings
from transactions_service.infrastructure.database.session import build_engine, init_db
from transactions_service.infrastructure.database.store import SqlLedgerStore
from transactions_service.modules.wallets import LedgerService, WalletAddressing


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}"


@pytest_asyncio.fixture
async def engine(database_url):
    engine = build_engine(DatabaseSettings(url=database_url, sqlite_busy_timeout=30))
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def addressing():
    return WalletAddressing(mode="code", code_length=12)


@pytest.fixture
def store(engine, addressing):
    return SqlLedgerStore(engine, addressing)


@pytest.fixture
def ledger(store, addressing):
    return LedgerService(store=store, addressing=addressing)

