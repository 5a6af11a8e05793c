"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine

from transactions_service.core.config import Settings, get_settings
from transactions_service.infrastructure.database.session import get_engine
from transactions_service.infrastructure.database.store import SqlLedgerStore
from transactions_service.modules.wallets import LedgerService, WalletAddressing


def build_ledger_service(settings: Settings, engine: AsyncEngine) -> LedgerService:
    ledger = settings.ledger
    addressing = WalletAddressing(mode=ledger.addressing, code_length=ledger.code_length)
    return LedgerService(
        store=SqlLedgerStore(engine, addressing),
        addressing=addressing,
        create_attempts=ledger.create_wallet_attempts,
        history_concurrency=ledger.history_concurrency,
        history_timeout=ledger.history_timeout_seconds,
        partial_history_allowed=ledger.partial_history_allowed,
    )


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    ledger: LedgerService


@lru_cache()
def get_container() -> ApplicationContainer:
    settings = get_settings()
    return ApplicationContainer(settings=settings, ledger=build_ledger_service(settings, get_engine()))


__all__ = ["ApplicationContainer", "build_ledger_service", "get_container"]
