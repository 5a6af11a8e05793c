"""Atomic units of work over the SQLAlchemy wallet and ledger stores."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from transactions_service.infrastructure.database.repositories import (
    SqlTransferRepository,
    SqlWalletRepository,
)
from transactions_service.infrastructure.database.session import SQLITE_BEGIN_OPTION
from transactions_service.modules.wallets.addressing import WalletAddressing
from transactions_service.modules.wallets.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SqlLedgerUnit:
    session: AsyncSession
    wallets: SqlWalletRepository
    transfers: SqlTransferRepository


class SqlLedgerStore:
    """Hands out atomic units, one ``AsyncSession`` transaction each.

    A unit commits when its block exits cleanly and rolls back on any
    exception, cancellation included. Driver and connection failures leave
    the unit as :class:`StoreUnavailableError`.
    """

    def __init__(self, engine: AsyncEngine, addressing: WalletAddressing) -> None:
        self.addressing = addressing
        self._read_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
        self._write_factory = async_sessionmaker(
            bind=engine.execution_options(**{SQLITE_BEGIN_OPTION: "IMMEDIATE"}),
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def atomic(self):
        return self._unit(self._write_factory)

    def read(self):
        return self._unit(self._read_factory)

    @asynccontextmanager
    async def _unit(self, factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[SqlLedgerUnit]:
        try:
            async with factory() as session:
                async with session.begin():
                    yield SqlLedgerUnit(
                        session=session,
                        wallets=SqlWalletRepository(session, self.addressing),
                        transfers=SqlTransferRepository(session),
                    )
        except SQLAlchemyError as exc:
            logger.error("Ledger store failure: %s", exc, exc_info=True)
            raise StoreUnavailableError(str(exc)) from exc


__all__ = ["SqlLedgerStore", "SqlLedgerUnit"]
