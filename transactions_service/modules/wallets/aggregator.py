"""Concurrent resolution of per-wallet transfer histories."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence

from .exceptions import StoreUnavailableError
from .models import TransferRecord, Wallet

logger = logging.getLogger(__name__)

HistoryLookup = Callable[[Wallet], Awaitable[Sequence[TransferRecord]]]


@dataclass(slots=True)
class WalletHistoryAggregator:
    """Fan out one history lookup per wallet and join them in input order.

    At most ``concurrency`` lookups run at once. Every dispatched lookup is
    awaited before returning. With ``partial_results_allowed`` a failed lookup
    leaves that wallet with an empty history; otherwise the first failure is
    raised once all lookups have finished.
    """

    lookup: HistoryLookup
    concurrency: int = 8
    timeout: Optional[float] = None
    partial_results_allowed: bool = True

    async def attach(self, wallets: Sequence[Wallet]) -> list[Wallet]:
        if not wallets:
            return []
        semaphore = asyncio.Semaphore(self.concurrency)

        async def resolve(wallet: Wallet) -> Sequence[TransferRecord]:
            async with semaphore:
                if self.timeout is None:
                    return await self.lookup(wallet)
                return await asyncio.wait_for(self.lookup(wallet), self.timeout)

        # gather keeps input order whatever the completion order
        outcomes = await asyncio.gather(*(resolve(wallet) for wallet in wallets), return_exceptions=True)

        enriched: list[Wallet] = []
        failures: list[tuple[Wallet, BaseException]] = []
        for wallet, outcome in zip(wallets, outcomes):
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            if isinstance(outcome, BaseException):
                failures.append((wallet, outcome))
                enriched.append(wallet.with_transfers([]))
            else:
                enriched.append(wallet.with_transfers(list(outcome)))

        if failures:
            wallet, error = failures[0]
            if not self.partial_results_allowed:
                raise StoreUnavailableError(
                    f"history lookup failed for {len(failures)} wallet(s), first: wallet {wallet.id}"
                ) from error
            for wallet, error in failures:
                logger.warning("Transfer history unavailable for wallet %s: %r", wallet.id, error)
        return enriched


__all__ = ["HistoryLookup", "WalletHistoryAggregator"]
