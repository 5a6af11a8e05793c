"""Ledger engine: wallet creation, replenishment, transfers and listings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from .addressing import WalletAddressing
from .aggregator import WalletHistoryAggregator
from .exceptions import (
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidWalletError,
    WalletCodeConflictError,
    WalletCodeExhaustedError,
)
from .models import MAX_AMOUNT, TransferRecord, Wallet
from .repository import LedgerStore

logger = logging.getLogger(__name__)


def _validate_amount(amount: object) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(f"amount must be a positive integer, got {amount!r}")
    if amount > MAX_AMOUNT:
        raise InvalidAmountError(f"amount exceeds {MAX_AMOUNT}")
    return amount


@dataclass(slots=True)
class LedgerService:
    """Owner-scoped wallet operations, each executed as one atomic unit."""

    store: LedgerStore
    addressing: WalletAddressing = field(default_factory=WalletAddressing)
    create_attempts: int = 5
    history_concurrency: int = 8
    history_timeout: Optional[float] = None
    partial_history_allowed: bool = True
    code_generator: Optional[Callable[[], str]] = None

    async def create_wallet(self, owner: int) -> Wallet:
        generate = self.code_generator or self.addressing.generate_code
        for attempt in range(1, self.create_attempts + 1):
            code = generate()
            try:
                async with self.store.atomic() as unit:
                    wallet = await unit.wallets.put(owner=owner, code=code)
            except WalletCodeConflictError:
                logger.warning("Wallet code collision on attempt %d for owner %s", attempt, owner)
                continue
            logger.info("Created wallet %s (code %s) for owner %s", wallet.id, wallet.code, owner)
            return wallet
        raise WalletCodeExhaustedError(f"no free wallet code after {self.create_attempts} attempts")

    async def replenish(self, owner: int, wallet_ref: object, amount: object) -> Wallet:
        amount = _validate_amount(amount)
        ref = self.addressing.parse(wallet_ref)
        async with self.store.atomic() as unit:
            wallet = await unit.wallets.get_owned(ref, owner)
            if wallet is None:
                raise InvalidWalletError(f"wallet {ref!r} not found for owner {owner}")
            wallet = await unit.wallets.adjust_balance(wallet.id, amount)
        logger.info("Replenished wallet %s by %d, balance %d", wallet.id, amount, wallet.balance)
        return wallet

    async def transfer(self, owner: int, from_ref: object, to_ref: object, amount: object) -> TransferRecord:
        amount = _validate_amount(amount)
        source_ref = self.addressing.parse(from_ref)
        target_ref = self.addressing.parse(to_ref)
        if source_ref == target_ref:
            raise InvalidWalletError("cannot transfer to the same wallet")

        async with self.store.atomic() as unit:
            locked = await unit.wallets.lock([source_ref, target_ref])
            source = locked.get(source_ref)
            target = locked.get(target_ref)
            if source is None or source.owner != owner:
                raise InvalidWalletError(f"wallet {source_ref!r} not found for owner {owner}")
            if target is None:
                raise InvalidWalletError(f"wallet {target_ref!r} not found")
            if source.balance < amount:
                raise InsufficientBalanceError(
                    f"wallet {source_ref!r} holds {source.balance}, {amount} requested"
                )
            # the store re-checks the balance in the debit itself
            await unit.wallets.adjust_balance(source.id, -amount)
            await unit.wallets.adjust_balance(target.id, amount)
            record = await unit.transfers.append(
                amount=amount,
                from_wallet_id=source.id,
                to_wallet_id=target.id,
            )
        logger.info("Transferred %d from wallet %s to wallet %s", amount, source.id, target.id)
        return record

    async def get_wallet(self, owner: int, wallet_ref: object) -> Wallet:
        ref = self.addressing.parse(wallet_ref)
        async with self.store.read() as unit:
            wallet = await unit.wallets.get(ref)
        if wallet is None or wallet.owner != owner:
            raise InvalidWalletError(f"wallet {ref!r} not found for owner {owner}")
        enriched = await self._aggregator().attach([wallet])
        return enriched[0]

    async def list_wallets(self, owner: int | None) -> list[Wallet]:
        """List wallets newest first, all of them when ``owner`` is None."""
        async with self.store.read() as unit:
            wallets = await unit.wallets.list_wallets(owner)
        return await self._aggregator().attach(wallets)

    async def _outgoing(self, wallet: Wallet) -> Sequence[TransferRecord]:
        async with self.store.read() as unit:
            return await unit.transfers.list_outgoing(wallet.id)

    def _aggregator(self) -> WalletHistoryAggregator:
        return WalletHistoryAggregator(
            lookup=self._outgoing,
            concurrency=self.history_concurrency,
            timeout=self.history_timeout,
            partial_results_allowed=self.partial_history_allowed,
        )


__all__ = ["LedgerService"]
