"""Repository protocols for the wallet and ledger stores."""

from __future__ import annotations

from typing import AsyncContextManager, Iterable, Mapping, Protocol, Sequence

from .models import TransferRecord, Wallet, WalletRef


class WalletRepository(Protocol):
    """Wallet table operations bound to one atomic unit."""

    async def put(self, *, owner: int, code: str) -> Wallet:
        ...

    async def get(self, ref: WalletRef) -> Wallet | None:
        ...

    async def get_owned(self, ref: WalletRef, owner: int) -> Wallet | None:
        ...

    async def list_wallets(self, owner: int | None = None) -> Sequence[Wallet]:
        ...

    async def lock(self, refs: Iterable[WalletRef]) -> Mapping[WalletRef, Wallet]:
        ...

    async def adjust_balance(self, wallet_id: int, delta: int) -> Wallet:
        ...


class TransferRepository(Protocol):
    """Append-only ledger entries bound to one atomic unit."""

    async def append(self, *, amount: int, from_wallet_id: int, to_wallet_id: int) -> TransferRecord:
        ...

    async def list_outgoing(self, wallet_id: int) -> Sequence[TransferRecord]:
        ...


class LedgerUnit(Protocol):
    wallets: WalletRepository
    transfers: TransferRepository


class LedgerStore(Protocol):
    """Transactional store: every unit commits on clean exit and aborts otherwise."""

    def atomic(self) -> AsyncContextManager[LedgerUnit]:
        ...

    def read(self) -> AsyncContextManager[LedgerUnit]:
        ...
