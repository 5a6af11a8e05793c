"""Domain models for wallet operations."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Union

# External wallet reference: a surrogate id or a wallet code, per addressing scheme.
WalletRef = Union[int, str]

# Amounts and balances are stored as signed 64-bit integers.
MAX_AMOUNT = 2**63 - 1


@dataclass(slots=True, frozen=True)
class TransferRecord:
    id: int
    amount: int
    from_wallet_id: int
    to_wallet_id: int
    to_wallet_code: str
    created_at: Optional[datetime]


@dataclass(slots=True, frozen=True)
class Wallet:
    id: int
    owner: int
    code: str
    balance: int
    created_at: Optional[datetime]
    transfers: tuple[TransferRecord, ...] = field(default=())

    def with_transfers(self, transfers: list[TransferRecord]) -> "Wallet":
        return replace(self, transfers=tuple(transfers))
