"""Wallet ledger domain exports"""

from .addressing import WalletAddressing
from .aggregator import WalletHistoryAggregator
from .exceptions import (
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidWalletError,
    LedgerError,
    StoreUnavailableError,
    WalletCodeConflictError,
    WalletCodeExhaustedError,
)
from .models import MAX_AMOUNT, TransferRecord, Wallet, WalletRef
from .service import LedgerService

__all__ = [
    "WalletAddressing",
    "WalletHistoryAggregator",
    "LedgerError",
    "InvalidWalletError",
    "InsufficientBalanceError",
    "InvalidAmountError",
    "StoreUnavailableError",
    "WalletCodeConflictError",
    "WalletCodeExhaustedError",
    "TransferRecord",
    "Wallet",
    "WalletRef",
    "MAX_AMOUNT",
    "LedgerService",
]
