"""SQLAlchemy-backed repository implementations."""

from .transfer_repository import SqlTransferRepository
from .wallet_repository import SqlWalletRepository

__all__ = [
    "SqlTransferRepository",
    "SqlWalletRepository",
]
