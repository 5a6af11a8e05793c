"""Ledger related dependency providers."""

from transactions_service.core.container import get_container
from transactions_service.modules.wallets import LedgerService


def get_ledger_service() -> LedgerService:
    return get_container().ledger


__all__ = ["get_ledger_service"]
