"""Domain modules."""

from . import wallets

__all__ = ["wallets"]
