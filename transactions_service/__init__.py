"""Wallet transfer service built around an atomic ledger engine."""

__version__ = "0.1.0"
