"""Ledger domain specific exceptions."""


class LedgerError(Exception):
    """Base class for ledger domain errors."""


class InvalidWalletError(LedgerError):
    """Raised when a wallet is missing, malformed or not owned by the caller."""


class InsufficientBalanceError(LedgerError):
    """Raised when a debit would drive a wallet balance below zero."""


class InvalidAmountError(LedgerError):
    """Raised when a requested amount is not a positive integer."""


class StoreUnavailableError(LedgerError):
    """Raised when the underlying store fails; wraps the original error."""


class WalletCodeConflictError(LedgerError):
    """Raised by the store when a generated wallet code is already taken."""


class WalletCodeExhaustedError(LedgerError):
    """Raised when no free wallet code was found within the allowed attempts."""
