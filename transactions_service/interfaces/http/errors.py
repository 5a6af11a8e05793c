"""Translation of ledger errors into HTTP responses."""

from fastapi import HTTPException, status

from transactions_service.modules.wallets import (
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidWalletError,
    LedgerError,
    StoreUnavailableError,
    WalletCodeExhaustedError,
)

_STATUS_BY_ERROR: dict[type[LedgerError], int] = {
    InvalidAmountError: status.HTTP_400_BAD_REQUEST,
    InvalidWalletError: status.HTTP_404_NOT_FOUND,
    InsufficientBalanceError: status.HTTP_409_CONFLICT,
    WalletCodeExhaustedError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}

_DETAIL_BY_ERROR: dict[type[LedgerError], str] = {
    InvalidAmountError: "invalid amount",
    InvalidWalletError: "invalid wallet",
    InsufficientBalanceError: "insufficient balance",
    WalletCodeExhaustedError: "wallet storage unavailable",
    StoreUnavailableError: "wallet storage unavailable",
}


def ledger_http_error(exc: LedgerError) -> HTTPException:
    for error_type, code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=code, detail=_DETAIL_BY_ERROR[error_type])
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="ledger error")


__all__ = ["ledger_http_error"]
