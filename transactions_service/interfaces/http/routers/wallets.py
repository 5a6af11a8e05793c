"""Owner-facing wallet endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from transactions_service.core.security import get_current_principal
from transactions_service.interfaces.http.deps import get_ledger_service
from transactions_service.interfaces.http.errors import ledger_http_error
from transactions_service.modules.wallets import LedgerError, LedgerService, Wallet
from transactions_service.schemas import (
    ReplenishRequest,
    TokenPayload,
    TransferRequest,
    TransferResponse,
    WalletListResponse,
    WalletResponse,
)

router = APIRouter()


def to_wallet_response(wallet: Wallet) -> WalletResponse:
    return WalletResponse(
        id=wallet.id,
        owner=wallet.owner,
        code=wallet.code,
        created_at=wallet.created_at,
        balance=wallet.balance,
        transfers=[TransferResponse.model_validate(record) for record in wallet.transfers],
    )


@router.post("/wallet", response_model=WalletResponse, summary="Create a wallet for the caller")
async def create_wallet(
    principal: TokenPayload = Depends(get_current_principal),
    ledger: LedgerService = Depends(get_ledger_service),
) -> WalletResponse:
    try:
        wallet = await ledger.create_wallet(principal.id)
    except LedgerError as exc:
        raise ledger_http_error(exc) from exc
    return to_wallet_response(wallet)


@router.get("/wallets", response_model=WalletListResponse, summary="List the caller's wallets")
async def get_wallets(
    principal: TokenPayload = Depends(get_current_principal),
    ledger: LedgerService = Depends(get_ledger_service),
) -> WalletListResponse:
    try:
        wallets = await ledger.list_wallets(principal.id)
    except LedgerError as exc:
        raise ledger_http_error(exc) from exc
    return WalletListResponse(total=len(wallets), wallets=[to_wallet_response(w) for w in wallets])


@router.get("/wallets/{wallet_ref}", response_model=WalletResponse, summary="Get one of the caller's wallets")
async def get_wallet(
    wallet_ref: str = Path(..., min_length=1),
    principal: TokenPayload = Depends(get_current_principal),
    ledger: LedgerService = Depends(get_ledger_service),
) -> WalletResponse:
    try:
        wallet = await ledger.get_wallet(principal.id, wallet_ref)
    except LedgerError as exc:
        raise ledger_http_error(exc) from exc
    return to_wallet_response(wallet)


@router.post("/replenish", response_model=WalletResponse, summary="Top up a wallet")
async def replenish_wallet(
    payload: ReplenishRequest,
    principal: TokenPayload = Depends(get_current_principal),
    ledger: LedgerService = Depends(get_ledger_service),
) -> WalletResponse:
    try:
        wallet = await ledger.replenish(principal.id, payload.wallet_id, payload.amount)
    except LedgerError as exc:
        raise ledger_http_error(exc) from exc
    return to_wallet_response(wallet)


@router.post("/transfer", response_model=TransferResponse, summary="Move funds between wallets")
async def transfer(
    payload: TransferRequest,
    principal: TokenPayload = Depends(get_current_principal),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransferResponse:
    try:
        record = await ledger.transfer(principal.id, payload.from_wallet_id, payload.to_wallet_id, payload.amount)
    except LedgerError as exc:
        raise ledger_http_error(exc) from exc
    return TransferResponse.model_validate(record)
