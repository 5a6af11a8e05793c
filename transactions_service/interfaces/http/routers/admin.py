"""Administrative wallet endpoints."""
from fastapi import APIRouter, Depends

from transactions_service.core.security import get_current_admin
from transactions_service.interfaces.http.deps import get_ledger_service
from transactions_service.interfaces.http.errors import ledger_http_error
from transactions_service.interfaces.http.routers.wallets import to_wallet_response
from transactions_service.modules.wallets import LedgerError, LedgerService
from transactions_service.schemas import TokenPayload, WalletListResponse

router = APIRouter()


@router.get("/list_wallets", response_model=WalletListResponse, summary="List every wallet (admin)")
async def list_wallets(
    _: TokenPayload = Depends(get_current_admin),
    ledger: LedgerService = Depends(get_ledger_service),
) -> WalletListResponse:
    try:
        wallets = await ledger.list_wallets(None)
    except LedgerError as exc:
        raise ledger_http_error(exc) from exc
    return WalletListResponse(total=len(wallets), wallets=[to_wallet_response(w) for w in wallets])
