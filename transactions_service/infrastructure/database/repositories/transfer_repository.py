"""SQLAlchemy implementation of the append-only ledger entry store."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from transactions_service.db.models import Transfer as TransferModel, Wallet as WalletModel
from transactions_service.modules.wallets.models import TransferRecord


class SqlTransferRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def append(self, *, amount: int, from_wallet_id: int, to_wallet_id: int) -> TransferRecord:
        model = TransferModel(amount=amount, from_wallet_id=from_wallet_id, to_wallet_id=to_wallet_id)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        to_code = await self.session.scalar(select(WalletModel.code).where(WalletModel.id == to_wallet_id))
        return self._to_domain(model, to_code)

    async def list_outgoing(self, wallet_id: int) -> Sequence[TransferRecord]:
        stmt = (
            select(TransferModel, WalletModel.code)
            .join(WalletModel, TransferModel.to_wallet_id == WalletModel.id)
            .where(TransferModel.from_wallet_id == wallet_id)
            .order_by(desc(TransferModel.created_at), desc(TransferModel.id))
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model, code) for model, code in result.all()]

    @staticmethod
    def _to_domain(model: TransferModel, to_wallet_code: str) -> TransferRecord:
        return TransferRecord(
            id=int(model.id),
            amount=int(model.amount),
            from_wallet_id=int(model.from_wallet_id),
            to_wallet_id=int(model.to_wallet_id),
            to_wallet_code=to_wallet_code,
            created_at=model.created_at,
        )
