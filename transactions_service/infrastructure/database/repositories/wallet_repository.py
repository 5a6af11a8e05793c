"""SQLAlchemy implementation of the wallet store."""

from __future__ import annotations

from typing import Iterable, Sequence

from sqlalchemy import desc, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from transactions_service.db.models import Wallet as WalletModel
from transactions_service.modules.wallets.addressing import WalletAddressing
from transactions_service.modules.wallets.exceptions import (
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidWalletError,
    WalletCodeConflictError,
)
from transactions_service.modules.wallets.models import MAX_AMOUNT, Wallet, WalletRef


class SqlWalletRepository:
    """Wallet repository backed by SQLAlchemy models.

    Every call runs on the session of the enclosing atomic unit and never
    commits by itself.
    """

    def __init__(self, session: AsyncSession, addressing: WalletAddressing) -> None:
        self.session = session
        self.addressing = addressing

    @property
    def _key(self):
        return getattr(WalletModel, self.addressing.key)

    async def put(self, *, owner: int, code: str) -> Wallet:
        model = WalletModel(owner=owner, code=code, balance=0)
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise WalletCodeConflictError(code) from exc
        await self.session.refresh(model)
        return self._to_domain(model)

    async def get(self, ref: WalletRef) -> Wallet | None:
        stmt = select(WalletModel).where(self._key == ref)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def get_owned(self, ref: WalletRef, owner: int) -> Wallet | None:
        stmt = (
            select(WalletModel)
            .where(self._key == ref, WalletModel.owner == owner)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def list_wallets(self, owner: int | None = None) -> Sequence[Wallet]:
        stmt = select(WalletModel)
        if owner is not None:
            stmt = stmt.where(WalletModel.owner == owner)
        stmt = stmt.order_by(desc(WalletModel.created_at), desc(WalletModel.id))
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def lock(self, refs: Iterable[WalletRef]) -> dict[WalletRef, Wallet]:
        # rows are locked in id order so opposite transfers cannot deadlock
        keys = list(dict.fromkeys(refs))
        stmt = (
            select(WalletModel)
            .where(self._key.in_(keys))
            .order_by(WalletModel.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        wallets = [self._to_domain(model) for model in result.scalars().all()]
        return {self.addressing.ref_of(wallet): wallet for wallet in wallets}

    async def adjust_balance(self, wallet_id: int, delta: int) -> Wallet:
        stmt = update(WalletModel).where(WalletModel.id == wallet_id)
        if delta < 0:
            stmt = stmt.where(WalletModel.balance >= -delta)
        else:
            stmt = stmt.where(WalletModel.balance <= MAX_AMOUNT - delta)
        stmt = stmt.values(balance=WalletModel.balance + delta).execution_options(synchronize_session=False)
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            exists = await self.session.scalar(
                select(func.count()).select_from(WalletModel).where(WalletModel.id == wallet_id)
            )
            if not exists:
                raise InvalidWalletError(f"wallet {wallet_id} does not exist")
            if delta > 0:
                raise InvalidAmountError(f"wallet {wallet_id} balance would exceed {MAX_AMOUNT}")
            raise InsufficientBalanceError(f"wallet {wallet_id} cannot be debited by {-delta}")
        return await self._reload(wallet_id)

    async def _reload(self, wallet_id: int) -> Wallet:
        stmt = (
            select(WalletModel)
            .where(WalletModel.id == wallet_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return self._to_domain(result.scalar_one())

    @staticmethod
    def _to_domain(model: WalletModel) -> Wallet:
        return Wallet(
            id=int(model.id),
            owner=int(model.owner),
            code=model.code,
            balance=int(model.balance),
            created_at=model.created_at,
        )
