"""SQLAlchemy ORM models."""
from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from transactions_service.infrastructure.database.base import Base

# SQLite only autoincrements INTEGER PRIMARY KEY columns
IdType = BigInteger().with_variant(Integer(), "sqlite")


class Wallet(Base):
    __tablename__ = "wallets"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_wallets_balance_non_negative"),
        Index("ix_wallets_owner_created_at", "owner", "created_at"),
    )

    id = Column(IdType, primary_key=True, autoincrement=True)
    owner = Column(BigInteger, nullable=False, index=True)
    code = Column(String(32), unique=True, nullable=False)
    balance = Column(BigInteger, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    outgoing = relationship("Transfer", foreign_keys="Transfer.from_wallet_id", back_populates="from_wallet")
    incoming = relationship("Transfer", foreign_keys="Transfer.to_wallet_id", back_populates="to_wallet")


class Transfer(Base):
    __tablename__ = "transfers"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transfers_amount_positive"),
    )

    id = Column(IdType, primary_key=True, autoincrement=True)
    amount = Column(BigInteger, nullable=False)
    from_wallet_id = Column(IdType, ForeignKey("wallets.id"), nullable=False, index=True)
    to_wallet_id = Column(IdType, ForeignKey("wallets.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    from_wallet = relationship("Wallet", foreign_keys=[from_wallet_id], back_populates="outgoing")
    to_wallet = relationship("Wallet", foreign_keys=[to_wallet_id], back_populates="incoming")
