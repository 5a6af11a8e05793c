"""create wallets and transfers tables

Revision ID: 3f9c1e7a2b40
Revises:
Create Date: 2026-10-19 09:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c1e7a2b40"
down_revision = None
branch_labels = None
depends_on = None

_id_type = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    op.create_table(
        "wallets",
        sa.Column("id", _id_type, primary_key=True, autoincrement=True),
        sa.Column("owner", sa.BigInteger(), nullable=False),
        sa.Column("code", sa.String(length=32), nullable=False, unique=True),
        sa.Column("balance", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("balance >= 0", name="ck_wallets_balance_non_negative"),
    )
    op.create_index("ix_wallets_owner", "wallets", ["owner"])
    op.create_index("ix_wallets_owner_created_at", "wallets", ["owner", "created_at"])

    op.create_table(
        "transfers",
        sa.Column("id", _id_type, primary_key=True, autoincrement=True),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("from_wallet_id", _id_type, sa.ForeignKey("wallets.id"), nullable=False),
        sa.Column("to_wallet_id", _id_type, sa.ForeignKey("wallets.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("amount > 0", name="ck_transfers_amount_positive"),
    )
    op.create_index("ix_transfers_from_wallet_id", "transfers", ["from_wallet_id"])
    op.create_index("ix_transfers_to_wallet_id", "transfers", ["to_wallet_id"])


def downgrade() -> None:
    op.drop_index("ix_transfers_to_wallet_id", table_name="transfers")
    op.drop_index("ix_transfers_from_wallet_id", table_name="transfers")
    op.drop_table("transfers")

    op.drop_index("ix_wallets_owner_created_at", table_name="wallets")
    op.drop_index("ix_wallets_owner", table_name="wallets")
    op.drop_table("wallets")
