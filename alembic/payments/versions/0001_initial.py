"""initial payments schema

Revision ID: 0001_payments
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_payments"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("payment_mode", sa.String(length=16), nullable=False),
        sa.Column("client_email", sa.String(), nullable=False),
        sa.Column("client_name", sa.String(), nullable=False),
        sa.Column("route", sa.String(), nullable=False),
        sa.Column("card_last4", sa.String(length=4), nullable=True),
        sa.Column("card_brand", sa.String(), nullable=True),
        sa.Column("status", sa.String(length=16), server_default="completed", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("payment_mode IN ('credit', 'debit')", name="ck_payments_payment_mode"),
        sa.CheckConstraint("card_last4 ~ '^[0-9]{1,4}$'", name="ck_payments_card_last4_digits"),
    )
    op.create_index("ix_payments_client_email", "payments", ["client_email"])


def downgrade() -> None:
    op.drop_index("ix_payments_client_email", table_name="payments")
    op.drop_table("payments")
