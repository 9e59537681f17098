"""Stores and orders.

Revision ID: 0001
Revises: 
Create Date: 2026-10-18 09:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Revision identifiers
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the stores and orders tables."""

    # Stores table
    op.create_table(
        "stores",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("api_key", sa.Text, nullable=True),
        sa.Column("fee_percent", sa.Float, nullable=True),
        sa.Column("fee_fixed", sa.Float, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_stores_created_at", "stores", ["created_at"])

    # Orders table
    op.create_table(
        "orders",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("amount", sa.Float, nullable=False),
        sa.Column("description", sa.Text, nullable=True, server_default=""),
        sa.Column("status", sa.String(20), nullable=True, server_default="pending"),
        sa.Column("store_id", sa.String(64), nullable=True),
        sa.Column("store_name", sa.String(255), nullable=True),
        sa.Column("customer_name", sa.String(255), nullable=True),
        sa.Column("customer_tax_id", sa.String(32), nullable=True),
        sa.Column("customer_email", sa.String(255), nullable=True),
        sa.Column("customer_phone", sa.String(32), nullable=True),
        sa.Column("payment_id", sa.String(100), nullable=True),
        sa.Column("qr_code", sa.Text, nullable=True),
        sa.Column("qr_image_url", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_orders_created_at", "orders", ["created_at"])
    op.create_index("ix_orders_status", "orders", ["status"])
    op.create_index("ix_orders_store_id", "orders", ["store_id"])


def downgrade() -> None:
    """Drop the stores and orders tables."""
    op.drop_index("ix_orders_store_id", table_name="orders")
    op.drop_index("ix_orders_status", table_name="orders")
    op.drop_index("ix_orders_created_at", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_stores_created_at", table_name="stores")
    op.drop_table("stores")
