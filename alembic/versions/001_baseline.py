"""Baseline migration - marketplace schema.

Revision ID: 001_baseline
Revises: None
Create Date: 2026-10-19

Tables created:
- users, admins
- products
- orders, transactions
- notifications, admin_notifications
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY, UUID

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_baseline"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """Create the marketplace tables."""

    # ==========================================================================
    # 1. Accounts
    # ==========================================================================
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("bio", sa.Text()),
        sa.Column("profile_picture", sa.String(500)),
        sa.Column("phone_number", sa.String(20)),
        sa.Column("address", sa.Text()),
        sa.Column("city", sa.String(100)),
        sa.Column("state", sa.String(100)),
        sa.Column("country", sa.String(100)),
        # Payout details
        sa.Column("account_name", sa.String(255)),
        sa.Column("bank_name", sa.String(255)),
        sa.Column("account_number", sa.String(20)),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        # Password reset
        sa.Column("reset_password_token", sa.String(64)),
        sa.Column("reset_password_expires", sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index("ix_users_username", "users", ["username"])
    op.create_index("ix_users_reset_password_token", "users", ["reset_password_token"])
    op.create_index("idx_users_email", "users", ["email"])
    op.create_index("idx_users_created_at", "users", ["created_at"])

    op.create_table(
        "admins",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_admins_email", "admins", ["email"])

    # ==========================================================================
    # 2. Catalog
    # ==========================================================================
    op.create_table(
        "products",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("price", sa.Float()),
        sa.Column("price_category", sa.String(50)),
        sa.Column("images", ARRAY(sa.String()), nullable=False, server_default="{}"),
        sa.Column("primary_image", sa.String(500)),
        sa.Column("video_url", sa.String(500)),
        sa.Column("location", sa.String(255)),
        sa.Column("specification", sa.Text()),
        sa.Column("condition", sa.String(100)),
        sa.Column("tag", sa.String(20), nullable=False, server_default="For sale"),
        sa.Column("availability", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column(
            "uploader_id",
            UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("idx_products_category", "products", ["category"])
    op.create_index("idx_products_uploader", "products", ["uploader_id"])
    op.create_index("idx_products_status", "products", ["status"])

    # ==========================================================================
    # 3. Orders and payments
    # ==========================================================================
    op.create_table(
        "orders",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("product_id", UUID(as_uuid=True), sa.ForeignKey("products.id", ondelete="SET NULL")),
        sa.Column("amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("transaction_reference", sa.String(100)),
        sa.Column("shipment_reference", sa.String(100)),
        *_timestamps(),
    )
    op.create_index("ix_orders_transaction_reference", "orders", ["transaction_reference"])
    op.create_index("ix_orders_shipment_reference", "orders", ["shipment_reference"])
    op.create_index("idx_orders_user", "orders", ["user_id"])
    op.create_index("idx_orders_status", "orders", ["status"])
    op.create_index("idx_orders_user_created", "orders", ["user_id", "created_at"])

    op.create_table(
        "transactions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("transaction_id", sa.String(50), nullable=False),
        sa.Column("reference", sa.String(100), nullable=False, unique=True),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("order_id", sa.String(64)),
        sa.Column("currency", sa.String(10), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("customer_email", sa.String(255), nullable=False),
        sa.Column("payment_method", sa.String(50), nullable=False),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("gateway_response", sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_transactions_reference", "transactions", ["reference"])
    op.create_index("idx_transactions_customer_paid", "transactions", ["customer_email", "paid_at"])

    # ==========================================================================
    # 4. Notifications
    # ==========================================================================
    op.create_table(
        "notifications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("idx_notifications_user_read", "notifications", ["user_id", "read"])

    op.create_table(
        "admin_notifications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("product_id", UUID(as_uuid=True), sa.ForeignKey("products.id", ondelete="SET NULL")),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("idx_admin_notifications_read", "admin_notifications", ["read"])


def downgrade() -> None:
    """Drop the marketplace tables in dependency order."""
    op.drop_table("admin_notifications")
    op.drop_table("notifications")
    op.drop_table("transactions")
    op.drop_table("orders")
    op.drop_table("products")
    op.drop_table("admins")
    op.drop_table("users")
