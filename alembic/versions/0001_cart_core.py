"""users, variant snapshots and cart items

Revision ID: 0001
Revises:
Create Date: 2025-06-14
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: Sequence[str] | None = None

discount_type = postgresql.ENUM("flat", "percentage", name="discounttype", create_type=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            onupdate=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    discount_type.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("is_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_banned", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "product_variant_snapshots",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("category_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("category_name", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("seller_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("seller_store_name", sa.String(length=160), nullable=False, server_default=""),
        sa.Column("is_seller_approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_seller_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_seller_banned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("product_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("product_title", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("product_description", sa.Text(), nullable=False, server_default=""),
        sa.Column("product_primary_image_url", sa.String(length=500), nullable=False, server_default=""),
        sa.Column("is_product_approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_product_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_product_banned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("variant_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("color", sa.String(length=60), nullable=False, server_default=""),
        sa.Column("size", sa.String(length=60), nullable=False, server_default=""),
        sa.Column("is_variant_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_variant_in_stock", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("stock_amount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("weight_grams", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("retail_price", sa.BigInteger(), nullable=False),
        sa.Column("has_retail_discount", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("retail_discount", sa.BigInteger(), nullable=True),
        sa.Column("retail_discount_type", discount_type, nullable=True),
        sa.Column("has_wholesale_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("wholesale_price", sa.BigInteger(), nullable=True),
        sa.Column("wholesale_min_quantity", sa.Integer(), nullable=True),
        sa.Column("has_wholesale_discount", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("wholesale_discount", sa.BigInteger(), nullable=True),
        sa.Column("wholesale_discount_type", discount_type, nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_product_variant_snapshots_variant_id", "product_variant_snapshots", ["variant_id"], unique=True
    )
    op.create_index("ix_product_variant_snapshots_seller_id", "product_variant_snapshots", ["seller_id"])
    op.create_index("ix_product_variant_snapshots_product_id", "product_variant_snapshots", ["product_id"])

    op.create_table(
        "cart_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("variant_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("required_quantity", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "variant_id", name="uq_cart_items_user_variant"),
    )
    op.create_index("ix_cart_items_user_id", "cart_items", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_cart_items_user_id", table_name="cart_items")
    op.drop_table("cart_items")
    op.drop_index("ix_product_variant_snapshots_product_id", table_name="product_variant_snapshots")
    op.drop_index("ix_product_variant_snapshots_seller_id", table_name="product_variant_snapshots")
    op.drop_index("ix_product_variant_snapshots_variant_id", table_name="product_variant_snapshots")
    op.drop_table("product_variant_snapshots")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    discount_type.drop(op.get_bind(), checkfirst=True)
