import enum
import uuid
from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Enum, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from tanmore.db.base import Base


class DiscountType(str, enum.Enum):
    flat = "flat"
    percentage = "percentage"


class ProductVariantSnapshot(Base):
    """Denormalised read model: one row per variant joining seller, product and pricing state.

    Prices and discounts are integer minor units. Nullable pricing columns only
    carry meaning when their ``has_*`` flag is set.
    """

    __tablename__ = "product_variant_snapshots"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    category_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, default=uuid.uuid4)
    category_name: Mapped[str] = mapped_column(String(120), nullable=False, default="")

    seller_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    seller_store_name: Mapped[str] = mapped_column(String(160), nullable=False, default="")
    is_seller_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_seller_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_seller_banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    product_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    product_title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    product_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    product_primary_image_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    is_product_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_product_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_product_banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    variant_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, unique=True, index=True)
    color: Mapped[str] = mapped_column(String(60), nullable=False, default="")
    size: Mapped[str] = mapped_column(String(60), nullable=False, default="")
    is_variant_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_variant_in_stock: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    stock_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    weight_grams: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    retail_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    has_retail_discount: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    retail_discount: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    retail_discount_type: Mapped[DiscountType | None] = mapped_column(Enum(DiscountType), nullable=True)

    has_wholesale_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    wholesale_price: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    wholesale_min_quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    has_wholesale_discount: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    wholesale_discount: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    wholesale_discount_type: Mapped[DiscountType | None] = mapped_column(Enum(DiscountType), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
