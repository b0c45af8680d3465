"""Read side of the cart core: customers and denormalised variant snapshots.

Snapshots are always read fresh from ``product_variant_snapshots``; nothing in
this module caches them.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from uuid import UUID

from sqlalchemy import and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from tanmore.core.errors import NotFoundError
from tanmore.models.cart import CartItem
from tanmore.models.snapshot import ProductVariantSnapshot
from tanmore.models.user import User


def _enum_value(value) -> str | None:
    if value is None:
        return None
    return str(getattr(value, "value", value))


@dataclass(frozen=True)
class VariantSnapshot:
    seller_id: UUID
    seller_store_name: str
    is_seller_approved: bool
    is_seller_archived: bool
    is_seller_banned: bool

    product_id: UUID
    product_title: str
    product_description: str
    product_primary_image_url: str
    category_name: str
    is_product_approved: bool
    is_product_archived: bool
    is_product_banned: bool

    variant_id: UUID
    color: str
    size: str
    is_variant_archived: bool
    is_variant_in_stock: bool
    stock_amount: int
    weight_grams: int

    retail_price: int
    has_retail_discount: bool = False
    retail_discount: int | None = None
    retail_discount_type: str | None = None

    has_wholesale_enabled: bool = False
    wholesale_price: int | None = None
    wholesale_min_quantity: int | None = None
    has_wholesale_discount: bool = False
    wholesale_discount: int | None = None
    wholesale_discount_type: str | None = None

    @classmethod
    def from_model(cls, row: ProductVariantSnapshot) -> "VariantSnapshot":
        return cls(
            seller_id=row.seller_id,
            seller_store_name=row.seller_store_name,
            is_seller_approved=row.is_seller_approved,
            is_seller_archived=row.is_seller_archived,
            is_seller_banned=row.is_seller_banned,
            product_id=row.product_id,
            product_title=row.product_title,
            product_description=row.product_description,
            product_primary_image_url=row.product_primary_image_url,
            category_name=row.category_name,
            is_product_approved=row.is_product_approved,
            is_product_archived=row.is_product_archived,
            is_product_banned=row.is_product_banned,
            variant_id=row.variant_id,
            color=row.color,
            size=row.size,
            is_variant_archived=row.is_variant_archived,
            is_variant_in_stock=row.is_variant_in_stock,
            stock_amount=row.stock_amount,
            weight_grams=row.weight_grams,
            retail_price=row.retail_price,
            has_retail_discount=row.has_retail_discount,
            retail_discount=row.retail_discount,
            retail_discount_type=_enum_value(row.retail_discount_type),
            has_wholesale_enabled=row.has_wholesale_enabled,
            wholesale_price=row.wholesale_price,
            wholesale_min_quantity=row.wholesale_min_quantity,
            has_wholesale_discount=row.has_wholesale_discount,
            wholesale_discount=row.wholesale_discount,
            wholesale_discount_type=_enum_value(row.wholesale_discount_type),
        )


@dataclass(frozen=True)
class CartSnapshotRow:
    """A snapshot joined with the customer's active cart quantity (0 when not in cart)."""

    snapshot: VariantSnapshot
    quantity: int

    def with_quantity(self, quantity: int) -> "CartSnapshotRow":
        return replace(self, quantity=quantity)


def unique_ids(variant_ids: list[UUID]) -> list[UUID]:
    seen: set[UUID] = set()
    ordered: list[UUID] = []
    for variant_id in variant_ids:
        if variant_id in seen:
            continue
        seen.add(variant_id)
        ordered.append(variant_id)
    return ordered


async def get_customer(session: AsyncSession, customer_id: UUID) -> User:
    result = await session.execute(select(User).where(User.id == customer_id))
    customer = result.scalar_one_or_none()
    if customer is None:
        raise NotFoundError("user")
    return customer


async def get_variant_snapshot(
    session: AsyncSession, variant_id: UUID, product_id: UUID | None = None
) -> VariantSnapshot:
    query = select(ProductVariantSnapshot).where(ProductVariantSnapshot.variant_id == variant_id)
    if product_id is not None:
        query = query.where(ProductVariantSnapshot.product_id == product_id)
    result = await session.execute(query)
    row = result.scalar_one_or_none()
    if row is None:
        raise NotFoundError("variant snapshot")
    return VariantSnapshot.from_model(row)


async def get_snapshots_for_variants(
    session: AsyncSession, customer_id: UUID, variant_ids: list[UUID]
) -> list[CartSnapshotRow]:
    """One query joining each requested snapshot with the customer's active cart row.

    Rows come back in the order the ids were requested; ids with no snapshot
    are simply absent.
    """
    requested = unique_ids(variant_ids)
    if not requested:
        return []
    result = await session.execute(
        select(ProductVariantSnapshot, CartItem.required_quantity)
        .outerjoin(
            CartItem,
            and_(
                CartItem.variant_id == ProductVariantSnapshot.variant_id,
                CartItem.user_id == customer_id,
                CartItem.is_active.is_(True),
            ),
        )
        .where(ProductVariantSnapshot.variant_id.in_(requested))
    )
    position = {variant_id: idx for idx, variant_id in enumerate(requested)}
    rows = [
        CartSnapshotRow(snapshot=VariantSnapshot.from_model(snapshot), quantity=quantity or 0)
        for snapshot, quantity in result.all()
    ]
    rows.sort(key=lambda row: position[row.snapshot.variant_id])
    return rows


async def list_active_variant_ids(session: AsyncSession, customer_id: UUID) -> list[UUID]:
    result = await session.execute(
        select(CartItem.variant_id)
        .where(CartItem.user_id == customer_id, CartItem.is_active.is_(True))
        .order_by(CartItem.created_at, CartItem.id)
    )
    return list(result.scalars().all())
