"""Read-side aggregation shared by cart listing, cart summary and checkout.

Requested variants are split into priced, seller -> product grouped items and a
flat list of invalid ones. Nothing here opens a transaction: the customer check,
the active-id read and the snapshot read are separate statements, so stock or
moderation may move between them.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from tanmore.schemas.cart import (
    CartBundle,
    CartProductGroup,
    CartSellerGroup,
    InvalidCartItem,
    PricedVariantRead,
)
from tanmore.services import moderation, pricing, snapshots
from tanmore.services.snapshots import CartSnapshotRow, VariantSnapshot


def _priced_variant(snapshot: VariantSnapshot, line: pricing.PricedLineItem) -> PricedVariantRead:
    return PricedVariantRead(
        variant_id=snapshot.variant_id,
        color=snapshot.color,
        size=snapshot.size,
        quantity=line.quantity,
        buying_mode=line.tier,
        base_price=line.base_price,
        unit_price=line.unit_price,
        has_discount=line.has_discount,
        discount_type=line.discount_type,
        discount_value=line.discount_value,
        line_total=line.line_total,
        weight_grams=snapshot.weight_grams,
    )


def _unavailable(snapshot: VariantSnapshot) -> InvalidCartItem:
    return InvalidCartItem(
        variant_id=snapshot.variant_id,
        reason=moderation.UNAVAILABLE_REASON,
        product_id=snapshot.product_id,
        product_title=snapshot.product_title,
        color=snapshot.color,
        size=snapshot.size,
    )


def build_bundle(rows: list[CartSnapshotRow], requested_ids: list[UUID]) -> CartBundle:
    sellers: dict[UUID, CartSellerGroup] = {}
    products: dict[tuple[UUID, UUID], CartProductGroup] = {}
    invalid: list[InvalidCartItem] = []
    found: set[UUID] = set()
    subtotal = 0
    weight = 0
    count = 0

    for row in rows:
        snapshot = row.snapshot
        found.add(snapshot.variant_id)
        if row.quantity <= 0:
            continue
        if not moderation.check_variant(snapshot).eligible:
            invalid.append(_unavailable(snapshot))
            continue

        line = pricing.price(snapshot, row.quantity)
        seller = sellers.get(snapshot.seller_id)
        if seller is None:
            seller = CartSellerGroup(seller_id=snapshot.seller_id, seller_store_name=snapshot.seller_store_name)
            sellers[snapshot.seller_id] = seller
        key = (snapshot.seller_id, snapshot.product_id)
        product = products.get(key)
        if product is None:
            product = CartProductGroup(
                product_id=snapshot.product_id,
                product_title=snapshot.product_title,
                product_description=snapshot.product_description,
                product_primary_image_url=snapshot.product_primary_image_url,
                category_name=snapshot.category_name,
            )
            products[key] = product
            seller.products.append(product)
        product.variants.append(_priced_variant(snapshot, line))

        subtotal += line.line_total
        weight += line.quantity * snapshot.weight_grams
        count += 1

    for variant_id in snapshots.unique_ids(requested_ids):
        if variant_id not in found:
            invalid.append(InvalidCartItem(variant_id=variant_id, reason=moderation.NOT_FOUND_REASON))

    return CartBundle(
        valid_items=list(sellers.values()),
        invalid_items=invalid,
        subtotal=subtotal,
        total_weight_grams=weight,
        item_count=count,
    )


async def aggregate(
    session: AsyncSession,
    customer_id: UUID,
    variant_ids: list[UUID] | None = None,
    *,
    quantity: int | None = None,
) -> CartBundle:
    """Gate the customer, then price and group ``variant_ids``.

    ``variant_ids=None`` means the customer's active cart. ``quantity`` replaces
    the stored cart quantity for every row (buy-now from a product page).
    """
    customer = await snapshots.get_customer(session, customer_id)
    moderation.require_customer(customer)

    if variant_ids is None:
        variant_ids = await snapshots.list_active_variant_ids(session, customer_id)
    if not variant_ids:
        return CartBundle()

    rows = await snapshots.get_snapshots_for_variants(session, customer_id, variant_ids)
    if quantity is not None:
        rows = [row.with_quantity(quantity) for row in rows]
    return build_bundle(rows, variant_ids)
