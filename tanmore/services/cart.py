import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from tanmore.core import metrics
from tanmore.core.errors import ValidationError
from tanmore.db.session import unit_of_work
from tanmore.schemas.cart import (
    MAX_QUANTITY,
    CartBundle,
    CartItemCreate,
    CartItemUpdate,
    CartMutationResult,
    CartSummaryRead,
)
from tanmore.services import cart_bundle, cart_rows, cart_state, moderation, snapshots
from tanmore.services.cart_state import CartAction, CartStatus
from tanmore.services.snapshots import VariantSnapshot

logger = logging.getLogger(__name__)


def _validate_quantity(quantity: int) -> None:
    if quantity <= 0 or quantity > MAX_QUANTITY:
        raise ValidationError("required_quantity", "must be between 1 and 2147483647")


def _validate_stock(snapshot: VariantSnapshot, quantity: int) -> None:
    if quantity > snapshot.stock_amount:
        raise ValidationError("required_quantity", "not enough stock available")


async def _gate_customer(session: AsyncSession, user_id: UUID) -> None:
    customer = await snapshots.get_customer(session, user_id)
    moderation.require_customer(customer)


def record_cart_event(status: CartStatus, user_id: UUID, variant_id: UUID | None = None, **extra) -> None:
    metrics.record_cart_transition(status.value)
    logger.info(
        status.value,
        extra={
            "customer_id": str(user_id),
            "variant_id": str(variant_id) if variant_id else None,
            "status": status.value,
            **extra,
        },
    )


async def add_item(session: AsyncSession, user_id: UUID, payload: CartItemCreate) -> CartMutationResult:
    _validate_quantity(payload.quantity)
    async with unit_of_work(session):
        await _gate_customer(session, user_id)
        snapshot = await snapshots.get_variant_snapshot(session, payload.variant_id, product_id=payload.product_id)
        moderation.require_variant(snapshot)
        _validate_stock(snapshot, payload.quantity)

        row = await cart_rows.get_cart_row(session, user_id, payload.variant_id)
        status = cart_state.transition(cart_state.state_of(row), CartAction.add)
        if row is None:
            await cart_rows.insert_cart_row(session, user_id, payload.variant_id, payload.quantity)
        else:
            await cart_rows.reactivate_cart_row(session, row, payload.quantity)

    record_cart_event(status, user_id, payload.variant_id, quantity=payload.quantity)
    return CartMutationResult(variant_id=payload.variant_id, quantity=payload.quantity, status=status.value)


async def update_item(
    session: AsyncSession, user_id: UUID, variant_id: UUID, payload: CartItemUpdate
) -> CartMutationResult:
    _validate_quantity(payload.quantity)
    async with unit_of_work(session):
        await _gate_customer(session, user_id)
        snapshot = await snapshots.get_variant_snapshot(session, variant_id)
        moderation.require_variant(snapshot)
        _validate_stock(snapshot, payload.quantity)

        row = await cart_rows.get_cart_row(session, user_id, variant_id)
        status = cart_state.transition(cart_state.state_of(row), CartAction.update)
        await cart_rows.update_cart_row_quantity(session, row, payload.quantity)

    record_cart_event(status, user_id, variant_id, quantity=payload.quantity)
    return CartMutationResult(variant_id=variant_id, quantity=payload.quantity, status=status.value)


async def remove_item(session: AsyncSession, user_id: UUID, variant_id: UUID) -> CartMutationResult:
    async with unit_of_work(session):
        await _gate_customer(session, user_id)
        row = await cart_rows.get_cart_row(session, user_id, variant_id)
        status = cart_state.transition(cart_state.state_of(row), CartAction.remove)
        await cart_rows.deactivate_cart_row(session, row)

    record_cart_event(status, user_id, variant_id)
    return CartMutationResult(variant_id=variant_id, quantity=None, status=status.value)


async def clear_cart(session: AsyncSession, user_id: UUID) -> CartMutationResult:
    async with unit_of_work(session):
        await _gate_customer(session, user_id)
        cleared = await cart_rows.clear_all_cart_rows(session, user_id)

    # Clear tombstones every row regardless of its state.
    status = CartStatus.cleared
    record_cart_event(status, user_id, rows=cleared)
    return CartMutationResult(status=status.value)


async def list_cart_items(session: AsyncSession, user_id: UUID) -> CartBundle:
    return await cart_bundle.aggregate(session, user_id)


async def cart_summary(session: AsyncSession, user_id: UUID, variant_ids: list[UUID]) -> CartSummaryRead:
    bundle = await cart_bundle.aggregate(session, user_id, variant_ids)
    return CartSummaryRead(total_price=bundle.subtotal, invalid_items=bundle.invalid_items)
