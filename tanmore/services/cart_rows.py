from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from tanmore.core.errors import ConflictError
from tanmore.models.cart import CartItem
from tanmore.services import cart_state


async def get_cart_row(session: AsyncSession, customer_id: UUID, variant_id: UUID) -> CartItem | None:
    result = await session.execute(
        select(CartItem).where(CartItem.user_id == customer_id, CartItem.variant_id == variant_id)
    )
    return result.scalar_one_or_none()


async def insert_cart_row(session: AsyncSession, customer_id: UUID, variant_id: UUID, quantity: int) -> CartItem:
    row = CartItem(user_id=customer_id, variant_id=variant_id, required_quantity=quantity, is_active=True)
    session.add(row)
    try:
        await session.flush()
    except IntegrityError as exc:
        # A concurrent add won the (user_id, variant_id) unique constraint.
        raise ConflictError("item already exists in cart") from exc
    return row


async def reactivate_cart_row(session: AsyncSession, row: CartItem, quantity: int) -> CartItem:
    cart_state.activate(row, quantity)
    await session.flush()
    return row


async def update_cart_row_quantity(session: AsyncSession, row: CartItem, quantity: int) -> CartItem:
    row.required_quantity = quantity
    await session.flush()
    return row


async def deactivate_cart_row(session: AsyncSession, row: CartItem) -> CartItem:
    cart_state.tombstone(row)
    await session.flush()
    return row


async def clear_all_cart_rows(session: AsyncSession, customer_id: UUID) -> int:
    result = await session.execute(
        update(CartItem)
        .where(CartItem.user_id == customer_id)
        .values(is_active=False, required_quantity=None)
    )
    return result.rowcount or 0
