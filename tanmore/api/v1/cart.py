from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tanmore.core.dependencies import get_current_customer_id
from tanmore.db.session import get_session
from tanmore.schemas.cart import (
    CartBundle,
    CartItemCreate,
    CartItemUpdate,
    CartMutationResult,
    CartSummaryRead,
    CartSummaryRequest,
)
from tanmore.services import cart as cart_service

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartBundle)
async def get_cart(
    session: AsyncSession = Depends(get_session),
    customer_id: UUID = Depends(get_current_customer_id),
):
    return await cart_service.list_cart_items(session, customer_id)


@router.post("/items", response_model=CartMutationResult)
async def add_item(
    payload: CartItemCreate,
    session: AsyncSession = Depends(get_session),
    customer_id: UUID = Depends(get_current_customer_id),
):
    return await cart_service.add_item(session, customer_id, payload)


@router.patch("/items/{variant_id}", response_model=CartMutationResult)
async def update_item(
    variant_id: UUID,
    payload: CartItemUpdate,
    session: AsyncSession = Depends(get_session),
    customer_id: UUID = Depends(get_current_customer_id),
):
    return await cart_service.update_item(session, customer_id, variant_id, payload)


@router.delete("/items/{variant_id}", response_model=CartMutationResult)
async def remove_item(
    variant_id: UUID,
    session: AsyncSession = Depends(get_session),
    customer_id: UUID = Depends(get_current_customer_id),
):
    return await cart_service.remove_item(session, customer_id, variant_id)


@router.delete("", response_model=CartMutationResult)
async def clear_cart(
    session: AsyncSession = Depends(get_session),
    customer_id: UUID = Depends(get_current_customer_id),
):
    return await cart_service.clear_cart(session, customer_id)


@router.post("/summary", response_model=CartSummaryRead)
async def cart_summary(
    payload: CartSummaryRequest,
    session: AsyncSession = Depends(get_session),
    customer_id: UUID = Depends(get_current_customer_id),
):
    return await cart_service.cart_summary(session, customer_id, payload.variant_ids)
