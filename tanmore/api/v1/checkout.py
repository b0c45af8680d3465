from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tanmore.core.dependencies import get_current_customer_id
from tanmore.db.session import get_session
from tanmore.schemas.checkout import CheckoutRead, CheckoutRequest
from tanmore.services import checkout as checkout_service

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.post("", response_model=CheckoutRead, status_code=status.HTTP_201_CREATED)
async def initiate_checkout(
    payload: CheckoutRequest,
    session: AsyncSession = Depends(get_session),
    customer_id: UUID = Depends(get_current_customer_id),
):
    if payload.source == "product":
        return await checkout_service.checkout_from_product(
            session, customer_id, payload.variant_id, payload.quantity
        )
    return await checkout_service.checkout_from_cart(session, customer_id, payload.variant_ids)
