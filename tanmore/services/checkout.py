import logging
import uuid
from typing import Literal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from tanmore.core import metrics
from tanmore.core.config import settings
from tanmore.core.errors import ValidationError
from tanmore.schemas.cart import MAX_QUANTITY, CartBundle
from tanmore.schemas.checkout import CheckoutRead
from tanmore.services import cart_bundle

logger = logging.getLogger(__name__)


def _new_session_id() -> UUID:
    # Correlation token only; sessions are not stored or resumable.
    return uuid.uuid4()


def _build_session(user_id: UUID, source: Literal["product", "cart"], bundle: CartBundle) -> CheckoutRead:
    checkout_session_id = _new_session_id()
    metrics.record_checkout_session(source)
    logger.info(
        "checkout_session_created",
        extra={
            "customer_id": str(user_id),
            "checkout_session_id": str(checkout_session_id),
            "source": source,
            "valid": bundle.item_count,
            "invalid": len(bundle.invalid_items),
            "subtotal": bundle.subtotal,
        },
    )
    return CheckoutRead(checkout_session_id=checkout_session_id, source=source, **bundle.model_dump())


async def checkout_from_product(
    session: AsyncSession, user_id: UUID, variant_id: UUID, quantity: int
) -> CheckoutRead:
    """Buy-now for a single variant; stored cart rows are ignored."""
    if quantity <= 0 or quantity > MAX_QUANTITY:
        raise ValidationError("quantity", "must be between 1 and 2147483647")

    bundle = await cart_bundle.aggregate(session, user_id, [variant_id], quantity=quantity)
    if bundle.item_count == 0:
        reason = bundle.invalid_items[0].reason if bundle.invalid_items else "invalid product variant"
        raise ValidationError("variant_id", reason)
    return _build_session(user_id, "product", bundle)


async def checkout_from_cart(session: AsyncSession, user_id: UUID, variant_ids: list[UUID]) -> CheckoutRead:
    if not variant_ids:
        raise ValidationError("variant_ids", "must be a non-empty array")
    if len(variant_ids) > settings.max_checkout_variants:
        raise ValidationError("variant_ids", f"must contain at most {settings.max_checkout_variants} ids")

    bundle = await cart_bundle.aggregate(session, user_id, variant_ids)
    return _build_session(user_id, "cart", bundle)
