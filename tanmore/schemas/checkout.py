from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from tanmore.schemas.cart import MAX_QUANTITY, CartBundle


class CheckoutRequest(BaseModel):
    source: Literal["product", "cart"]
    variant_id: UUID | None = None
    quantity: int | None = Field(default=None, ge=1, le=MAX_QUANTITY)
    variant_ids: list[UUID] | None = None

    @model_validator(mode="after")
    def _check_source_fields(self) -> "CheckoutRequest":
        if self.source == "product":
            if self.variant_id is None or self.quantity is None:
                raise ValueError("variant_id and quantity are required for product checkout")
        elif not self.variant_ids:
            raise ValueError("variant_ids must be a non-empty array for cart checkout")
        return self


class CheckoutRead(CartBundle):
    checkout_session_id: UUID
    source: Literal["product", "cart"]
