from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from tanmore.core.errors import ValidationError
from tanmore.services.snapshots import VariantSnapshot

PricingTier = Literal["retail", "wholesale"]
DiscountKind = Literal["flat", "percentage"]


@dataclass(frozen=True)
class PricedLineItem:
    """Effective price of one variant at one quantity, in integer minor units."""

    unit_price: int
    quantity: int
    tier: PricingTier
    base_price: int
    has_discount: bool = False
    discount_type: DiscountKind | None = None
    discount_value: int = 0

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity


def _div_toward_zero(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def apply_discount(unit_price: int, *, amount: int, discount_type: DiscountKind) -> int:
    if discount_type == "flat":
        unit_price -= amount
    elif discount_type == "percentage":
        unit_price -= _div_toward_zero(unit_price * amount, 100)
    return max(unit_price, 0)


def _discount_terms(
    enabled: bool, amount: int | None, discount_type: str | None
) -> tuple[int, DiscountKind] | None:
    # amount and type must both be present for a discount to apply
    if not enabled or amount is None or discount_type is None:
        return None
    return amount, discount_type


def select_tier(snapshot: VariantSnapshot, quantity: int) -> PricingTier:
    if (
        snapshot.has_wholesale_enabled
        and snapshot.wholesale_min_quantity is not None
        and snapshot.wholesale_price is not None
        and quantity >= snapshot.wholesale_min_quantity
    ):
        return "wholesale"
    return "retail"


def price(snapshot: VariantSnapshot, quantity: int) -> PricedLineItem:
    if quantity <= 0:
        raise ValidationError("quantity", "must be greater than zero")

    tier = select_tier(snapshot, quantity)
    if tier == "wholesale":
        base = int(snapshot.wholesale_price or 0)
        terms = _discount_terms(
            snapshot.has_wholesale_discount, snapshot.wholesale_discount, snapshot.wholesale_discount_type
        )
    else:
        base = int(snapshot.retail_price)
        terms = _discount_terms(snapshot.has_retail_discount, snapshot.retail_discount, snapshot.retail_discount_type)

    if terms is None:
        return PricedLineItem(unit_price=max(base, 0), quantity=quantity, tier=tier, base_price=base)

    amount, discount_type = terms
    return PricedLineItem(
        unit_price=apply_discount(base, amount=amount, discount_type=discount_type),
        quantity=quantity,
        tier=tier,
        base_price=base,
        has_discount=True,
        discount_type=discount_type,
        discount_value=amount,
    )
