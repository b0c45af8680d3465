from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Protocol

from tanmore.core import metrics
from tanmore.core.errors import AuthError, ValidationError
from tanmore.services.snapshots import VariantSnapshot

logger = logging.getLogger(__name__)

Subject = Literal["customer", "seller", "product", "variant"]

# Shown to customers instead of the precise failing subject.
UNAVAILABLE_REASON = "variant unavailable due to moderation or stock"
NOT_FOUND_REASON = "variant not found in system"


class ModeratedCustomer(Protocol):
    is_archived: bool
    is_banned: bool


@dataclass(frozen=True)
class Verdict:
    eligible: bool
    subject: Subject | None = None
    reason: str | None = None


ELIGIBLE = Verdict(eligible=True)


def check_customer(customer: ModeratedCustomer) -> Verdict:
    if customer.is_archived:
        return Verdict(False, "customer", "user is archived")
    if customer.is_banned:
        return Verdict(False, "customer", "user is banned")
    return ELIGIBLE


def check_variant(snapshot: VariantSnapshot) -> Verdict:
    """Fail-fast moderation check; any single failing flag makes the variant ineligible."""
    if not snapshot.is_seller_approved or snapshot.is_seller_archived or snapshot.is_seller_banned:
        return Verdict(False, "seller", "seller moderation failed")
    if not snapshot.is_product_approved or snapshot.is_product_archived or snapshot.is_product_banned:
        return Verdict(False, "product", "product is not available for cart")
    if snapshot.is_variant_archived or not snapshot.is_variant_in_stock:
        return Verdict(False, "variant", "variant is not in stock or archived")
    return ELIGIBLE


def raise_for_verdict(verdict: Verdict) -> None:
    """Turn an ineligible verdict into the operator-facing error for mutations."""
    if verdict.eligible:
        return
    metrics.record_gate_rejection(verdict.subject or "unknown")
    logger.warning("moderation_gate_rejected", extra={"subject": verdict.subject, "reason": verdict.reason})
    reason = verdict.reason or "not eligible"
    if verdict.subject in ("customer", "seller"):
        raise AuthError(reason)
    raise ValidationError(verdict.subject or "variant", reason)


def require_customer(customer: ModeratedCustomer) -> None:
    raise_for_verdict(check_customer(customer))


def require_variant(snapshot: VariantSnapshot) -> None:
    raise_for_verdict(check_variant(snapshot))
