"""Lifecycle of a (customer, variant) cart row.

    absent   --add-->    active      added_to_cart
    inactive --add-->    active      cart_item_reactivated
    active   --update--> active      cart_item_updated
    active   --remove--> inactive    cart_item_removed
    any      --clear-->  inactive    cart_cleared

Every other (state, action) pair is rejected. Rows are never deleted.
"""

from __future__ import annotations

import enum

from tanmore.core.errors import ConflictError, NotFoundError, ValidationError
from tanmore.models.cart import CartItem


class CartRowState(str, enum.Enum):
    absent = "absent"
    active = "active"
    inactive = "inactive"


class CartAction(str, enum.Enum):
    add = "add"
    update = "update"
    remove = "remove"
    clear = "clear"


class CartStatus(str, enum.Enum):
    added = "added_to_cart"
    reactivated = "cart_item_reactivated"
    updated = "cart_item_updated"
    removed = "cart_item_removed"
    cleared = "cart_cleared"


_TRANSITIONS: dict[tuple[CartRowState, CartAction], CartStatus] = {
    (CartRowState.absent, CartAction.add): CartStatus.added,
    (CartRowState.inactive, CartAction.add): CartStatus.reactivated,
    (CartRowState.active, CartAction.update): CartStatus.updated,
    (CartRowState.active, CartAction.remove): CartStatus.removed,
    (CartRowState.absent, CartAction.clear): CartStatus.cleared,
    (CartRowState.active, CartAction.clear): CartStatus.cleared,
    (CartRowState.inactive, CartAction.clear): CartStatus.cleared,
}


def state_of(row: CartItem | None) -> CartRowState:
    if row is None:
        return CartRowState.absent
    return CartRowState.active if row.is_active else CartRowState.inactive


def _reject(state: CartRowState, action: CartAction) -> Exception:
    if action == CartAction.add:
        return ConflictError("item already exists in cart")
    if action == CartAction.update:
        if state == CartRowState.absent:
            return NotFoundError("cart item")
        return ValidationError("cart", "cart item is archived")
    if action == CartAction.remove:
        if state == CartRowState.absent:
            return ValidationError("cart_item", "item not found")
        return ConflictError("item already removed")
    return ValidationError("action", f"unsupported cart action {action.value}")


def transition(state: CartRowState, action: CartAction) -> CartStatus:
    status = _TRANSITIONS.get((state, action))
    if status is None:
        raise _reject(state, action)
    return status


def activate(row: CartItem, quantity: int) -> None:
    row.is_active = True
    row.required_quantity = quantity


def tombstone(row: CartItem) -> None:
    row.is_active = False
    row.required_quantity = None
