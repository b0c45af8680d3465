from tanmore.db.base import Base  # noqa: F401
from tanmore.models.user import User  # noqa: F401
from tanmore.models.snapshot import DiscountType, ProductVariantSnapshot  # noqa: F401
from tanmore.models.cart import CartItem  # noqa: F401

__all__ = [
    "Base",
    "User",
    "DiscountType",
    "ProductVariantSnapshot",
    "CartItem",
]
