from uuid import UUID

from pydantic import BaseModel, Field

MAX_QUANTITY = 2_147_483_647


class CartItemCreate(BaseModel):
    product_id: UUID
    variant_id: UUID
    quantity: int = Field(ge=1, le=MAX_QUANTITY)


class CartItemUpdate(BaseModel):
    quantity: int = Field(ge=1, le=MAX_QUANTITY)


class CartSummaryRequest(BaseModel):
    variant_ids: list[UUID] = Field(min_length=1)


class CartMutationResult(BaseModel):
    variant_id: UUID | None = None
    quantity: int | None = None
    status: str


class PricedVariantRead(BaseModel):
    variant_id: UUID
    color: str = ""
    size: str = ""
    quantity: int
    buying_mode: str
    base_price: int
    unit_price: int
    has_discount: bool = False
    discount_type: str | None = None
    discount_value: int = 0
    line_total: int
    weight_grams: int = 0


class CartProductGroup(BaseModel):
    product_id: UUID
    product_title: str = ""
    product_description: str = ""
    product_primary_image_url: str = ""
    category_name: str = ""
    variants: list[PricedVariantRead] = []


class CartSellerGroup(BaseModel):
    seller_id: UUID
    seller_store_name: str = ""
    products: list[CartProductGroup] = []


class InvalidCartItem(BaseModel):
    variant_id: UUID
    reason: str
    product_id: UUID | None = None
    product_title: str = ""
    color: str = ""
    size: str = ""


class CartBundle(BaseModel):
    valid_items: list[CartSellerGroup] = []
    invalid_items: list[InvalidCartItem] = []
    subtotal: int = 0
    total_weight_grams: int = 0
    item_count: int = 0


class CartSummaryRead(BaseModel):
    total_price: int
    invalid_items: list[InvalidCartItem] = []
