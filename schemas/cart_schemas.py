from pydantic import Field
from schemas.base import CamelModel
from schemas.catalog_schemas import ProductRead


class CartItemCreate(CamelModel):
    user_id: int
    product_id: int
    quantity: int = Field(1, ge=1)


class CartItemUpdate(CamelModel):
    quantity: int = Field(ge=1)


class UpdateQuantityRequest(CamelModel):
    # Zero or negative removes the line
    quantity: int


class CartItemRead(CamelModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    # None when the referenced product no longer exists
    product: ProductRead | None = None


class CartSummary(CamelModel):
    subtotal: float
    shipping: float
    total: float
    item_count: int
