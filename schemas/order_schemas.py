from datetime import datetime
from typing import Literal
from pydantic import Field, model_validator
from schemas.base import CamelModel

OrderStatus = Literal["pending", "confirmed", "completed", "cancelled"]


class ShippingDetails(CamelModel):
    shipping_address: str | None = None
    shipping_city: str | None = None
    shipping_state: str | None = None
    shipping_zip: str | None = None
    shipping_country: str | None = None


class OrderItemCreate(CamelModel):
    product_id: int
    quantity: int = Field(ge=1)
    # Unit price the customer saw in the cart
    price: float = Field(ge=0)


class OrderCreate(ShippingDetails):
    """
    Checkout submission.

    Accepts the flat body the storefront client posts
    (``{userId, total, shippingAddress, ..., items}``) as well as
    ``{"order": {...}, "items": [...]}``. ``total`` is optional and only
    checked against the server-side total.
    """
    user_id: int
    total: float | None = Field(None, ge=0)
    items: list[OrderItemCreate] = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def flatten_nested_order(cls, data):
        if isinstance(data, dict) and isinstance(data.get("order"), dict):
            flat = dict(data["order"])
            flat["items"] = data.get("items", flat.get("items"))
            return flat
        return data


class CheckoutRequest(ShippingDetails):
    user_id: int


class OrderInsert(ShippingDetails):
    user_id: int
    total: float
    status: OrderStatus = "pending"


class OrderRead(OrderInsert):
    id: int
    created_at: datetime


class OrderUpdate(ShippingDetails):
    status: OrderStatus | None = None


class OrderItemInsert(OrderItemCreate):
    order_id: int


class OrderItemRead(OrderItemInsert):
    id: int


class OrderWithItems(OrderRead):
    items: list[OrderItemRead] = Field(default_factory=list)
