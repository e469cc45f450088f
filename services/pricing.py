"""
Checkout pricing rules.

The cart page, the checkout summary and order creation all price through
these functions, so the shipping rule exists in exactly one place.
"""

from typing import Iterable

from core.config import settings
from schemas.cart_schemas import CartItemRead, CartSummary
from schemas.catalog_schemas import ProductRead


def effective_price(product: ProductRead | None) -> float:
    """Sale price when there is one, list price otherwise, 0 for a missing product."""
    if product is None:
        return 0.0
    if product.sale_price is not None:
        return product.sale_price
    return product.price


def cart_total(items: Iterable[CartItemRead]) -> float:
    # Lines whose product did not resolve count for nothing
    return round(sum(effective_price(item.product) * item.quantity for item in items), 2)


def shipping_fee(subtotal: float) -> float:
    # Strictly above the threshold ships free
    if subtotal > settings.FREE_SHIPPING_THRESHOLD:
        return 0.0
    return settings.SHIPPING_FEE


def order_total(subtotal: float) -> float:
    return round(subtotal + shipping_fee(subtotal), 2)


def summarize_cart(items: list[CartItemRead]) -> CartSummary:
    subtotal = cart_total(items)
    return CartSummary(
        subtotal=subtotal,
        shipping=shipping_fee(subtotal),
        total=order_total(subtotal),
        item_count=sum(item.quantity for item in items),
    )
