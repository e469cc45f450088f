from fastapi import HTTPException
from starlette import status

from core.config import settings
from schemas.order_schemas import (CheckoutRequest, OrderCreate, OrderInsert, OrderItemCreate,
                                   OrderItemInsert, OrderWithItems, ShippingDetails)
from services import pricing
from storage import Storage
from utils.logger import get_logger

logger = get_logger(__name__)


class OrderService:

    @staticmethod
    def create_order(storage: Storage, body: OrderCreate) -> OrderWithItems:
        """
        Create an order and its lines in one transaction.

        Each line keeps the unit price that was submitted with it (what the
        customer saw in the cart), not the product's current price. The total
        is computed here from those lines plus shipping; a client-supplied
        total that disagrees is rejected rather than stored.
        """
        subtotal = round(sum(item.price * item.quantity for item in body.items), 2)
        total = pricing.order_total(subtotal)

        if body.total is not None and abs(body.total - total) > settings.ORDER_TOTAL_TOLERANCE:
            logger.warning(
                "Order total mismatch",
                extra={"user_id": body.user_id, "submitted": body.total, "computed": total}
            )
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                detail=f"Order total does not match items (expected {total:.2f})")

        shipping = ShippingDetails.model_validate(body.model_dump(include=set(ShippingDetails.model_fields)))
        return OrderService._persist(storage, body.user_id, total, shipping, body.items)

    @staticmethod
    def checkout(storage: Storage, body: CheckoutRequest) -> OrderWithItems:
        """
        Turn the user's cart into an order and empty the cart, atomically.

        Lines whose product no longer resolves are left out of the order.
        """
        with storage.transaction():
            cart = storage.get_cart_items(body.user_id)
            lines = [
                OrderItemCreate(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=pricing.effective_price(item.product),
                )
                for item in cart if item.product is not None
            ]
            if len(lines) < len(cart):
                logger.warning(
                    "Skipping cart lines with missing products",
                    extra={"user_id": body.user_id, "skipped": len(cart) - len(lines)}
                )
            if not lines:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                    detail="Cart is empty")

            total = pricing.order_total(pricing.cart_total(cart))
            shipping = ShippingDetails.model_validate(body.model_dump(include=set(ShippingDetails.model_fields)))
            order = OrderService._persist(storage, body.user_id, total, shipping, lines)
            storage.clear_cart(body.user_id)
            return order

    @staticmethod
    def _persist(storage: Storage, user_id: int, total: float,
                 shipping: ShippingDetails, lines: list[OrderItemCreate]) -> OrderWithItems:
        with storage.transaction():
            order = storage.create_order(OrderInsert(
                user_id=user_id,
                total=total,
                status="pending",
                **shipping.model_dump(),
            ))

            items = []
            for line in lines:
                if storage.get_product(line.product_id) is None:
                    # Raising here rolls back the order row as well
                    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                        detail=f"Product {line.product_id} not found")
                items.append(storage.create_order_item(
                    OrderItemInsert(order_id=order.id, **line.model_dump())
                ))

        logger.info(
            "Order created",
            extra={"order_id": order.id, "user_id": user_id, "total": total, "lines": len(items)}
        )
        return OrderWithItems(**order.model_dump(), items=items)

    @staticmethod
    def get_user_orders(storage: Storage, user_id: int) -> list[OrderWithItems]:
        return [
            OrderWithItems(**order.model_dump(), items=storage.get_order_items(order.id))
            for order in storage.get_user_orders(user_id)
        ]
