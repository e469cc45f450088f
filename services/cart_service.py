from fastapi import HTTPException
from starlette import status

from core.exceptions import ConflictError
from schemas.cart_schemas import CartItemCreate, CartItemRead, CartItemUpdate
from storage import Storage
from utils.logger import get_logger

logger = get_logger(__name__)


class CartService:

    @staticmethod
    def add_to_cart(storage: Storage, data: CartItemCreate) -> tuple[CartItemRead, bool]:
        """
        Add a product to a user's cart.

        A user holds at most one line per product: adding a product that is
        already in the cart adds to that line's quantity instead of inserting
        a second line.

        Returns:
            (cart line, created) where ``created`` is False when merged
        """
        try:
            return CartService._merge_or_insert(storage, data)
        except ConflictError:
            # A concurrent add inserted the line between our read and insert.
            # It is committed now, so a second pass merges into it.
            logger.info(
                "Cart line inserted concurrently, merging",
                extra={"user_id": data.user_id, "product_id": data.product_id}
            )
            return CartService._merge_or_insert(storage, data)

    @staticmethod
    def _merge_or_insert(storage: Storage, data: CartItemCreate) -> tuple[CartItemRead, bool]:
        with storage.transaction():
            if storage.get_product(data.product_id) is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                    detail="Product not found")

            # Locked so a concurrent add waits and merges into our result
            existing = storage.get_cart_item_by_user_and_product(data.user_id, data.product_id,
                                                                 for_update=True)
            if existing:
                merged = storage.update_cart_item(
                    existing.id,
                    CartItemUpdate(quantity=existing.quantity + data.quantity)
                )
                logger.debug(
                    "Merged into existing cart line",
                    extra={"cart_item_id": existing.id, "quantity": merged.quantity}
                )
                return merged, False

            return storage.create_cart_item(data), True

    @staticmethod
    def update_quantity(storage: Storage, item_id: int, quantity: int) -> CartItemRead | None:
        """
        Replace a line's quantity. Zero or less removes the line and returns None.
        """
        if quantity <= 0:
            CartService.remove_from_cart(storage, item_id)
            return None

        item = storage.update_cart_item(item_id, CartItemUpdate(quantity=quantity))
        if item is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail="Cart item not found")
        return item

    @staticmethod
    def remove_from_cart(storage: Storage, item_id: int) -> None:
        if not storage.delete_cart_item(item_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail="Cart item not found")

    @staticmethod
    def clear_cart(storage: Storage, user_id: int) -> None:
        storage.clear_cart(user_id)
        logger.info("Cart cleared", extra={"user_id": user_id})
