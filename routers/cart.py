from fastapi import APIRouter, Response
from starlette import status

from schemas.cart_schemas import CartItemCreate, CartItemRead, CartSummary, UpdateQuantityRequest
from services import pricing
from services.cart_service import CartService
from utils.deps import storage_dependency

router = APIRouter(
    prefix="/api/cart",
    tags=["cart"]
)


@router.get("/{user_id}", response_model=list[CartItemRead])
def get_cart(user_id: int, storage: storage_dependency):
    """Cart lines with their product attached (``product`` is null when it no longer exists)."""
    return storage.get_cart_items(user_id)


@router.get("/{user_id}/summary", response_model=CartSummary)
def get_cart_summary(user_id: int, storage: storage_dependency):
    return pricing.summarize_cart(storage.get_cart_items(user_id))


@router.post("", response_model=CartItemRead, status_code=status.HTTP_201_CREATED)
def add_to_cart(body: CartItemCreate, response: Response, storage: storage_dependency):
    item, created = CartService.add_to_cart(storage, body)
    if not created:
        response.status_code = status.HTTP_200_OK
    return item


@router.put("/{item_id}")
def update_cart_item(item_id: int, body: UpdateQuantityRequest, storage: storage_dependency):
    item = CartService.update_quantity(storage, item_id, body.quantity)
    if item is None:
        return {"message": "Cart item removed successfully"}
    return item


@router.delete("/user/{user_id}")
def clear_cart(user_id: int, storage: storage_dependency):
    CartService.clear_cart(storage, user_id)
    return {"message": "Cart cleared successfully"}


@router.delete("/{item_id}")
def remove_cart_item(item_id: int, storage: storage_dependency):
    CartService.remove_from_cart(storage, item_id)
    return {"message": "Cart item removed successfully"}
