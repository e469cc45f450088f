from fastapi import APIRouter
from starlette import status

from schemas.order_schemas import CheckoutRequest, OrderCreate, OrderWithItems
from services.order_service import OrderService
from utils.deps import storage_dependency

router = APIRouter(
    prefix="/api/orders",
    tags=["orders"]
)


@router.post("", response_model=OrderWithItems, status_code=status.HTTP_201_CREATED)
def create_order(body: OrderCreate, storage: storage_dependency):
    return OrderService.create_order(storage, body)


@router.post("/checkout", response_model=OrderWithItems, status_code=status.HTTP_201_CREATED)
def checkout(body: CheckoutRequest, storage: storage_dependency):
    """Place an order from everything in the user's cart and empty it."""
    return OrderService.checkout(storage, body)


@router.get("/user/{user_id}", response_model=list[OrderWithItems])
def get_user_orders(user_id: int, storage: storage_dependency):
    return OrderService.get_user_orders(storage, user_id)
