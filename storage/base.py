"""
Storage contract shared by the in-memory and relational backends.

Every read returns pydantic read models (``schemas``), never ORM rows, so
both backends are observably identical. Lookups of a missing record return
``None``; ``update_*`` on a missing id returns ``None`` and ``delete_*``
returns ``False``. Neither raises.

Uniqueness violations raise ``core.exceptions.ConflictError``. An update that
would leave a record invalid raises ``core.exceptions.InvalidDataError`` and
changes nothing. Anything else the backend cannot handle surfaces as
``core.exceptions.StorageError``.

Multi-step writes are wrapped in ``transaction()``: the block either applies
completely or not at all, and concurrent blocks on the same store are
serialized. Transactions nest; only the outermost one commits.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from pydantic import BaseModel, ValidationError

from core.exceptions import InvalidDataError
from schemas.catalog_schemas import (CategoryCreate, CategoryRead, CategoryUpdate,
                                     ProductCreate, ProductRead, ProductUpdate)
from schemas.user_schemas import UserInsert, UserRead, UserUpdate
from schemas.cart_schemas import CartItemCreate, CartItemRead, CartItemUpdate
from schemas.order_schemas import (OrderInsert, OrderRead, OrderUpdate,
                                   OrderItemInsert, OrderItemRead)
from schemas.review_schemas import ReviewCreate, ReviewRead


def apply_changes(schema: type[BaseModel], current: BaseModel, changes: BaseModel) -> BaseModel:
    """
    The record that results from applying ``changes`` to ``current``.

    The whole record is validated, so rules spanning fields (sale price below
    price) hold even when an update only touches one of them. Raises
    InvalidDataError, in which case nothing may be written.
    """
    try:
        return schema.model_validate({**current.model_dump(), **changes.model_dump(exclude_unset=True)})
    except ValidationError as exc:
        raise InvalidDataError(exc.errors()[0]["msg"]) from exc


class Storage(ABC):

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        ...

    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> UserRead | None: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> UserRead | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> UserRead | None: ...

    @abstractmethod
    def create_user(self, data: UserInsert) -> UserRead:
        """Raises ConflictError when the username or email is taken."""

    @abstractmethod
    def update_user(self, user_id: int, changes: UserUpdate) -> UserRead | None: ...

    @abstractmethod
    def delete_user(self, user_id: int) -> bool: ...

    # Categories
    @abstractmethod
    def get_categories(self) -> list[CategoryRead]: ...

    @abstractmethod
    def get_category(self, category_id: int) -> CategoryRead | None: ...

    @abstractmethod
    def get_category_by_slug(self, slug: str) -> CategoryRead | None: ...

    @abstractmethod
    def create_category(self, data: CategoryCreate) -> CategoryRead: ...

    @abstractmethod
    def update_category(self, category_id: int, changes: CategoryUpdate) -> CategoryRead | None: ...

    @abstractmethod
    def delete_category(self, category_id: int) -> bool: ...

    # Products
    @abstractmethod
    def get_products(self) -> list[ProductRead]: ...

    @abstractmethod
    def get_product(self, product_id: int, for_update: bool = False) -> ProductRead | None:
        """``for_update`` locks the product until the enclosing transaction ends."""

    @abstractmethod
    def get_product_by_slug(self, slug: str) -> ProductRead | None: ...

    @abstractmethod
    def get_products_by_category(self, category_id: int) -> list[ProductRead]: ...

    @abstractmethod
    def get_featured_products(self) -> list[ProductRead]: ...

    @abstractmethod
    def get_new_arrivals(self) -> list[ProductRead]: ...

    @abstractmethod
    def create_product(self, data: ProductCreate) -> ProductRead: ...

    @abstractmethod
    def update_product(self, product_id: int, changes: ProductUpdate) -> ProductRead | None: ...

    @abstractmethod
    def delete_product(self, product_id: int) -> bool: ...

    # Orders
    @abstractmethod
    def get_orders(self) -> list[OrderRead]: ...

    @abstractmethod
    def get_order(self, order_id: int) -> OrderRead | None: ...

    @abstractmethod
    def get_user_orders(self, user_id: int) -> list[OrderRead]: ...

    @abstractmethod
    def create_order(self, data: OrderInsert) -> OrderRead: ...

    @abstractmethod
    def update_order(self, order_id: int, changes: OrderUpdate) -> OrderRead | None: ...

    @abstractmethod
    def delete_order(self, order_id: int) -> bool: ...

    # Order items
    @abstractmethod
    def get_order_items(self, order_id: int) -> list[OrderItemRead]: ...

    @abstractmethod
    def create_order_item(self, data: OrderItemInsert) -> OrderItemRead: ...

    # Reviews
    @abstractmethod
    def get_reviews(self, product_id: int) -> list[ReviewRead]: ...

    @abstractmethod
    def create_review(self, data: ReviewCreate) -> ReviewRead: ...

    # Cart
    @abstractmethod
    def get_cart_items(self, user_id: int) -> list[CartItemRead]:
        """Cart lines of a user, each with its product resolved (or None)."""

    @abstractmethod
    def get_cart_item(self, item_id: int) -> CartItemRead | None: ...

    @abstractmethod
    def get_cart_item_by_user_and_product(self, user_id: int, product_id: int,
                                          for_update: bool = False) -> CartItemRead | None:
        """``for_update`` locks the line until the enclosing transaction ends."""

    @abstractmethod
    def create_cart_item(self, data: CartItemCreate) -> CartItemRead:
        """Raises ConflictError when the user already has a line for the product."""

    @abstractmethod
    def update_cart_item(self, item_id: int, changes: CartItemUpdate) -> CartItemRead | None: ...

    @abstractmethod
    def delete_cart_item(self, item_id: int) -> bool: ...

    @abstractmethod
    def clear_cart(self, user_id: int) -> bool:
        """Removes every line of the user. True even when the cart was empty."""
