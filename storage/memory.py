import threading
from contextlib import contextmanager
from datetime import datetime, timezone

from pydantic import BaseModel

from core.exceptions import ConflictError
from schemas.catalog_schemas import (CategoryCreate, CategoryRead, CategoryUpdate,
                                     ProductCreate, ProductRead, ProductUpdate)
from schemas.user_schemas import UserInsert, UserRead, UserUpdate
from schemas.cart_schemas import CartItemCreate, CartItemRead, CartItemUpdate
from schemas.order_schemas import (OrderInsert, OrderRead, OrderUpdate,
                                   OrderItemInsert, OrderItemRead)
from schemas.review_schemas import ReviewCreate, ReviewRead
from storage.base import Storage, apply_changes
from utils.logger import get_logger

logger = get_logger(__name__)

TABLES = ("users", "categories", "products", "orders", "order_items", "reviews", "cart_items")


class MemStorage(Storage):
    """
    Volatile store: one insertion-ordered dict per entity, keyed by an
    auto-incrementing id. Each instance is isolated, so tests create their own.

    A single re-entrant lock guards every table and id counter. Transactions
    hold the lock for their whole block and restore a snapshot of the tables
    when the block raises.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._tx_depth = 0
        self._tables: dict[str, dict[int, BaseModel]] = {name: {} for name in TABLES}
        self._next_ids: dict[str, int] = {name: 1 for name in TABLES}

    @contextmanager
    def transaction(self):
        with self._lock:
            outermost = self._tx_depth == 0
            if outermost:
                snapshot = ({name: dict(rows) for name, rows in self._tables.items()},
                            dict(self._next_ids))
            self._tx_depth += 1
            try:
                yield
            except Exception:
                if outermost:
                    self._tables, self._next_ids = snapshot
                    logger.debug("In-memory transaction rolled back")
                raise
            finally:
                self._tx_depth -= 1

    # Table helpers. Records are stored as pydantic models and replaced on
    # update, callers always receive copies.

    def _rows(self, table: str) -> list:
        with self._lock:
            return [row.model_copy(deep=True) for row in self._tables[table].values()]

    def _get(self, table: str, record_id: int):
        with self._lock:
            row = self._tables[table].get(record_id)
            return row.model_copy(deep=True) if row is not None else None

    def _insert(self, table: str, model: type[BaseModel], values: dict):
        with self._lock:
            record_id = self._next_ids[table]
            self._next_ids[table] += 1
            row = model.model_validate({**values, "id": record_id})
            self._tables[table][record_id] = row
            return row.model_copy(deep=True)

    def _update(self, table: str, model: type[BaseModel], record_id: int, changes: BaseModel):
        with self._lock:
            row = self._tables[table].get(record_id)
            if row is None:
                return None
            updated = apply_changes(model, row, changes)
            self._tables[table][record_id] = updated
            return updated.model_copy(deep=True)

    def _delete(self, table: str, record_id: int) -> bool:
        with self._lock:
            return self._tables[table].pop(record_id, None) is not None

    def _ensure_unique(self, table: str, field: str, value, exclude_id: int | None = None):
        for row in self._tables[table].values():
            if row.id != exclude_id and getattr(row, field) == value:
                raise ConflictError(f"{table}.{field} already exists", field=field)

    # Users

    def get_user(self, user_id):
        return self._get("users", user_id)

    def get_user_by_email(self, email):
        return next((u for u in self._rows("users") if u.email == email), None)

    def get_user_by_username(self, username):
        return next((u for u in self._rows("users") if u.username == username), None)

    def create_user(self, data: UserInsert):
        with self._lock:
            self._ensure_unique("users", "username", data.username)
            self._ensure_unique("users", "email", data.email)
            return self._insert("users", UserRead, data.model_dump())

    def update_user(self, user_id, changes: UserUpdate):
        with self._lock:
            if changes.email is not None:
                self._ensure_unique("users", "email", changes.email, exclude_id=user_id)
            return self._update("users", UserRead, user_id, changes)

    def delete_user(self, user_id):
        return self._delete("users", user_id)

    # Categories

    def get_categories(self):
        return self._rows("categories")

    def get_category(self, category_id):
        return self._get("categories", category_id)

    def get_category_by_slug(self, slug):
        return next((c for c in self._rows("categories") if c.slug == slug), None)

    def create_category(self, data: CategoryCreate):
        with self._lock:
            self._ensure_unique("categories", "slug", data.slug)
            return self._insert("categories", CategoryRead, data.model_dump())

    def update_category(self, category_id, changes: CategoryUpdate):
        with self._lock:
            if changes.slug is not None:
                self._ensure_unique("categories", "slug", changes.slug, exclude_id=category_id)
            return self._update("categories", CategoryRead, category_id, changes)

    def delete_category(self, category_id):
        return self._delete("categories", category_id)

    # Products

    def get_products(self):
        return self._rows("products")

    def get_product(self, product_id, for_update=False):
        # Rows are locked by holding the store lock for the whole transaction
        return self._get("products", product_id)

    def get_product_by_slug(self, slug):
        return next((p for p in self._rows("products") if p.slug == slug), None)

    def get_products_by_category(self, category_id):
        return [p for p in self._rows("products") if p.category_id == category_id]

    def get_featured_products(self):
        return [p for p in self._rows("products") if p.featured]

    def get_new_arrivals(self):
        return [p for p in self._rows("products") if p.new_arrival]

    def create_product(self, data: ProductCreate):
        with self._lock:
            self._ensure_unique("products", "slug", data.slug)
            return self._insert("products", ProductRead, data.model_dump())

    def update_product(self, product_id, changes: ProductUpdate):
        with self._lock:
            if changes.slug is not None:
                self._ensure_unique("products", "slug", changes.slug, exclude_id=product_id)
            return self._update("products", ProductRead, product_id, changes)

    def delete_product(self, product_id):
        return self._delete("products", product_id)

    # Orders

    def get_orders(self):
        return self._rows("orders")

    def get_order(self, order_id):
        return self._get("orders", order_id)

    def get_user_orders(self, user_id):
        return [o for o in self._rows("orders") if o.user_id == user_id]

    def create_order(self, data: OrderInsert):
        values = {**data.model_dump(), "created_at": datetime.now(timezone.utc)}
        return self._insert("orders", OrderRead, values)

    def update_order(self, order_id, changes: OrderUpdate):
        return self._update("orders", OrderRead, order_id, changes)

    def delete_order(self, order_id):
        return self._delete("orders", order_id)

    # Order items

    def get_order_items(self, order_id):
        return [i for i in self._rows("order_items") if i.order_id == order_id]

    def create_order_item(self, data: OrderItemInsert):
        return self._insert("order_items", OrderItemRead, data.model_dump())

    # Reviews

    def get_reviews(self, product_id):
        return [r for r in self._rows("reviews") if r.product_id == product_id]

    def create_review(self, data: ReviewCreate):
        values = {**data.model_dump(), "created_at": datetime.now(timezone.utc)}
        return self._insert("reviews", ReviewRead, values)

    # Cart

    def _with_product(self, item: CartItemRead | None) -> CartItemRead | None:
        if item is None:
            return None
        item.product = self.get_product(item.product_id)
        return item

    def get_cart_items(self, user_id):
        return [self._with_product(i) for i in self._rows("cart_items") if i.user_id == user_id]

    def get_cart_item(self, item_id):
        return self._with_product(self._get("cart_items", item_id))

    def get_cart_item_by_user_and_product(self, user_id, product_id, for_update=False):
        item = next(
            (i for i in self._rows("cart_items") if i.user_id == user_id and i.product_id == product_id),
            None
        )
        return self._with_product(item)

    def create_cart_item(self, data: CartItemCreate):
        with self._lock:
            for row in self._tables["cart_items"].values():
                if row.user_id == data.user_id and row.product_id == data.product_id:
                    raise ConflictError("Cart line already exists", field="product_id")
            item = self._insert("cart_items", CartItemRead, data.model_dump())
            return self._with_product(item)

    def update_cart_item(self, item_id, changes: CartItemUpdate):
        return self._with_product(self._update("cart_items", CartItemRead, item_id, changes))

    def delete_cart_item(self, item_id):
        return self._delete("cart_items", item_id)

    def clear_cart(self, user_id):
        with self._lock:
            table = self._tables["cart_items"]
            for item_id in [i for i, row in table.items() if row.user_id == user_id]:
                del table[item_id]
        return True
