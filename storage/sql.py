from contextlib import contextmanager

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, StorageError
from models import Category, Product, User, CartItem, Order, OrderItem, Review
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


class SqlStorage(Storage):
    """
    Relational store on top of one SQLAlchemy session.

    Outside a transaction every write commits on its own. Inside
    ``transaction()`` writes are only flushed, and the outermost block commits
    or rolls back the lot.
    """

    def __init__(self, db: Session):
        self.db = db
        self._tx_depth = 0

    @contextmanager
    def transaction(self):
        self._tx_depth += 1
        try:
            yield
        except Exception:
            if self._tx_depth == 1:
                self.db.rollback()
                logger.debug("Transaction rolled back")
            raise
        else:
            if self._tx_depth == 1:
                self._commit()
        finally:
            self._tx_depth -= 1

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError("Unique constraint violated") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Commit failed", extra={"error_type": type(exc).__name__}, exc_info=True)
            raise StorageError("Storage failure") from exc

    def _save(self):
        """Flush pending changes, committing them unless a transaction is open."""
        if self._tx_depth:
            try:
                self.db.flush()
            except IntegrityError as exc:
                raise ConflictError("Unique constraint violated") from exc
        else:
            self._commit()

    def _add(self, row, schema: type[BaseModel]):
        self.db.add(row)
        self._save()
        self.db.refresh(row)
        return schema.model_validate(row)

    def _update(self, orm_model, schema: type[BaseModel], record_id: int, changes: BaseModel):
        row = self.db.get(orm_model, record_id)
        if row is None:
            return None
        # Rejected before the row is touched, so nothing invalid reaches the session
        apply_changes(schema, schema.model_validate(row), changes)
        for field, value in changes.model_dump(exclude_unset=True).items():
            setattr(row, field, value)
        self._save()
        self.db.refresh(row)
        return schema.model_validate(row)

    def _delete(self, orm_model, record_id: int) -> bool:
        row = self.db.get(orm_model, record_id)
        if row is None:
            return False
        self.db.delete(row)
        self._save()
        return True

    def _one(self, query, schema: type[BaseModel]):
        row = query.first()
        return schema.model_validate(row) if row is not None else None

    @staticmethod
    def _locked(query):
        # SELECT ... FOR UPDATE, and overwrite any stale copy in the identity map
        # with the row as it is once the lock is held
        return query.with_for_update().populate_existing()

    @staticmethod
    def _all(query, schema: type[BaseModel]) -> list:
        return [schema.model_validate(row) for row in query.all()]

    # Users

    def get_user(self, user_id):
        return self._one(self.db.query(User).filter(User.id == user_id), UserRead)

    def get_user_by_email(self, email):
        return self._one(self.db.query(User).filter(User.email == email), UserRead)

    def get_user_by_username(self, username):
        return self._one(self.db.query(User).filter(User.username == username), UserRead)

    def create_user(self, data: UserInsert):
        return self._add(User(**data.model_dump()), UserRead)

    def update_user(self, user_id, changes: UserUpdate):
        return self._update(User, UserRead, user_id, changes)

    def delete_user(self, user_id):
        return self._delete(User, user_id)

    # Categories

    def get_categories(self):
        return self._all(self.db.query(Category).order_by(Category.id), CategoryRead)

    def get_category(self, category_id):
        return self._one(self.db.query(Category).filter(Category.id == category_id), CategoryRead)

    def get_category_by_slug(self, slug):
        return self._one(self.db.query(Category).filter(Category.slug == slug), CategoryRead)

    def create_category(self, data: CategoryCreate):
        return self._add(Category(**data.model_dump()), CategoryRead)

    def update_category(self, category_id, changes: CategoryUpdate):
        return self._update(Category, CategoryRead, category_id, changes)

    def delete_category(self, category_id):
        return self._delete(Category, category_id)

    # Products

    def _products(self):
        return self.db.query(Product).order_by(Product.id)

    def get_products(self):
        return self._all(self._products(), ProductRead)

    def get_product(self, product_id, for_update=False):
        query = self.db.query(Product).filter(Product.id == product_id)
        return self._one(self._locked(query) if for_update else query, ProductRead)

    def get_product_by_slug(self, slug):
        return self._one(self.db.query(Product).filter(Product.slug == slug), ProductRead)

    def get_products_by_category(self, category_id):
        return self._all(self._products().filter(Product.category_id == category_id), ProductRead)

    def get_featured_products(self):
        return self._all(self._products().filter(Product.featured.is_(True)), ProductRead)

    def get_new_arrivals(self):
        return self._all(self._products().filter(Product.new_arrival.is_(True)), ProductRead)

    def create_product(self, data: ProductCreate):
        return self._add(Product(**data.model_dump()), ProductRead)

    def update_product(self, product_id, changes: ProductUpdate):
        return self._update(Product, ProductRead, product_id, changes)

    def delete_product(self, product_id):
        return self._delete(Product, product_id)

    # Orders

    def get_orders(self):
        return self._all(self.db.query(Order).order_by(Order.id), OrderRead)

    def get_order(self, order_id):
        return self._one(self.db.query(Order).filter(Order.id == order_id), OrderRead)

    def get_user_orders(self, user_id):
        return self._all(self.db.query(Order).filter(Order.user_id == user_id).order_by(Order.id), OrderRead)

    def create_order(self, data: OrderInsert):
        return self._add(Order(**data.model_dump()), OrderRead)

    def update_order(self, order_id, changes: OrderUpdate):
        return self._update(Order, OrderRead, order_id, changes)

    def delete_order(self, order_id):
        return self._delete(Order, order_id)

    # Order items

    def get_order_items(self, order_id):
        query = self.db.query(OrderItem).filter(OrderItem.order_id == order_id).order_by(OrderItem.id)
        return self._all(query, OrderItemRead)

    def create_order_item(self, data: OrderItemInsert):
        return self._add(OrderItem(**data.model_dump()), OrderItemRead)

    # Reviews

    def get_reviews(self, product_id):
        query = self.db.query(Review).filter(Review.product_id == product_id).order_by(Review.id)
        return self._all(query, ReviewRead)

    def create_review(self, data: ReviewCreate):
        return self._add(Review(**data.model_dump()), ReviewRead)

    # Cart

    def _cart_item(self, row: CartItem | None) -> CartItemRead | None:
        if row is None:
            return None
        # Secondary lookup per line, the product may have been deleted since
        return CartItemRead(
            id=row.id,
            user_id=row.user_id,
            product_id=row.product_id,
            quantity=row.quantity,
            product=self.get_product(row.product_id),
        )

    def get_cart_items(self, user_id):
        rows = self.db.query(CartItem).filter(CartItem.user_id == user_id).order_by(CartItem.id).all()
        return [self._cart_item(row) for row in rows]

    def get_cart_item(self, item_id):
        return self._cart_item(self.db.get(CartItem, item_id))

    def get_cart_item_by_user_and_product(self, user_id, product_id, for_update=False):
        query = self.db.query(CartItem).filter(
            CartItem.user_id == user_id,
            CartItem.product_id == product_id
        )
        if for_update:
            query = self._locked(query)
        return self._cart_item(query.first())

    def create_cart_item(self, data: CartItemCreate):
        row = CartItem(**data.model_dump())
        self.db.add(row)
        self._save()
        self.db.refresh(row)
        return self._cart_item(row)

    def update_cart_item(self, item_id, changes: CartItemUpdate):
        row = self.db.get(CartItem, item_id)
        if row is None:
            return None
        row.quantity = changes.quantity
        self._save()
        self.db.refresh(row)
        return self._cart_item(row)

    def delete_cart_item(self, item_id):
        return self._delete(CartItem, item_id)

    def clear_cart(self, user_id):
        self.db.query(CartItem).filter(CartItem.user_id == user_id).delete()
        self._save()
        return True
