"""
Contract tests: both storage backends must behave the same.
"""
import pytest

from core.exceptions import ConflictError, InvalidDataError
from schemas.cart_schemas import CartItemCreate, CartItemUpdate
from schemas.catalog_schemas import CategoryCreate, CategoryUpdate, ProductCreate, ProductUpdate
from schemas.order_schemas import OrderInsert, OrderItemInsert, OrderUpdate
from schemas.review_schemas import ReviewCreate
from schemas.user_schemas import UserInsert, UserUpdate


def make_user(storage, username="omar", email="omar@example.com"):
    return storage.create_user(UserInsert(username=username, email=email, hashed_password="hash"))


def test_category_crud(storage):
    created = storage.create_category(CategoryCreate(name="Jewelry", slug="jewelry"))

    assert created.id is not None
    assert storage.get_category(created.id).name == "Jewelry"
    assert storage.get_category_by_slug("jewelry").id == created.id
    assert [c.slug for c in storage.get_categories()] == ["jewelry"]

    updated = storage.update_category(created.id, CategoryUpdate(description="Handcrafted"))
    assert updated.description == "Handcrafted"
    assert updated.name == "Jewelry"

    assert storage.delete_category(created.id) is True
    assert storage.get_category(created.id) is None


def test_missing_records(storage):
    assert storage.get_product(999) is None
    assert storage.get_product_by_slug("nope") is None
    assert storage.get_category_by_slug("nope") is None
    assert storage.get_user_by_username("nobody") is None
    assert storage.update_product(999, ProductUpdate(stock=1)) is None
    assert storage.update_category(999, CategoryUpdate(name="x")) is None
    assert storage.update_user(999, UserUpdate(city="Pune")) is None
    assert storage.update_order(999, OrderUpdate(status="confirmed")) is None
    assert storage.update_cart_item(999, CartItemUpdate(quantity=2)) is None
    assert storage.delete_product(999) is False
    assert storage.delete_cart_item(999) is False
    assert storage.delete_order(999) is False
    assert storage.delete_user(999) is False


def test_product_queries(storage, category, product, sale_product):
    other = storage.create_category(CategoryCreate(name="Kitchen", slug="kitchen"))
    storage.create_product(ProductCreate(name="Ladle", slug="ladle", price=3.5, category_id=other.id))

    assert [p.slug for p in storage.get_products()] == ["luxury-tea-set", "premium-silk-hijab", "ladle"]
    assert [p.slug for p in storage.get_featured_products()] == ["luxury-tea-set"]
    assert [p.slug for p in storage.get_new_arrivals()] == ["premium-silk-hijab"]
    assert [p.slug for p in storage.get_products_by_category(other.id)] == ["ladle"]
    assert storage.get_product_by_slug("premium-silk-hijab").sale_price == 5.0


def test_product_update_only_touches_given_fields(storage, sale_product):
    updated = storage.update_product(sale_product.id, ProductUpdate(stock=7))

    assert updated.stock == 7
    assert updated.price == 10.0
    assert updated.sale_price == 5.0
    assert updated.name == "Premium Silk Hijab"


def test_update_must_keep_sale_price_below_price(storage, sale_product):
    with pytest.raises(InvalidDataError):
        storage.update_product(sale_product.id, ProductUpdate(price=4.0))
    with pytest.raises(InvalidDataError):
        storage.update_product(sale_product.id, ProductUpdate(sale_price=12.0))

    unchanged = storage.get_product(sale_product.id)
    assert (unchanged.price, unchanged.sale_price) == (10.0, 5.0)
    assert [p.id for p in storage.get_products()] == [sale_product.id]


def test_update_one_side_of_sale_price(storage, sale_product):
    assert storage.update_product(sale_product.id, ProductUpdate(price=20.0)).price == 20.0
    assert storage.update_product(sale_product.id, ProductUpdate(sale_price=15.0)).sale_price == 15.0


def test_duplicate_slug_conflicts(storage, category):
    with pytest.raises(ConflictError):
        storage.create_category(CategoryCreate(name="Abayas again", slug="abayas"))


def test_user_uniqueness(storage):
    make_user(storage)

    with pytest.raises(ConflictError):
        make_user(storage, email="other@example.com")
    with pytest.raises(ConflictError):
        make_user(storage, username="other")

    assert storage.get_user_by_email("omar@example.com").username == "omar"


def test_user_update(storage):
    user = make_user(storage)
    updated = storage.update_user(user.id, UserUpdate(city="Pune", phone="+919876543210"))

    assert updated.city == "Pune"
    assert updated.email == "omar@example.com"


def test_cart_items_carry_their_product(storage, product):
    item = storage.create_cart_item(CartItemCreate(user_id=1, product_id=product.id, quantity=2))

    assert item.product.slug == "luxury-tea-set"
    assert storage.get_cart_item(item.id).product.id == product.id
    assert storage.get_cart_item_by_user_and_product(1, product.id).id == item.id
    assert storage.get_cart_item_by_user_and_product(2, product.id) is None


def test_cart_item_with_deleted_product_resolves_to_none(storage, product):
    storage.create_cart_item(CartItemCreate(user_id=1, product_id=product.id, quantity=2))
    storage.delete_product(product.id)

    items = storage.get_cart_items(1)
    assert len(items) == 1
    assert items[0].product is None


def test_duplicate_cart_line_conflicts(storage, product):
    storage.create_cart_item(CartItemCreate(user_id=1, product_id=product.id, quantity=1))

    with pytest.raises(ConflictError):
        storage.create_cart_item(CartItemCreate(user_id=1, product_id=product.id, quantity=1))


def test_clear_cart_only_touches_one_user(storage, product, sale_product):
    storage.create_cart_item(CartItemCreate(user_id=1, product_id=product.id, quantity=1))
    storage.create_cart_item(CartItemCreate(user_id=1, product_id=sale_product.id, quantity=1))
    storage.create_cart_item(CartItemCreate(user_id=2, product_id=product.id, quantity=1))

    assert storage.clear_cart(1) is True
    assert storage.get_cart_items(1) == []
    assert len(storage.get_cart_items(2)) == 1
    assert storage.clear_cart(1) is True


def test_orders_and_items(storage, product):
    order = storage.create_order(OrderInsert(user_id=1, total=25.0, shipping_city="Mumbai"))
    storage.create_order_item(OrderItemInsert(order_id=order.id, product_id=product.id, quantity=2, price=10.0))
    other = storage.create_order(OrderInsert(user_id=2, total=5.0))

    assert order.status == "pending"
    assert order.created_at is not None
    assert [o.id for o in storage.get_orders()] == [order.id, other.id]
    assert [o.id for o in storage.get_user_orders(1)] == [order.id]
    assert [(i.quantity, i.price) for i in storage.get_order_items(order.id)] == [(2, 10.0)]
    assert storage.get_order_items(other.id) == []

    assert storage.update_order(order.id, OrderUpdate(status="confirmed")).status == "confirmed"
    assert storage.delete_order(other.id) is True


def test_reviews_by_product(storage, product, sale_product):
    storage.create_review(ReviewCreate(user_id=1, product_id=product.id, rating=4, comment="Lovely"))
    storage.create_review(ReviewCreate(user_id=1, product_id=sale_product.id, rating=2))

    reviews = storage.get_reviews(product.id)
    assert [(r.rating, r.comment) for r in reviews] == [(4, "Lovely")]
    assert reviews[0].created_at is not None


def test_transaction_rolls_back_on_error(storage):
    with pytest.raises(RuntimeError):
        with storage.transaction():
            storage.create_category(CategoryCreate(name="Temp", slug="temp"))
            with storage.transaction():
                storage.create_category(CategoryCreate(name="Inner", slug="inner"))
            raise RuntimeError("boom")

    assert storage.get_category_by_slug("temp") is None
    assert storage.get_category_by_slug("inner") is None


def test_transaction_commits_on_success(storage):
    with storage.transaction():
        storage.create_category(CategoryCreate(name="Kept", slug="kept"))

    assert storage.get_category_by_slug("kept") is not None
