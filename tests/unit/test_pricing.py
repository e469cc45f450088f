from schemas.cart_schemas import CartItemRead
from schemas.catalog_schemas import ProductRead
from services.pricing import cart_total, effective_price, order_total, shipping_fee, summarize_cart


def make_product(product_id, price, sale_price=None):
    return ProductRead(id=product_id, name=f"Product {product_id}", slug=f"product-{product_id}",
                       price=price, sale_price=sale_price)


def make_line(line_id, product, quantity):
    return CartItemRead(id=line_id, user_id=1, product_id=product.id if product else 99,
                        quantity=quantity, product=product)


def test_effective_price_prefers_sale_price():
    assert effective_price(make_product(1, 10.0)) == 10.0
    assert effective_price(make_product(1, 10.0, sale_price=5.0)) == 5.0
    assert effective_price(None) == 0.0


def test_zero_sale_price_is_still_a_sale_price():
    assert effective_price(make_product(1, 10.0, sale_price=0.0)) == 0.0


def test_cart_total_uses_effective_price():
    items = [
        make_line(1, make_product(1, 10.0), 2),
        make_line(2, make_product(2, 10.0, sale_price=5.0), 1),
    ]
    assert cart_total(items) == 25.0


def test_cart_total_ignores_unresolved_products():
    items = [
        make_line(1, make_product(1, 10.0), 2),
        make_line(2, None, 4),
    ]
    assert cart_total(items) == 20.0


def test_cart_total_empty():
    assert cart_total([]) == 0.0


def test_shipping_fee_threshold_is_strict():
    assert shipping_fee(50.0) == 5.0
    assert shipping_fee(50.01) == 0.0
    assert shipping_fee(0.0) == 5.0
    assert shipping_fee(120.0) == 0.0


def test_order_total_adds_shipping():
    assert order_total(25.0) == 30.0
    assert order_total(50.0) == 55.0
    assert order_total(60.0) == 60.0


def test_summarize_cart():
    items = [
        make_line(1, make_product(1, 10.0), 2),
        make_line(2, make_product(2, 10.0, sale_price=5.0), 1),
    ]
    summary = summarize_cart(items)

    assert summary.subtotal == 25.0
    assert summary.shipping == 5.0
    assert summary.total == 30.0
    assert summary.item_count == 3
