async def add(client, product_id, quantity=1, user_id=1):
    return await client.post("/api/cart",
                             json={"userId": user_id, "productId": product_id, "quantity": quantity})


async def test_add_then_merge(client, product):
    first = await add(client, product.id, 1)
    second = await add(client, product.id, 2)

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["quantity"] == 3


async def test_quantity_defaults_to_one(client, product):
    response = await client.post("/api/cart", json={"userId": 1, "productId": product.id})

    assert response.status_code == 201
    assert response.json()["quantity"] == 1


async def test_add_invalid_quantity(client, product):
    response = await add(client, product.id, 0)

    assert response.status_code == 400


async def test_add_unknown_product(client):
    response = await add(client, 999)

    assert response.status_code == 404
    assert response.json() == {"message": "Product not found"}


async def test_get_cart_with_products(client, product, sale_product):
    await add(client, product.id, 1)
    await add(client, sale_product.id, 2)

    response = await client.get("/api/cart/1")

    assert response.status_code == 200
    items = response.json()
    assert [i["productId"] for i in items] == [product.id, sale_product.id]
    assert items[1]["product"]["salePrice"] == 5.0
    assert (await client.get("/api/cart/2")).json() == []


async def test_cart_summary(client, product, sale_product):
    await add(client, product.id, 1)
    await add(client, sale_product.id, 3)

    response = await client.get("/api/cart/1/summary")

    assert response.json() == {"subtotal": 25.0, "shipping": 5.0, "total": 30.0, "itemCount": 4}


async def test_update_quantity(client, product):
    item = (await add(client, product.id)).json()

    response = await client.put(f"/api/cart/{item['id']}", json={"quantity": 4})

    assert response.status_code == 200
    assert response.json()["quantity"] == 4


async def test_update_to_zero_removes(client, product):
    item = (await add(client, product.id)).json()

    response = await client.put(f"/api/cart/{item['id']}", json={"quantity": 0})

    assert response.status_code == 200
    assert response.json() == {"message": "Cart item removed successfully"}
    assert (await client.get("/api/cart/1")).json() == []


async def test_update_missing_item(client):
    response = await client.put("/api/cart/999", json={"quantity": 2})

    assert response.status_code == 404
    assert response.json() == {"message": "Cart item not found"}


async def test_remove_item(client, product):
    item = (await add(client, product.id)).json()

    response = await client.delete(f"/api/cart/{item['id']}")
    assert response.status_code == 200

    response = await client.delete(f"/api/cart/{item['id']}")
    assert response.status_code == 404


async def test_clear_cart(client, product, sale_product):
    await add(client, product.id)
    await add(client, sale_product.id)

    response = await client.delete("/api/cart/user/1")

    assert response.status_code == 200
    assert response.json() == {"message": "Cart cleared successfully"}
    assert (await client.get("/api/cart/1")).json() == []
    assert (await client.delete("/api/cart/user/1")).status_code == 200
