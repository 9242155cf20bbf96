from fastapi.testclient import TestClient

from app.api import create_app
from app.services.rate_limiter import RateLimiter
from tests.conftest import API_KEY


def create_cart(client):
    res = client.post("/cart")
    assert res.status_code == 201
    return res.json()["cartId"]


def test_health_needs_no_api_key(app):
    with TestClient(app) as c:
        res = c.get("/health")

    assert res.status_code == 200
    assert res.json() == {"status": "ok", "baskets": 0}


def test_creates_a_cart(client):
    res = client.post("/cart")

    assert res.status_code == 201
    body = res.json()
    assert body["cartId"]
    assert body["items"] == []
    assert body["totals"] == {"subtotal": 0, "itemCount": 0}


def test_get_cart(client):
    cart_id = create_cart(client)

    res = client.get(f"/cart/{cart_id}")

    assert res.status_code == 200
    assert res.json()["cartId"] == cart_id


def test_adds_item_and_returns_updated_cart(client):
    cart_id = create_cart(client)

    res = client.post(f"/cart/{cart_id}/items", json={"sku": "ITEM_123", "quantity": 2})

    assert res.status_code == 202
    body = res.json()
    item = body["items"][0]
    assert item["itemId"]
    assert item["sku"] == "ITEM_123"
    assert item["quantity"] == 2
    assert item["unitPrice"] == 10
    assert item["totalPrice"] == 20
    assert body["totals"] == {"subtotal": 20, "itemCount": 2}


def test_money_is_rendered_as_number(client):
    cart_id = create_cart(client)

    res = client.post(f"/cart/{cart_id}/items", json={"sku": "MOUSE", "quantity": 2})

    assert res.json()["totals"]["subtotal"] == 99.0
    assert isinstance(res.json()["items"][0]["unitPrice"], float)


def test_update_quantity_to_zero_removes_item(client):
    cart_id = create_cart(client)
    add = client.post(f"/cart/{cart_id}/items", json={"sku": "ITEM_ABC", "quantity": 1})
    item_id = add.json()["items"][0]["itemId"]

    res = client.put(f"/cart/{cart_id}/items/{item_id}", json={"quantity": 0})

    assert res.status_code == 200
    assert res.json()["items"] == []
    assert res.json()["totals"] == {"subtotal": 0, "itemCount": 0}


def test_update_quantity(client):
    cart_id = create_cart(client)
    add = client.post(f"/cart/{cart_id}/items", json={"sku": "ITEM_ABC", "quantity": 1})
    item_id = add.json()["items"][0]["itemId"]

    res = client.put(f"/cart/{cart_id}/items/{item_id}", json={"quantity": 5})

    assert res.status_code == 200
    assert res.json()["items"][0]["quantity"] == 5
    assert res.json()["totals"] == {"subtotal": 50, "itemCount": 5}


def test_remove_item(client):
    cart_id = create_cart(client)
    add = client.post(f"/cart/{cart_id}/items", json={"sku": "ITEM_ABC", "quantity": 1})
    item_id = add.json()["items"][0]["itemId"]

    res = client.delete(f"/cart/{cart_id}/items/{item_id}")

    assert res.status_code == 200
    assert res.json()["items"] == []


def test_invalid_quantity(client):
    cart_id = create_cart(client)

    res = client.post(f"/cart/{cart_id}/items", json={"sku": "ITEM_123", "quantity": -1})

    assert res.status_code == 400
    assert res.json() == {
        "error": "INVALID_QUANTITY",
        "message": "Invalid quantity. It must be greater than zero",
    }
    assert client.get(f"/cart/{cart_id}").json()["items"] == []


def test_invalid_quantity_on_unknown_cart(client):
    res = client.post("/cart/unknown/items", json={"sku": "ITEM_123", "quantity": 0})

    assert res.status_code == 400
    assert res.json()["error"] == "INVALID_QUANTITY"


def test_negative_update_quantity(client):
    cart_id = create_cart(client)

    res = client.put(f"/cart/{cart_id}/items/whatever", json={"quantity": -2})

    assert res.status_code == 400
    assert res.json()["error"] == "INVALID_QUANTITY"


def test_item_not_found_on_delete(client):
    cart_id = create_cart(client)

    res = client.delete(f"/cart/{cart_id}/items/nonexistent")

    assert res.status_code == 404
    assert res.json() == {
        "error": "ITEM_NOT_FOUND",
        "message": "Item does not exist in the cart",
    }


def test_cart_not_found(client):
    res = client.get("/cart/nonexistent")

    assert res.status_code == 404
    assert res.json() == {"error": "CART_NOT_FOUND", "message": "Cart not found or expired"}


def test_cart_not_found_when_expired(client, clock):
    cart_id = create_cart(client)

    clock.advance(1500)
    res = client.get(f"/cart/{cart_id}")

    assert res.status_code == 404
    assert res.json() == {"error": "CART_NOT_FOUND", "message": "Cart not found or expired"}


def test_unpriceable_sku(clock):
    from app.repos.basket_store import BasketStore
    from app.services.pricing import CatalogPriceResolver

    store = BasketStore(price_resolver=CatalogPriceResolver(prices={"KNOWN": 1}), clock=clock)
    app = create_app(store=store, api_key=API_KEY)

    with TestClient(app, headers={"x-api-key": API_KEY}) as c:
        cart_id = c.post("/cart").json()["cartId"]
        res = c.post(f"/cart/{cart_id}/items", json={"sku": "UNKNOWN", "quantity": 1})

    assert res.status_code == 422
    assert res.json() == {"error": "SKU_UNPRICEABLE", "message": "Product cannot be priced"}


def test_missing_api_key(app):
    with TestClient(app) as c:
        res = c.post("/cart")

    assert res.status_code == 401
    assert res.json() == {"error": "UNAUTHORIZED", "message": "Invalid API key"}


def test_wrong_api_key(app):
    with TestClient(app, headers={"x-api-key": "nope"}) as c:
        res = c.post("/cart")

    assert res.status_code == 401


def test_rate_limit_exceeded(short_store):
    app = create_app(
        store=short_store,
        rate_limiter=RateLimiter(limit=2, window_ms=60_000),
        api_key=API_KEY,
    )

    with TestClient(app, headers={"x-api-key": API_KEY}) as c:
        statuses = [c.post("/cart").status_code for _ in range(3)]
        res = c.post("/cart")

    assert statuses == [201, 201, 429]
    assert res.json() == {"error": "RATE_LIMIT_EXCEEDED", "message": "Too many requests"}


def test_rate_limit_applies_before_auth(short_store):
    app = create_app(
        store=short_store,
        rate_limiter=RateLimiter(limit=1, window_ms=60_000),
        api_key=API_KEY,
    )

    with TestClient(app) as c:
        assert c.post("/cart").status_code == 401
        assert c.post("/cart").status_code == 429


def test_unknown_fields_are_rejected(client):
    cart_id = create_cart(client)

    res = client.post(
        f"/cart/{cart_id}/items", json={"sku": "ITEM_123", "quantity": 1, "price": 0}
    )

    assert res.status_code == 400
    assert res.json() == {"error": "INVALID_REQUEST", "message": "Invalid request payload"}


def test_string_quantity_is_rejected(client):
    cart_id = create_cart(client)

    res = client.post(f"/cart/{cart_id}/items", json={"sku": "ITEM_123", "quantity": "2"})

    assert res.status_code == 400
    assert res.json()["error"] == "INVALID_REQUEST"


def test_missing_sku_is_rejected(client):
    cart_id = create_cart(client)

    res = client.post(f"/cart/{cart_id}/items", json={"quantity": 1})

    assert res.status_code == 400
    assert res.json()["error"] == "INVALID_REQUEST"


def test_malformed_json(client):
    cart_id = create_cart(client)

    res = client.post(
        f"/cart/{cart_id}/items",
        content="{not json",
        headers={"content-type": "application/json"},
    )

    assert res.status_code == 400
    assert res.json()["error"] == "INVALID_REQUEST"


def test_unexpected_error_is_masked(app, monkeypatch):
    def boom():
        raise RuntimeError("secret detail")

    monkeypatch.setattr(app.state.basket_store, "create_basket", boom)

    with TestClient(app, headers={"x-api-key": API_KEY}, raise_server_exceptions=False) as c:
        res = c.post("/cart")

    assert res.status_code == 500
    assert res.json() == {"error": "INTERNAL_SERVER_ERROR", "message": "Unexpected error"}
