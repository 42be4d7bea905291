"""Integration tests for Cart API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import cart_router, order_router
from ordering.cart.cart import ShoppingCart
from ordering.order.order import Order
from protean import current_domain
from shared.api_errors import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(order_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def products(add_product):
    return {
        "headphones": add_product("Headphones", 10.0),
        "cable": add_product("USB Cable", 5.0),
        "sold_out": add_product("Vintage Radio", 45.0, in_stock=False),
    }


@pytest.fixture()
def checkout_body(customer):
    return {**customer, "terms_accepted": True}


def _create_cart(client, session_id="sess-001"):
    response = client.post("/carts", json={"session_id": session_id})
    assert response.status_code == 201
    return response.json()["cart_id"]


def _add_item(client, cart_id, product_id, quantity=1):
    response = client.post(f"/carts/{cart_id}/items", json={"product_id": product_id, "quantity": quantity})
    assert response.status_code == 201
    return response.json()["item_id"]


class TestCartEndpoints:
    def test_create_cart(self, client):
        cart_id = _create_cart(client)
        cart = current_domain.repository_for(ShoppingCart).get(cart_id)
        assert cart.session_id == "sess-001"

    def test_add_item_snapshots_catalogue_price(self, client, products):
        cart_id = _create_cart(client)
        _add_item(client, cart_id, products["headphones"], 2)

        body = client.get(f"/carts/{cart_id}").json()
        assert body["items"][0]["product_name"] == "Headphones"
        assert body["items"][0]["line_total"] == 20.0
        assert (body["subtotal"], body["shipping"], body["total"]) == (20.0, 9.99, 29.99)

    def test_adding_same_product_merges(self, client, products):
        cart_id = _create_cart(client)
        first = _add_item(client, cart_id, products["cable"])
        second = _add_item(client, cart_id, products["cable"], 2)
        assert first == second
        assert client.get(f"/carts/{cart_id}").json()["items"][0]["quantity"] == 3

    def test_out_of_stock_product_rejected(self, client, products):
        cart_id = _create_cart(client)
        response = client.post(f"/carts/{cart_id}/items", json={"product_id": products["sold_out"]})
        assert response.status_code == 400

    def test_unknown_product(self, client):
        cart_id = _create_cart(client)
        response = client.post(f"/carts/{cart_id}/items", json={"product_id": "missing-product"})
        assert response.status_code == 404

    def test_update_quantity(self, client, products):
        cart_id = _create_cart(client)
        item_id = _add_item(client, cart_id, products["cable"])
        response = client.put(f"/carts/{cart_id}/items/{item_id}", json={"quantity": 4})
        assert response.status_code == 200
        assert response.json()["items"][0]["quantity"] == 4

    def test_zero_quantity_removes_item(self, client, products):
        cart_id = _create_cart(client)
        item_id = _add_item(client, cart_id, products["cable"])
        response = client.put(f"/carts/{cart_id}/items/{item_id}", json={"quantity": 0})
        assert response.json()["items"] == []

    def test_remove_item(self, client, products):
        cart_id = _create_cart(client)
        item_id = _add_item(client, cart_id, products["cable"])
        response = client.delete(f"/carts/{cart_id}/items/{item_id}")
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_unknown_cart(self, client):
        assert client.get("/carts/no-such-cart").status_code == 404


class TestCartCheckoutEndpoint:
    def test_checkout_places_order_and_clears_cart(self, client, products, checkout_body):
        cart_id = _create_cart(client)
        _add_item(client, cart_id, products["headphones"], 2)
        _add_item(client, cart_id, products["cable"])

        response = client.post(f"/carts/{cart_id}/checkout", json=checkout_body)
        assert response.status_code == 201
        body = response.json()
        assert body["tracking_code"].startswith("TRACK-")
        assert body["total"] == 34.99
        assert body["cart_cleared"] is True

        cart = client.get(f"/carts/{cart_id}").json()
        assert cart["items"] == []
        assert cart["last_order_id"] == body["order_id"]

    def test_missing_field_is_422_with_code(self, client, products, checkout_body):
        cart_id = _create_cart(client)
        _add_item(client, cart_id, products["cable"])

        response = client.post(f"/carts/{cart_id}/checkout", json={**checkout_body, "city": " "})
        assert response.status_code == 422
        assert response.json()["code"] == "missing_field"
        assert "city" in response.json()["error"]

    def test_terms_not_accepted(self, client, products, checkout_body):
        cart_id = _create_cart(client)
        _add_item(client, cart_id, products["cable"])

        response = client.post(f"/carts/{cart_id}/checkout", json={**checkout_body, "terms_accepted": False})
        assert response.json()["code"] == "terms_not_accepted"
        assert len(current_domain.repository_for(ShoppingCart).get(cart_id).items) == 1

    def test_empty_cart(self, client, checkout_body):
        cart_id = _create_cart(client)
        response = client.post(f"/carts/{cart_id}/checkout", json=checkout_body)
        assert response.status_code == 422
        assert response.json()["code"] == "empty_cart"

    def test_double_submit_creates_one_order(self, client, products, checkout_body):
        cart_id = _create_cart(client)
        _add_item(client, cart_id, products["cable"])
        body = {**checkout_body, "idempotency_key": "chk-api-1"}

        first = client.post(f"/carts/{cart_id}/checkout", json=body).json()
        second = client.post(f"/carts/{cart_id}/checkout", json=body).json()
        assert first["order_id"] == second["order_id"]
        assert len(list(current_domain.repository_for(Order).iter_all())) == 1
