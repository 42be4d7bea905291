"""Ordering domain load test scenarios.

Stateful SequentialTaskSet journeys covering cart checkout, buy-now
ordering through delivery, and public tracking lookups.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    checkout_data,
    invalid_checkout_data,
    order_data,
    product_data,
    unknown_tracking_code,
)
from loadtests.helpers.admin import admin_headers
from loadtests.helpers.response import checkout_error_code, extract_error_detail
from loadtests.helpers.state import CartState, OrderState


def _create_product(client) -> str | None:
    resp = client.post("/products", json=product_data(), headers=admin_headers(), name="POST /products (setup)")
    if resp.status_code == 201:
        return resp.json()["product_id"]
    return None


class CartToCheckoutJourney(SequentialTaskSet):
    """Create Cart -> Add Items -> Update Quantity -> Checkout -> Track.

    The conversion path: a visitor fills a cart and checks out with cash
    on delivery. The cart is cleared once the order is stored.
    """

    def on_start(self):
        self.state = CartState()
        self.order = OrderState()
        self.state.product_ids = [pid for pid in (_create_product(self.client) for _ in range(2)) if pid]

    @task
    def create_cart(self):
        with self.client.post(
            "/carts",
            json={"session_id": f"sess-{random.randint(1, 10**9)}"},
            catch_response=True,
            name="POST /carts",
        ) as resp:
            if resp.status_code == 201:
                self.state.cart_id = resp.json()["cart_id"]
            else:
                resp.failure(f"Create cart failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_items(self):
        for product_id in self.state.product_ids:
            with self.client.post(
                f"/carts/{self.state.cart_id}/items",
                json={"product_id": product_id, "quantity": random.randint(1, 3)},
                catch_response=True,
                name="POST /carts/{id}/items",
            ) as resp:
                if resp.status_code == 201:
                    self.state.item_ids.append(resp.json()["item_id"])
                else:
                    resp.failure(f"Add cart item failed: {resp.status_code} — {extract_error_detail(resp)}")
        if not self.state.item_ids:
            self.interrupt()

    @task
    def update_quantity(self):
        with self.client.put(
            f"/carts/{self.state.cart_id}/items/{self.state.item_ids[0]}",
            json={"quantity": random.randint(1, 5)},
            catch_response=True,
            name="PUT /carts/{id}/items/{item_id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update quantity failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def checkout(self):
        with self.client.post(
            f"/carts/{self.state.cart_id}/checkout",
            json=checkout_data(),
            catch_response=True,
            name="POST /carts/{id}/checkout",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.order.order_id = body["order_id"]
                self.order.tracking_code = body["tracking_code"]
                if not body["cart_cleared"]:
                    resp.failure("Order stored but cart was not cleared")
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def track(self):
        self.client.get(f"/tracking/{self.order.tracking_code}", name="GET /tracking/{code}")

    @task
    def done(self):
        self.interrupt()


class OrderFulfillmentJourney(SequentialTaskSet):
    """Buy Now -> Confirm -> Processing -> Ship -> Deliver -> Status Log.

    The happy path: a buy-now order moved through every status by an
    administrator.
    """

    def on_start(self):
        self.state = OrderState()
        product_id = _create_product(self.client)
        self.product_ids = [product_id] if product_id else []

    @task
    def place_order(self):
        if not self.product_ids:
            self.interrupt()
        with self.client.post(
            "/orders",
            json=order_data(self.product_ids),
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
                self.state.tracking_code = resp.json()["tracking_code"]
            else:
                resp.failure(f"Place order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    def _advance(self, status):
        with self.client.put(
            f"/orders/{self.state.order_id}/status",
            json={"status": status},
            headers=admin_headers(),
            catch_response=True,
            name="PUT /orders/{id}/status",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = status
            else:
                resp.failure(f"Status {status} failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def confirm(self):
        self._advance("confirmed")

    @task
    def processing(self):
        # Processing is optional; about half the orders skip it
        if random.random() < 0.5:
            self._advance("processing")

    @task
    def ship(self):
        self._advance("shipped")

    @task
    def deliver(self):
        self._advance("delivered")

    @task
    def status_log(self):
        self.client.get(
            f"/orders/{self.state.order_id}/status-log",
            headers=admin_headers(),
            name="GET /orders/{id}/status-log",
        )

    @task
    def done(self):
        self.interrupt()


class TrackingLookupJourney(SequentialTaskSet):
    """Rejected Checkout -> Unknown Tracking Code.

    Unhappy paths that must stay cheap: validation failures store nothing
    and unknown codes return 404.
    """

    @task
    def rejected_checkout(self):
        with self.client.post(
            "/orders",
            json={**invalid_checkout_data(), "items": []},
            catch_response=True,
            name="POST /orders (invalid)",
        ) as resp:
            if checkout_error_code(resp):
                resp.success()
            else:
                resp.failure(f"Expected a checkout rejection, got {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def unknown_code(self):
        with self.client.get(
            f"/tracking/{unknown_tracking_code()}",
            catch_response=True,
            name="GET /tracking/{code} (unknown)",
        ) as resp:
            if resp.status_code == 404:
                resp.success()
            else:
                resp.failure(f"Expected 404, got {resp.status_code}")

    @task
    def done(self):
        self.interrupt()


class OrderingUser(HttpUser):
    """Ordering traffic: checkouts, fulfillment and tracking."""

    wait_time = between(0.5, 2.0)
    tasks = {
        CartToCheckoutJourney: 5,
        OrderFulfillmentJourney: 3,
        TrackingLookupJourney: 2,
    }
