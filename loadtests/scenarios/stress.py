"""Stress test scenarios for checkout contention.

CheckoutSpikeUser floods buy-now checkouts against a small shared product
set. DoubleSubmitUser replays every checkout with the same idempotency key
to confirm that each attempt yields exactly one order.
"""

import random

from locust import HttpUser, constant_pacing, task

from loadtests.data_generators import checkout_data, order_data, product_data
from loadtests.helpers.admin import admin_headers


class CheckoutSpikeUser(HttpUser):
    """Stress test: maximum checkout throughput.

    Every task stores a new order, so tracking-code generation and the
    order store are under constant write pressure.
    """

    wait_time = constant_pacing(0.1)  # ~10 requests/sec per user

    def on_start(self):
        self.product_ids = []
        for _ in range(3):
            resp = self.client.post(
                "/products", json=product_data(), headers=admin_headers(), name="[STRESS] POST /products"
            )
            if resp.status_code == 201:
                self.product_ids.append(resp.json()["product_id"])

    @task(5)
    def buy_now(self):
        if not self.product_ids:
            return
        self.client.post(
            "/orders",
            json=order_data(random.sample(self.product_ids, k=random.randint(1, len(self.product_ids)))),
            name="[STRESS] POST /orders",
        )

    @task(1)
    def analytics(self):
        self.client.get("/analytics/summary", headers=admin_headers(), name="[STRESS] GET /analytics/summary")


class DoubleSubmitUser(HttpUser):
    """Submit every checkout twice in quick succession with one key.

    Both responses must name the same order.
    """

    wait_time = constant_pacing(0.5)

    def on_start(self):
        resp = self.client.post(
            "/products", json=product_data(), headers=admin_headers(), name="[STRESS] POST /products"
        )
        self.product_id = resp.json()["product_id"] if resp.status_code == 201 else None

    @task
    def double_submit(self):
        if self.product_id is None:
            return
        payload = {**checkout_data(), "items": [{"product_id": self.product_id, "quantity": 1}]}
        first = self.client.post("/orders", json=payload, name="[STRESS] POST /orders (first)")
        with self.client.post(
            "/orders", json=payload, catch_response=True, name="[STRESS] POST /orders (repeat)"
        ) as resp:
            if first.status_code == 201 and resp.status_code == 201:
                if first.json()["order_id"] != resp.json()["order_id"]:
                    resp.failure("Repeated checkout created a second order")
