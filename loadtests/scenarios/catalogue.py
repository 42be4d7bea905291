"""Catalogue domain load test scenarios.

An admin journey that builds and edits the catalogue (every edit fans out
on the change channel) and a storefront journey that browses it.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import category_name, product_data, product_update_data, search_term
from loadtests.helpers.admin import admin_headers
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CategoryState, ProductState


class ProductManagementJourney(SequentialTaskSet):
    """Create Category -> Create Product -> Edit -> Mark Out of Stock -> Delete.

    Models an administrator maintaining the catalogue. Every step publishes
    one change to open storefront sessions.
    """

    def on_start(self):
        self.state = ProductState()
        self.categories = CategoryState()

    @task
    def create_category(self):
        with self.client.post(
            "/categories",
            json={"name": category_name()},
            headers=admin_headers(),
            catch_response=True,
            name="POST /categories",
        ) as resp:
            if resp.status_code == 201:
                self.categories.category_ids.append(resp.json()["category_id"])
            else:
                resp.failure(f"Create category failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def create_product(self):
        with self.client.post(
            "/products",
            json=product_data(),
            headers=admin_headers(),
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["product_id"]
            else:
                resp.failure(f"Create product failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def edit_product(self):
        with self.client.put(
            f"/products/{self.state.product_id}",
            json=product_update_data(),
            headers=admin_headers(),
            catch_response=True,
            name="PUT /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Edit product failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def mark_out_of_stock(self):
        with self.client.put(
            f"/products/{self.state.product_id}",
            json={"in_stock": False},
            headers=admin_headers(),
            catch_response=True,
            name="PUT /products/{id} (out of stock)",
        ) as resp:
            if resp.status_code == 200:
                self.state.in_stock = False
            else:
                resp.failure(f"Stock update failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def check_orphans(self):
        self.client.get("/categories/orphaned-products", headers=admin_headers(), name="GET /categories/orphaned")

    @task
    def delete_product(self):
        with self.client.delete(
            f"/products/{self.state.product_id}",
            headers=admin_headers(),
            catch_response=True,
            name="DELETE /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Delete product failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class StorefrontBrowsingJourney(SequentialTaskSet):
    """List Categories -> Filter Products -> Search -> View Product -> Inquiry Link.

    Read-only traffic from visitors browsing the storefront.
    """

    def on_start(self):
        self.product_ids = []

    @task
    def list_categories(self):
        self.client.get("/categories", name="GET /categories")

    @task
    def list_products(self):
        with self.client.get("/products?in_stock=true", catch_response=True, name="GET /products") as resp:
            if resp.status_code == 200:
                self.product_ids = [p["id"] for p in resp.json()]
            else:
                resp.failure(f"List products failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def search(self):
        self.client.get(f"/products?search={search_term()}", name="GET /products?search")

    @task
    def view_product(self):
        if not self.product_ids:
            self.interrupt()
        product_id = random.choice(self.product_ids)
        self.client.get(f"/products/{product_id}", name="GET /products/{id}")
        self.client.get(f"/products/{product_id}/inquiry-link", name="GET /products/{id}/inquiry-link")

    @task
    def done(self):
        self.interrupt()


class CatalogueUser(HttpUser):
    """Catalogue traffic: mostly browsing, some admin maintenance."""

    wait_time = between(0.5, 2.0)
    tasks = {
        StorefrontBrowsingJourney: 8,
        ProductManagementJourney: 2,
    }
