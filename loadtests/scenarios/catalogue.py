"""Catalog load test scenarios.

A stateful SequentialTaskSet journey for a store manager adding and removing
listings, plus a browsing task set. Steps execute in order; each depends on
the previous step succeeding.
"""

from locust import HttpUser, SequentialTaskSet, TaskSet, between, task

from loadtests.data_generators import product_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ProductState


class ProductListingJourney(SequentialTaskSet):
    """Create Product -> See it listed -> Delete -> Delete again (404).

    Models a store manager trying out a listing and pulling it.
    """

    def on_start(self):
        self.state = ProductState()

    @task
    def create_product(self):
        payload = product_data()
        with self.client.post(
            "/api/products",
            json=payload,
            catch_response=True,
            name="POST /api/products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["id"]
                self.state.stock = payload["stock"]
            else:
                resp.failure(f"Create product failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def find_in_listing(self):
        with self.client.get("/api/products", catch_response=True, name="GET /api/products") as resp:
            if resp.status_code != 200:
                resp.failure(f"List products failed: {resp.status_code}")
            elif not any(product["id"] == self.state.product_id for product in resp.json()):
                resp.failure("Created product missing from listing")

    @task
    def delete_product(self):
        with self.client.delete(
            f"/api/products/{self.state.product_id}",
            catch_response=True,
            name="DELETE /api/products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Delete product failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def delete_again(self):
        with self.client.delete(
            f"/api/products/{self.state.product_id}",
            catch_response=True,
            name="DELETE /api/products/{id} (gone)",
        ) as resp:
            if resp.status_code == 404:
                resp.success()
            else:
                resp.failure(f"Expected 404 for deleted product, got {resp.status_code}")

    @task
    def done(self):
        self.interrupt()


class InvalidProductJourney(SequentialTaskSet):
    """Submit incomplete products and expect a 400 every time."""

    @task
    def missing_fields(self):
        payload = product_data()
        payload.pop("description")
        with self.client.post(
            "/api/products",
            json=payload,
            catch_response=True,
            name="POST /api/products (invalid)",
        ) as resp:
            if resp.status_code == 400:
                resp.success()
            else:
                resp.failure(f"Expected 400 for incomplete product, got {resp.status_code}")

    @task
    def done(self):
        self.interrupt()


class BrowseCatalog(TaskSet):
    @task
    def list_products(self):
        self.client.get("/api/products", name="GET /api/products")

    @task
    def stop(self):
        self.interrupt()


class CatalogueUser(HttpUser):
    """Store manager and browsing traffic against the catalog."""

    wait_time = between(1, 3)
    tasks = {
        BrowseCatalog: 6,
        ProductListingJourney: 3,
        InvalidProductJourney: 1,
    }
