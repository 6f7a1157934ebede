"""Ordering load test scenarios.

Two stateful SequentialTaskSet journeys: a shopper checking out against the
existing catalog, and a flash sale where many users compete for a product
with little stock. In the flash sale every order either gets its stock or is
refused with a 400, and the remaining stock never drops below zero.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import customer_info, order_data, product_data
from loadtests.helpers.response import extract_error_detail, is_stock_refusal
from loadtests.helpers.state import ProductState, ShopperState


class CheckoutJourney(SequentialTaskSet):
    """Browse -> Place Order -> View Order -> Order History.

    Models a shopper buying a few items from the live catalog. Running out of
    stock under load is expected and counted, not failed.
    """

    def on_start(self):
        self.state = ShopperState()

    @task
    def browse(self):
        with self.client.get("/api/products", catch_response=True, name="GET /api/products") as resp:
            if resp.status_code != 200:
                resp.failure(f"List products failed: {resp.status_code}")
                self.interrupt()
                return
            self.state.product_ids = [product["id"] for product in resp.json() if product["stock"] > 0]
            if not self.state.product_ids:
                self.interrupt()

    @task
    def place_order(self):
        with self.client.post(
            "/api/orders",
            json=order_data(self.state.product_ids),
            catch_response=True,
            name="POST /api/orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["id"])
            elif is_stock_refusal(resp):
                self.state.refused_orders += 1
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Place order failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def view_order(self):
        order_id = self.state.order_ids[-1]
        with self.client.get(
            f"/api/orders/{order_id}",
            catch_response=True,
            name="GET /api/orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Get order failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def order_history(self):
        self.client.get("/api/orders", name="GET /api/orders")

    @task
    def done(self):
        self.interrupt()


class FlashSaleJourney(SequentialTaskSet):
    """Create a scarce product -> Race for it -> Check the stock never went negative."""

    def on_start(self):
        self.state = ProductState()

    @task
    def create_scarce_product(self):
        payload = product_data(stock=random.randint(1, 5))
        with self.client.post(
            "/api/products",
            json=payload,
            catch_response=True,
            name="POST /api/products (flash sale)",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["id"]
                self.state.stock = payload["stock"]
            else:
                resp.failure(f"Create product failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task(5)
    def grab(self):
        payload = {
            "items": [{"productId": self.state.product_id, "quantity": random.randint(1, 2)}],
            "customerInfo": customer_info(),
        }
        with self.client.post(
            "/api/orders",
            json=payload,
            catch_response=True,
            name="POST /api/orders (flash sale)",
        ) as resp:
            if resp.status_code == 201 or is_stock_refusal(resp):
                resp.success()
            else:
                resp.failure(f"Flash sale order failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def check_stock(self):
        with self.client.get("/api/products", catch_response=True, name="GET /api/products") as resp:
            if resp.status_code != 200:
                resp.failure(f"List products failed: {resp.status_code}")
                return
            for product in resp.json():
                if product["id"] == self.state.product_id and product["stock"] < 0:
                    resp.failure(f"Stock went negative: {product['stock']}")

    @task
    def done(self):
        self.interrupt()


class OrderingUser(HttpUser):
    """Shoppers checking out, with the occasional flash sale."""

    wait_time = between(1, 2)
    tasks = {
        CheckoutJourney: 4,
        FlashSaleJourney: 1,
    }
