"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the storefront's validation rules
(required product fields, positive integer quantities, well-formed emails)
and match the exact keys the API expects, camelCase included.
"""

import random
import uuid

from faker import Faker

fake = Faker()

SAMPLE_PRODUCT_IDS = ["1", "2", "3"]


# ---------- Customers ----------


def valid_email() -> str:
    """Generate emails that pass the checkout email check.

    Rules: exactly one @, no spaces/tabs, valid domain with dot,
    no leading/trailing dots, no consecutive dots.
    """
    local = fake.user_name()[:20]
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:4]}@{domain}"


def customer_info() -> dict:
    """Generate the customerInfo block of a checkout payload."""
    return {
        "name": fake.name()[:100],
        "email": valid_email(),
        "address": fake.address().replace("\n", ", ")[:255],
    }


# ---------- Catalog ----------


def product_data(stock: int | None = None) -> dict:
    """Generate a CreateProductRequest payload."""
    return {
        "name": f"{fake.word().title()} {fake.word().title()} {uuid.uuid4().hex[:4]}",
        "price": round(random.uniform(1.0, 200.0), 2),
        "description": fake.sentence(nb_words=10),
        "stock": stock if stock is not None else random.randint(50, 500),
    }


# ---------- Orders ----------


def order_items(product_ids: list[str], max_lines: int = 3, max_quantity: int = 3) -> list[dict]:
    """Pick up to ``max_lines`` distinct products with small quantities."""
    chosen = random.sample(product_ids, k=min(len(product_ids), random.randint(1, max_lines)))
    return [{"productId": product_id, "quantity": random.randint(1, max_quantity)} for product_id in chosen]


def order_data(product_ids: list[str] | None = None) -> dict:
    """Generate a PlaceOrderRequest payload."""
    return {
        "items": order_items(product_ids or SAMPLE_PRODUCT_IDS),
        "customerInfo": customer_info(),
    }
