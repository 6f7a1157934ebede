"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, with no cross-user sharing.
State tracks IDs returned by creation endpoints so follow-up operations can
reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ProductState:
    """Tracks state for a single simulated product listing."""

    product_id: str | None = None
    stock: int = 0


@dataclass
class ShopperState:
    """Tracks what a simulated shopper has seen and bought."""

    product_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)
    refused_orders: int = 0
