"""Order record with its line snapshots.

An order is written once, atomically with its lines, and never changes
afterwards. Lines copy the product's name and price at order time, so later
catalog edits (or deletions) do not alter what the customer was charged.
"""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from catalogue.product.product import Product
from identity.customer.customer import Customer


class OrderStatus(Enum):
    PENDING = "pending"


@dataclass(frozen=True)
class OrderLine:
    """A line item frozen at order time."""

    product_id: str
    product_name: str
    price: float
    quantity: int
    subtotal: float

    @classmethod
    def snapshot(cls, product: Product, quantity: int) -> "OrderLine":
        return cls(
            product_id=product.id,
            product_name=product.name,
            price=product.price,
            quantity=quantity,
            subtotal=product.price * quantity,
        )


@dataclass(frozen=True)
class Order:
    id: str
    customer_id: str
    total: float
    items: tuple[OrderLine, ...] = ()
    status: str = OrderStatus.PENDING.value
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    # Resolved on reads, never persisted with the order
    customer: Customer | None = field(default=None, compare=False)

    @classmethod
    def create(cls, customer_id: str, items) -> "Order":
        items = tuple(items)
        total = 0
        for line in items:
            total += line.subtotal
        return cls(
            id=str(uuid4()),
            customer_id=customer_id,
            total=total,
            items=items,
            status=OrderStatus.PENDING.value,
            created_at=datetime.now(UTC),
        )

    def with_customer(self, customer: Customer | None) -> "Order":
        return replace(self, customer=customer)
