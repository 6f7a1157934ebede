"""Pydantic request/response schemas for the Ordering API.

These are external contracts, separate from the internal order records. The
request side keeps the storefront's camelCase keys.
"""

from datetime import datetime

from pydantic import BaseModel, StrictInt, StrictStr

from ordering.order.order import Order

UNKNOWN_CUSTOMER = "Unknown"


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class OrderItemRequest(BaseModel):
    # Strict so a JSON true is not coerced into 1
    productId: StrictStr | StrictInt | None = None
    quantity: StrictInt | None = None


class CustomerInfoRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    address: str | None = None


class PlaceOrderRequest(BaseModel):
    """Nothing is required at this layer; the placement workflow reports what is missing."""

    items: list[OrderItemRequest] | None = None
    customerInfo: CustomerInfoRequest | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {"productId": "1", "quantity": 2},
                        {"productId": "3", "quantity": 1},
                    ],
                    "customerInfo": {
                        "name": "Ada Lovelace",
                        "email": "ada@example.com",
                        "address": "12 St James's Square, London",
                    },
                }
            ]
        }
    }

    def item_dicts(self) -> list[dict] | None:
        if self.items is None:
            return None
        return [item.model_dump() for item in self.items]

    def customer_dict(self) -> dict | None:
        if self.customerInfo is None:
            return None
        return self.customerInfo.model_dump()


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderLineResponse(BaseModel):
    model_config = {"from_attributes": True}

    product_id: str
    product_name: str
    price: float
    quantity: int
    subtotal: float


class OrderResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "c3d4e5f6-a7b8-9012-cdef-123456789012",
                    "customer_id": "d4e5f6a7-b8c9-0123-defa-234567890123",
                    "total": 84.97,
                    "status": "pending",
                    "created_at": "2026-10-19T09:45:00Z",
                    "items": [
                        {
                            "product_id": "1",
                            "product_name": "Buckets",
                            "price": 29.99,
                            "quantity": 2,
                            "subtotal": 59.98,
                        }
                    ],
                    "customer_name": "Ada Lovelace",
                    "customer_email": "ada@example.com",
                    "customer_address": "12 St James's Square, London",
                }
            ]
        }
    }

    id: str
    customer_id: str
    total: float
    status: str
    created_at: datetime | None = None
    items: list[OrderLineResponse]
    customer_name: str
    customer_email: str
    customer_address: str | None = None

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        customer = order.customer
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            total=order.total,
            status=order.status,
            created_at=order.created_at,
            items=[OrderLineResponse.model_validate(line) for line in order.items],
            customer_name=customer.name if customer else UNKNOWN_CUSTOMER,
            customer_email=customer.email if customer else UNKNOWN_CUSTOMER,
            customer_address=customer.address if customer else None,
        )
