"""Customer contact record captured at checkout."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from shared.validation import Invalid, Valid, ValidationResult, is_blank


@dataclass(frozen=True)
class Customer:
    """Contact details for whoever placed an order.

    A fresh record is written for every order, so two orders from the same
    email address reference two different customers.
    """

    id: str
    name: str
    email: str
    address: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, name, email, address=None):
        return cls(id=str(uuid4()), name=name, email=email, address=address, created_at=datetime.now(UTC))


@dataclass(frozen=True)
class CustomerInfo:
    name: str
    email: str
    address: str | None = None


def validate_customer_info(fields: dict) -> ValidationResult[CustomerInfo]:
    name = fields.get("name")
    email = fields.get("email")
    address = fields.get("address")

    if is_blank(name) or is_blank(email) or not isinstance(name, str) or not isinstance(email, str):
        return Invalid("Customer name and email are required")

    if address is not None and not isinstance(address, str):
        return Invalid("Customer address must be text")

    return Valid(CustomerInfo(name=name.strip(), email=email.strip(), address=address or None))
