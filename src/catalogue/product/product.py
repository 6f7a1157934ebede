"""Product record and the validation applied before one is created."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import uuid4

from shared.validation import (
    Invalid,
    Valid,
    ValidationResult,
    is_blank,
    is_non_negative_integer,
    is_positive_number,
)

DEFAULT_IMAGE = "/images/placeholder.jpg"

REQUIRED_FIELDS_MESSAGE = "All fields are required"


@dataclass(frozen=True)
class Product:
    """A catalog entry. ``stock`` is the only field mutated after creation."""

    id: str
    name: str
    price: float
    description: str | None = None
    image: str = DEFAULT_IMAGE
    stock: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, name, price, description, stock, image=None, id=None):
        now = datetime.now(UTC)
        return cls(
            id=id or str(uuid4()),
            name=name,
            price=float(price),
            description=description,
            image=image or DEFAULT_IMAGE,
            stock=stock,
            created_at=now,
            updated_at=now,
        )

    def with_stock(self, stock: int) -> "Product":
        return replace(self, stock=stock, updated_at=datetime.now(UTC))


@dataclass(frozen=True)
class NewProduct:
    """Cleaned fields for a product that passed validation."""

    name: str
    price: float
    description: str
    stock: int
    image: str | None = None


def validate_new_product(fields: dict) -> ValidationResult[NewProduct]:
    name = fields.get("name")
    price = fields.get("price")
    description = fields.get("description")
    stock = fields.get("stock")

    # Zero price counts as missing, zero stock does not
    if is_blank(name) or is_blank(description) or not price or stock is None:
        return Invalid(REQUIRED_FIELDS_MESSAGE)

    if not isinstance(name, str) or not isinstance(description, str):
        return Invalid("Name and description must be text")
    if not is_positive_number(price):
        return Invalid("Price must be a positive number")
    if not is_non_negative_integer(stock):
        return Invalid("Stock must be a non-negative integer")

    image = fields.get("image")
    return Valid(
        NewProduct(
            name=name.strip(),
            price=float(price),
            description=description.strip(),
            stock=stock,
            image=image if isinstance(image, str) and image.strip() else None,
        )
    )
