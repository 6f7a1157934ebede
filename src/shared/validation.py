"""Typed validation results.

Validators return ``Valid`` wrapping the cleaned value or ``Invalid`` carrying
the message to report. Nothing is written until a ``Valid`` comes back.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from shared.errors import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    message: str


ValidationResult = Valid[T] | Invalid


def unwrap(result: "Valid[T] | Invalid") -> T:
    """Return the cleaned value, or raise ``ValidationError`` for an ``Invalid`` result."""
    if isinstance(result, Invalid):
        raise ValidationError(result.message)
    return result.value


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_positive_number(value) -> bool:
    # bool is an int subclass; True is not a price
    return isinstance(value, int | float) and not isinstance(value, bool) and value > 0


def is_non_negative_integer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
