"""Storage port (abstract interface).

Defines the contract both storage adapters implement, so stores and the order
placement workflow run unchanged against SQLAlchemy or MongoDB:

- ``StorageBackend``: reads, schema management and the factory for units of work
- ``UnitOfWork``: one atomic boundary with an explicit commit or rollback
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from enum import Enum

import structlog

from catalogue.product.product import Product
from identity.customer.customer import Customer
from ordering.order.order import Order
from shared.errors import InvalidOperationError, PersistenceError

logger = structlog.get_logger(__name__)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Drivers hand back naive datetimes; the domain works in aware UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class UnitOfWorkState(Enum):
    NEW = "new"
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class UnitOfWork(ABC):
    """A scoped transaction.

    Use as a context manager. Leaving the block without ``commit()`` discards
    every write made through the unit of work, whether the block raised or not.
    """

    def __init__(self) -> None:
        self.state = UnitOfWorkState.NEW

    def __enter__(self) -> "UnitOfWork":
        self.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self.state is UnitOfWorkState.ACTIVE:
            self.rollback()
        return False

    @property
    def is_active(self) -> bool:
        return self.state is UnitOfWorkState.ACTIVE

    def begin(self) -> None:
        if self.state is not UnitOfWorkState.NEW:
            raise InvalidOperationError(f"Cannot begin a unit of work that is {self.state.value}")
        self._begin()
        self.state = UnitOfWorkState.ACTIVE

    def commit(self) -> None:
        self._ensure_active("commit")
        try:
            self._commit()
        except BaseException:
            self.state = UnitOfWorkState.ROLLED_BACK
            raise
        self.state = UnitOfWorkState.COMMITTED

    def rollback(self) -> None:
        self._ensure_active("roll back")
        try:
            self._rollback()
        finally:
            self.state = UnitOfWorkState.ROLLED_BACK

    def _ensure_active(self, action: str) -> None:
        if self.state is not UnitOfWorkState.ACTIVE:
            raise InvalidOperationError(f"Cannot {action} a unit of work that is {self.state.value}")

    # --- Adapter hooks ---

    @abstractmethod
    def _begin(self) -> None: ...

    @abstractmethod
    def _commit(self) -> None:
        """Make every write durable, or raise and leave nothing behind."""
        ...

    @abstractmethod
    def _rollback(self) -> None: ...

    # --- Operations inside the transaction ---

    @abstractmethod
    def get_product(self, product_id: str) -> Product | None:
        """Read a product as this unit of work sees it, pending writes included."""
        ...

    @abstractmethod
    def add_product(self, product: Product) -> None: ...

    @abstractmethod
    def delete_product(self, product_id: str) -> bool:
        """Delete a product. Returns False if it does not exist."""
        ...

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Take ``quantity`` off a product's stock.

        The write is guarded: it only applies while stock is still at least
        ``quantity``. Returns False when the guard fails.
        """
        ...

    @abstractmethod
    def add_customer(self, customer: Customer) -> None: ...

    @abstractmethod
    def add_order(self, order: Order) -> None: ...


class StorageBackend(ABC):
    """Abstract storage backend."""

    name: str = "abstract"

    #: Driver exception types translated into ``PersistenceError`` by ``guard``
    driver_errors: tuple[type[BaseException], ...] = ()

    @contextmanager
    def guard(self, message: str) -> Iterator[None]:
        """Translate driver failures into an opaque ``PersistenceError``."""
        try:
            yield
        except self.driver_errors as exc:
            logger.error("Storage operation failed", backend=self.name, operation=message, exc_info=exc)
            raise PersistenceError(message) from exc

    @abstractmethod
    def unit_of_work(self) -> UnitOfWork: ...

    @abstractmethod
    def list_products(self) -> list[Product]:
        """All products, newest first."""
        ...

    @abstractmethod
    def get_product(self, product_id: str) -> Product | None: ...

    @abstractmethod
    def count_products(self) -> int: ...

    @abstractmethod
    def count_customers(self) -> int: ...

    @abstractmethod
    def get_customer(self, customer_id: str) -> Customer | None: ...

    @abstractmethod
    def list_orders(self) -> list[Order]:
        """All orders, newest first, each with its customer resolved."""
        ...

    @abstractmethod
    def get_order(self, order_id: str) -> Order | None: ...

    @abstractmethod
    def setup(self) -> None:
        """Create tables, collections and indexes."""
        ...

    @abstractmethod
    def teardown(self) -> None:
        """Drop everything ``setup`` created."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Delete all data, keeping the schema."""
        ...

    @abstractmethod
    def close(self) -> None: ...
