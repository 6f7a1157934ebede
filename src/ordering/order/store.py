"""Order store."""

from shared.storage import StorageBackend, UnitOfWork

from ordering.order.order import Order


class OrderStore:
    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend

    def create_within(self, uow: UnitOfWork, order: Order) -> Order:
        uow.add_order(order)
        return order

    def get_by_id(self, order_id: str) -> Order | None:
        """The order with its customer resolved, or None."""
        with self.backend.guard("Failed to fetch order"):
            return self.backend.get_order(order_id)

    def list_all(self) -> list[Order]:
        """Every order, newest first, each with its customer resolved."""
        with self.backend.guard("Failed to fetch orders"):
            return self.backend.list_orders()
