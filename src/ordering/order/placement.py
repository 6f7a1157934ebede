"""Order placement, the one workflow that spans all three stores.

Flow, inside a single unit of work:
    1. Validate the request (no storage access yet)
    2. For each requested line, in request order: read the product through the
       unit of work, check stock, snapshot the line, decrement stock
    3. Stage the customer, then the order referencing it
    4. Commit

Any failure before the commit rolls the unit of work back, so either the order,
its customer and every stock decrement become durable together, or none do.
"""

from dataclasses import dataclass

import structlog
from catalogue.product.store import CatalogStore
from identity.customer.customer import CustomerInfo, validate_customer_info
from identity.customer.store import CustomerStore
from shared.errors import InsufficientStockError, NotFoundError
from shared.storage import StorageBackend
from shared.validation import Invalid, Valid, ValidationResult, is_blank, unwrap

from ordering.order.order import Order, OrderLine
from ordering.order.store import OrderStore

logger = structlog.get_logger(__name__)

MISSING_REQUEST_MESSAGE = "Items and customer info are required"
INVALID_ITEM_MESSAGE = "Each item requires a productId and a positive integer quantity"


@dataclass(frozen=True)
class RequestedLine:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class PlaceOrder:
    lines: tuple[RequestedLine, ...]
    customer: CustomerInfo


def validate_order_request(items, customer_info) -> ValidationResult[PlaceOrder]:
    if not items or not customer_info:
        return Invalid(MISSING_REQUEST_MESSAGE)

    lines = []
    for item in items:
        product_id = item.get("productId") if isinstance(item, dict) else None
        quantity = item.get("quantity") if isinstance(item, dict) else None

        if is_blank(product_id) or isinstance(product_id, bool) or not isinstance(product_id, str | int):
            return Invalid(INVALID_ITEM_MESSAGE)
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            return Invalid(INVALID_ITEM_MESSAGE)

        lines.append(RequestedLine(product_id=str(product_id), quantity=quantity))

    customer = validate_customer_info(customer_info)
    if isinstance(customer, Invalid):
        return customer

    return Valid(PlaceOrder(lines=tuple(lines), customer=customer.value))


class OrderPlacement:
    def __init__(
        self,
        backend: StorageBackend,
        catalog: CatalogStore,
        customers: CustomerStore,
        orders: OrderStore,
    ) -> None:
        self.backend = backend
        self.catalog = catalog
        self.customers = customers
        self.orders = orders

    def place(self, items, customer_info) -> Order:
        """Place an order for ``items`` (``[{productId, quantity}]``) on behalf of ``customer_info``.

        Raises ``ValidationError``, ``NotFoundError``, ``InsufficientStockError``
        or ``PersistenceError``; in every case no store has changed.
        """
        request = unwrap(validate_order_request(items, customer_info))

        with self.backend.guard("Failed to create order"), self.backend.unit_of_work() as uow:
            lines: list[OrderLine] = []

            for requested in request.lines:
                product = self.catalog.get_by_id_within(uow, requested.product_id)
                if product is None:
                    raise NotFoundError(f"Product {requested.product_id} not found")
                if product.stock < requested.quantity:
                    raise InsufficientStockError(product.id, product.name)

                lines.append(OrderLine.snapshot(product, requested.quantity))

                self.catalog.decrement_stock_within(uow, product, requested.quantity)

            customer = self.customers.create_within(uow, request.customer)
            # Order.create totals the line subtotals in request order
            order = Order.create(customer_id=customer.id, items=lines)
            self.orders.create_within(uow, order)

            uow.commit()

        logger.info(
            "Order placed",
            order_id=order.id,
            customer_id=customer.id,
            total=order.total,
            lines=len(order.items),
        )
        return order.with_customer(customer)
