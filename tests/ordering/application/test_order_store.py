"""Application tests for the order store."""

from dataclasses import replace
from datetime import UTC, datetime

from catalogue.product.product import Product
from identity.customer.customer import Customer

from ordering.order.order import Order, OrderLine


def _write_order(backend, customer_name="Ada", created_at=None, lines=None):
    customer = Customer.create(name=customer_name, email=f"{customer_name.lower()}@example.com", address="London")
    product = Product.create(name="Widget", price=5.0, description="A widget", stock=10)
    order = Order.create(customer_id=customer.id, items=lines or [OrderLine.snapshot(product, 2)])
    if created_at is not None:
        order = replace(order, created_at=created_at)

    with backend.unit_of_work() as uow:
        uow.add_customer(customer)
        uow.add_order(order)
        uow.commit()
    return order, customer


class TestCreateWithin:
    def test_order_is_written_with_lines(self, backend, orders):
        customer = Customer.create(name="Ada", email="ada@example.com")
        widget = Product.create(name="Widget", price=5.0, description="A widget", stock=10)
        gadget = Product.create(name="Gadget", price=2.5, description="A gadget", stock=10)
        order = Order.create(
            customer_id=customer.id,
            items=[OrderLine.snapshot(widget, 3), OrderLine.snapshot(gadget, 2)],
        )

        with backend.unit_of_work() as uow:
            uow.add_customer(customer)
            orders.create_within(uow, order)
            uow.commit()

        stored = orders.get_by_id(order.id)
        assert stored.id == order.id
        assert stored.customer_id == customer.id
        assert stored.status == "pending"
        assert stored.items == order.items
        assert [line.product_name for line in stored.items] == ["Widget", "Gadget"]
        assert stored.total == 20.0

    def test_order_is_discarded_without_commit(self, backend, orders):
        customer = Customer.create(name="Ada", email="ada@example.com")
        order = Order.create(customer_id=customer.id, items=[])

        with backend.unit_of_work() as uow:
            uow.add_customer(customer)
            orders.create_within(uow, order)

        assert orders.get_by_id(order.id) is None


class TestReads:
    def test_get_resolves_customer(self, backend, orders):
        order, customer = _write_order(backend)

        stored = orders.get_by_id(order.id)

        assert stored.customer is not None
        assert stored.customer.id == customer.id
        assert stored.customer.name == "Ada"
        assert stored.customer.email == "ada@example.com"
        assert stored.customer.address == "London"

    def test_get_unknown_order(self, orders):
        assert orders.get_by_id("does-not-exist") is None

    def test_list_empty(self, orders):
        assert orders.list_all() == []

    def test_list_newest_first(self, backend, orders):
        _write_order(backend, customer_name="Old", created_at=datetime(2026, 1, 1, tzinfo=UTC))
        _write_order(backend, customer_name="New", created_at=datetime(2026, 1, 3, tzinfo=UTC))
        _write_order(backend, customer_name="Mid", created_at=datetime(2026, 1, 2, tzinfo=UTC))

        listed = orders.list_all()

        assert [order.customer.name for order in listed] == ["New", "Mid", "Old"]

    def test_list_includes_lines(self, backend, orders):
        order, _ = _write_order(backend)

        [listed] = orders.list_all()

        assert listed.id == order.id
        assert len(listed.items) == 1
        assert listed.items[0].quantity == 2
        assert listed.items[0].subtotal == 10.0
