"""Application tests for the customer store."""

import pytest
from shared.errors import ValidationError

from identity.customer.customer import CustomerInfo


class TestCreateWithin:
    def test_customer_is_written_on_commit(self, backend, customers, customer_info):
        with backend.unit_of_work() as uow:
            customer = customers.create_within(uow, customer_info)
            uow.commit()

        stored = customers.get_by_id(customer.id)
        assert stored is not None
        assert stored.name == "Ada Lovelace"
        assert stored.email == "ada@example.com"
        assert stored.address == "12 St James's Square, London"

    def test_accepts_cleaned_info(self, backend, customers):
        with backend.unit_of_work() as uow:
            customer = customers.create_within(uow, CustomerInfo(name="Ada", email="ada@example.com"))
            uow.commit()

        assert customers.get_by_id(customer.id).address is None

    def test_customer_is_discarded_without_commit(self, backend, customers, customer_info):
        with backend.unit_of_work() as uow:
            customer = customers.create_within(uow, customer_info)

        assert customers.get_by_id(customer.id) is None

    def test_same_email_creates_two_customers(self, backend, customers, customer_info):
        with backend.unit_of_work() as uow:
            first = customers.create_within(uow, customer_info)
            second = customers.create_within(uow, customer_info)
            uow.commit()

        assert first.id != second.id
        assert customers.get_by_id(first.id).email == customers.get_by_id(second.id).email

    def test_invalid_details_are_rejected(self, backend, customers):
        with backend.unit_of_work() as uow:
            with pytest.raises(ValidationError) as exc:
                customers.create_within(uow, {"name": "Ada"})

        assert exc.value.message == "Customer name and email are required"


class TestGetById:
    def test_unknown_customer(self, customers):
        assert customers.get_by_id("does-not-exist") is None
