"""Customer store."""

import structlog
from shared.storage import StorageBackend, UnitOfWork
from shared.validation import unwrap

from identity.customer.customer import Customer, CustomerInfo, validate_customer_info

logger = structlog.get_logger(__name__)


class CustomerStore:
    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend

    def create_within(self, uow: UnitOfWork, info: CustomerInfo | dict) -> Customer:
        """Add a new customer to an open unit of work.

        Emails are not deduplicated: every call writes a fresh record.
        """
        if isinstance(info, dict):
            info = unwrap(validate_customer_info(info))

        customer = Customer.create(name=info.name, email=info.email, address=info.address)
        uow.add_customer(customer)
        logger.debug("Customer staged", customer_id=customer.id)
        return customer

    def get_by_id(self, customer_id: str) -> Customer | None:
        with self.backend.guard("Failed to fetch customer"):
            return self.backend.get_customer(customer_id)
