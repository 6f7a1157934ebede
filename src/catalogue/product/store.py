"""Catalog store: product reads, creation, deletion and stock decrements."""

import structlog
from shared.errors import InsufficientStockError, NotFoundError
from shared.storage import StorageBackend, UnitOfWork
from shared.validation import unwrap

from catalogue.product.product import Product, validate_new_product

logger = structlog.get_logger(__name__)

SAMPLE_PRODUCTS = (
    {
        "id": "1",
        "name": "Buckets",
        "price": 29.99,
        "description": "Amazon S3 Buckets for scalable storage",
        "stock": 50,
    },
    {
        "id": "2",
        "name": "Load Balancers",
        "price": 34.99,
        "description": "Customizable load balancers for your applications",
        "stock": 30,
    },
    {
        "id": "3",
        "name": "Microsoft Azure",
        "price": 24.99,
        "description": "Cloud computing services for building, testing, and deploying applications",
        "stock": 25,
    },
)


class CatalogStore:
    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend

    def list_all(self) -> list[Product]:
        """Every product, newest first."""
        with self.backend.guard("Failed to fetch products"):
            return self.backend.list_products()

    def get_by_id(self, product_id: str) -> Product | None:
        with self.backend.guard("Failed to fetch product"):
            return self.backend.get_product(product_id)

    def create(self, fields: dict) -> Product:
        """Validate ``fields`` and persist a new product.

        Raises ``ValidationError`` before touching storage when a required
        field is missing or malformed.
        """
        new = unwrap(validate_new_product(fields))
        product = Product.create(
            name=new.name,
            price=new.price,
            description=new.description,
            stock=new.stock,
            image=new.image,
        )

        with self.backend.guard("Failed to create product"), self.backend.unit_of_work() as uow:
            uow.add_product(product)
            uow.commit()

        logger.info("Product created", product_id=product.id, name=product.name, stock=product.stock)
        return product

    def delete(self, product_id: str) -> None:
        with self.backend.guard("Failed to delete product"), self.backend.unit_of_work() as uow:
            if not uow.delete_product(product_id):
                raise NotFoundError("Product not found")
            uow.commit()

        logger.info("Product deleted", product_id=product_id)

    def get_by_id_within(self, uow: UnitOfWork, product_id: str) -> Product | None:
        """Read a product through an open unit of work."""
        return uow.get_product(product_id)

    def decrement_stock_within(self, uow: UnitOfWork, product: Product, quantity: int) -> None:
        if not uow.decrement_stock(product.id, quantity):
            # Someone else took the stock between our read and our write
            raise InsufficientStockError(product.id, product.name)

    def seed_samples(self) -> int:
        """Insert the sample catalog when no products exist. Returns how many were added."""
        with self.backend.guard("Failed to seed products"):
            if self.backend.count_products() > 0:
                return 0

            with self.backend.unit_of_work() as uow:
                for sample in SAMPLE_PRODUCTS:
                    uow.add_product(Product.create(**sample))
                uow.commit()

        logger.info("Sample catalog seeded", count=len(SAMPLE_PRODUCTS))
        return len(SAMPLE_PRODUCTS)
