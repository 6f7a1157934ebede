"""Relational storage adapter on SQLAlchemy.

Works against any SQLAlchemy URL; the default is a SQLite file. Each unit of
work owns one ORM session and one database transaction. Product reads inside a
unit of work take a row lock (``SELECT ... FOR UPDATE``) on dialects that
support it, and stock decrements are ``UPDATE ... WHERE stock >= :quantity``
so a decrement can never drive stock negative, whatever the isolation level.
"""

from datetime import UTC, datetime

import structlog
from sqlalchemy import create_engine, event, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from catalogue.product.product import Product
from identity.customer.customer import Customer
from ordering.order.order import Order, OrderLine
from shared.storage.port import StorageBackend, UnitOfWork, ensure_utc
from shared.storage.sql_models import (
    Base,
    CustomerRecord,
    OrderItemRecord,
    OrderRecord,
    ProductRecord,
)

logger = structlog.get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ---------------------------------------------------------------------------
# Record <-> domain mapping
# ---------------------------------------------------------------------------
def _to_product(record: ProductRecord) -> Product:
    return Product(
        id=record.id,
        name=record.name,
        price=record.price,
        description=record.description,
        image=record.image,
        stock=record.stock,
        created_at=ensure_utc(record.created_at),
        updated_at=ensure_utc(record.updated_at),
    )


def _to_customer(record: CustomerRecord | None) -> Customer | None:
    if record is None:
        return None
    return Customer(
        id=record.id,
        name=record.name,
        email=record.email,
        address=record.address,
        created_at=ensure_utc(record.created_at),
    )


def _to_order(record: OrderRecord) -> Order:
    return Order(
        id=record.id,
        customer_id=record.customer_id,
        total=record.total,
        status=record.status,
        created_at=ensure_utc(record.created_at),
        items=tuple(
            OrderLine(
                product_id=item.product_id,
                product_name=item.product_name,
                price=item.price,
                quantity=item.quantity,
                subtotal=item.subtotal,
            )
            for item in record.items
        ),
        customer=_to_customer(record.customer),
    )


class SqlUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: sessionmaker) -> None:
        super().__init__()
        self._session_factory = session_factory
        self._session = None

    def _begin(self) -> None:
        self._session = self._session_factory()
        self._session.begin()

    def _commit(self) -> None:
        try:
            self._session.commit()
        finally:
            self._session.close()

    def _rollback(self) -> None:
        try:
            self._session.rollback()
        finally:
            self._session.close()

    def get_product(self, product_id: str) -> Product | None:
        self._ensure_active("read through")
        record = self._session.get(
            ProductRecord,
            product_id,
            with_for_update=True,
            populate_existing=True,
        )
        return _to_product(record) if record is not None else None

    def add_product(self, product: Product) -> None:
        self._ensure_active("write through")
        self._session.add(
            ProductRecord(
                id=product.id,
                name=product.name,
                price=product.price,
                description=product.description,
                image=product.image,
                stock=product.stock,
                created_at=product.created_at,
                updated_at=product.updated_at,
            )
        )
        self._session.flush()

    def delete_product(self, product_id: str) -> bool:
        self._ensure_active("write through")
        record = self._session.get(ProductRecord, product_id)
        if record is None:
            return False
        self._session.delete(record)
        self._session.flush()
        return True

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        self._ensure_active("write through")
        result = self._session.execute(
            update(ProductRecord)
            .where(ProductRecord.id == product_id, ProductRecord.stock >= quantity)
            .values(stock=ProductRecord.stock - quantity, updated_at=datetime.now(UTC))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def add_customer(self, customer: Customer) -> None:
        self._ensure_active("write through")
        self._session.add(
            CustomerRecord(
                id=customer.id,
                name=customer.name,
                email=customer.email,
                address=customer.address,
                created_at=customer.created_at,
            )
        )
        self._session.flush()

    def add_order(self, order: Order) -> None:
        self._ensure_active("write through")
        self._session.add(
            OrderRecord(
                id=order.id,
                customer_id=order.customer_id,
                total=order.total,
                status=order.status,
                created_at=order.created_at,
                items=[
                    OrderItemRecord(
                        position=position,
                        product_id=line.product_id,
                        product_name=line.product_name,
                        price=line.price,
                        quantity=line.quantity,
                        subtotal=line.subtotal,
                    )
                    for position, line in enumerate(order.items)
                ],
            )
        )
        self._session.flush()


class SqlBackend(StorageBackend):
    """Storage backend for SQLite, PostgreSQL or any other SQLAlchemy dialect."""

    name = "sql"
    driver_errors = (SQLAlchemyError,)

    def __init__(self, database_url: str, **engine_kwargs) -> None:
        if database_url.startswith("sqlite"):
            # Route handlers run in a threadpool; connections move between threads
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})

        self.database_url = database_url
        self.engine = create_engine(database_url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def unit_of_work(self) -> SqlUnitOfWork:
        return SqlUnitOfWork(self._session_factory)

    def list_products(self) -> list[Product]:
        with self._session_factory() as session:
            records = session.scalars(select(ProductRecord).order_by(ProductRecord.created_at.desc())).all()
            return [_to_product(record) for record in records]

    def get_product(self, product_id: str) -> Product | None:
        with self._session_factory() as session:
            record = session.get(ProductRecord, product_id)
            return _to_product(record) if record is not None else None

    def count_products(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count()).select_from(ProductRecord))

    def count_customers(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count()).select_from(CustomerRecord))

    def get_customer(self, customer_id: str) -> Customer | None:
        with self._session_factory() as session:
            return _to_customer(session.get(CustomerRecord, customer_id))

    def list_orders(self) -> list[Order]:
        with self._session_factory() as session:
            records = session.scalars(select(OrderRecord).order_by(OrderRecord.created_at.desc())).unique().all()
            return [_to_order(record) for record in records]

    def get_order(self, order_id: str) -> Order | None:
        with self._session_factory() as session:
            record = session.get(OrderRecord, order_id)
            return _to_order(record) if record is not None else None

    def setup(self) -> None:
        Base.metadata.create_all(self.engine)
        logger.info("Relational schema ready", url=self.engine.url.render_as_string(hide_password=True))

    def teardown(self) -> None:
        Base.metadata.drop_all(self.engine)

    def reset(self) -> None:
        with self.engine.begin() as connection:
            for table in reversed(Base.metadata.sorted_tables):
                connection.execute(table.delete())

    def close(self) -> None:
        self.engine.dispose()
