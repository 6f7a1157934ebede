"""Document storage adapter on pymongo.

Collections: ``products``, ``customers`` and ``orders`` (order lines embedded
in their order). A unit of work buffers its writes and applies them on commit.

With ``transactions=True`` (requires a replica set) reads and the commit run
inside one client-session transaction, so a failed commit leaves nothing
behind. Without transactions the commit applies guarded ``$inc`` decrements
first and undoes the writes it already made if a later one fails.
"""

from datetime import UTC, datetime

import structlog
from pymongo import DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from catalogue.product.product import Product
from identity.customer.customer import Customer
from ordering.order.order import Order, OrderLine
from shared.errors import InsufficientStockError
from shared.storage.port import StorageBackend, UnitOfWork, ensure_utc

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Document <-> domain mapping
# ---------------------------------------------------------------------------
def _product_document(product: Product) -> dict:
    return {
        "_id": product.id,
        "name": product.name,
        "price": product.price,
        "description": product.description,
        "image": product.image,
        "stock": product.stock,
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


def _to_product(doc: dict) -> Product:
    return Product(
        id=doc["_id"],
        name=doc["name"],
        price=doc["price"],
        description=doc.get("description"),
        image=doc.get("image"),
        stock=doc.get("stock", 0),
        created_at=ensure_utc(doc.get("created_at")),
        updated_at=ensure_utc(doc.get("updated_at")),
    )


def _customer_document(customer: Customer) -> dict:
    return {
        "_id": customer.id,
        "name": customer.name,
        "email": customer.email,
        "address": customer.address,
        "created_at": customer.created_at,
    }


def _to_customer(doc: dict | None) -> Customer | None:
    if doc is None:
        return None
    return Customer(
        id=doc["_id"],
        name=doc["name"],
        email=doc["email"],
        address=doc.get("address"),
        created_at=ensure_utc(doc.get("created_at")),
    )


def _order_document(order: Order) -> dict:
    return {
        "_id": order.id,
        "customer_id": order.customer_id,
        "total": order.total,
        "status": order.status,
        "created_at": order.created_at,
        "items": [
            {
                "product_id": line.product_id,
                "product_name": line.product_name,
                "price": line.price,
                "quantity": line.quantity,
                "subtotal": line.subtotal,
            }
            for line in order.items
        ],
    }


def _to_order(doc: dict, customer: Customer | None) -> Order:
    return Order(
        id=doc["_id"],
        customer_id=doc["customer_id"],
        total=doc["total"],
        status=doc.get("status", "pending"),
        created_at=ensure_utc(doc.get("created_at")),
        items=tuple(
            OrderLine(
                product_id=item["product_id"],
                product_name=item["product_name"],
                price=item["price"],
                quantity=item["quantity"],
                subtotal=item["subtotal"],
            )
            for item in doc.get("items", [])
        ),
        customer=customer,
    )


class MongoUnitOfWork(UnitOfWork):
    def __init__(self, backend: "MongoBackend") -> None:
        super().__init__()
        self._backend = backend
        self._session = None
        self._new_products: dict[str, Product] = {}
        self._deleted_products: set[str] = set()
        self._decrements: dict[str, int] = {}
        self._product_names: dict[str, str] = {}
        self._customers: list[Customer] = []
        self._orders: list[Order] = []

    def _begin(self) -> None:
        if self._backend.transactions:
            self._session = self._backend.client.start_session()
            self._session.start_transaction()

    def _commit(self) -> None:
        if self._session is None:
            self._apply()
            return

        try:
            self._apply()
            self._session.commit_transaction()
        except BaseException:
            if self._session.in_transaction:
                self._session.abort_transaction()
            raise
        finally:
            self._session.end_session()

    def _rollback(self) -> None:
        self._discard()
        if self._session is not None:
            try:
                if self._session.in_transaction:
                    self._session.abort_transaction()
            finally:
                self._session.end_session()

    def _discard(self) -> None:
        self._new_products.clear()
        self._deleted_products.clear()
        self._decrements.clear()
        self._customers.clear()
        self._orders.clear()
        self._product_names.clear()

    def _apply(self) -> None:
        products = self._backend.products
        session = self._session
        now = datetime.now(UTC)
        applied_decrements: list[tuple[str, int]] = []
        inserted: list[tuple[object, list[str]]] = []

        try:
            # Decrements first: they are the writes most likely to be refused
            for product_id, quantity in self._decrements.items():
                result = products.update_one(
                    {"_id": product_id, "stock": {"$gte": quantity}},
                    {"$inc": {"stock": -quantity}, "$set": {"updated_at": now}},
                    session=session,
                )
                if result.matched_count != 1:
                    raise InsufficientStockError(product_id, self._product_names.get(product_id, product_id))
                applied_decrements.append((product_id, quantity))

            for collection, documents in (
                (products, [_product_document(p) for p in self._new_products.values()]),
                (self._backend.customers, [_customer_document(c) for c in self._customers]),
                (self._backend.orders, [_order_document(o) for o in self._orders]),
            ):
                if documents:
                    collection.insert_many(documents, session=session)
                    inserted.append((collection, [doc["_id"] for doc in documents]))

            for product_id in self._deleted_products:
                products.delete_one({"_id": product_id}, session=session)
        except BaseException:
            if session is None:
                self._compensate(applied_decrements, inserted)
            raise
        finally:
            self._discard()

    def _compensate(self, applied_decrements, inserted) -> None:
        try:
            for collection, ids in reversed(inserted):
                collection.delete_many({"_id": {"$in": ids}})
            for product_id, quantity in applied_decrements:
                self._backend.products.update_one({"_id": product_id}, {"$inc": {"stock": quantity}})
        except PyMongoError:
            logger.exception(
                "Failed to undo partial commit",
                decrements=applied_decrements,
                inserted={collection.name: ids for collection, ids in inserted},
            )

    def get_product(self, product_id: str) -> Product | None:
        self._ensure_active("read through")
        if product_id in self._deleted_products:
            return None

        product = self._new_products.get(product_id)
        if product is None:
            doc = self._backend.products.find_one({"_id": product_id}, session=self._session)
            if doc is None:
                return None
            product = _to_product(doc)

        self._product_names[product_id] = product.name
        pending = self._decrements.get(product_id, 0)
        return product.with_stock(product.stock - pending) if pending else product

    def add_product(self, product: Product) -> None:
        self._ensure_active("write through")
        self._new_products[product.id] = product

    def delete_product(self, product_id: str) -> bool:
        self._ensure_active("write through")
        if self._new_products.pop(product_id, None) is not None:
            return True
        if product_id in self._deleted_products:
            return False

        exists = self._backend.products.find_one({"_id": product_id}, {"_id": 1}, session=self._session)
        if exists is None:
            return False
        self._deleted_products.add(product_id)
        return True

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        self._ensure_active("write through")
        current = self.get_product(product_id)
        if current is None or current.stock < quantity:
            return False
        self._decrements[product_id] = self._decrements.get(product_id, 0) + quantity
        return True

    def add_customer(self, customer: Customer) -> None:
        self._ensure_active("write through")
        self._customers.append(customer)

    def add_order(self, order: Order) -> None:
        self._ensure_active("write through")
        self._orders.append(order)


class MongoBackend(StorageBackend):
    """Storage backend for MongoDB."""

    name = "mongodb"
    driver_errors = (PyMongoError,)

    def __init__(
        self,
        uri: str | None = None,
        database: str = "flash_tans",
        transactions: bool = False,
        client=None,
    ) -> None:
        self.client = client if client is not None else MongoClient(uri, tz_aware=True)
        self.transactions = transactions
        self.db = self.client[database]
        self.products = self.db["products"]
        self.customers = self.db["customers"]
        self.orders = self.db["orders"]

    def unit_of_work(self) -> MongoUnitOfWork:
        return MongoUnitOfWork(self)

    def list_products(self) -> list[Product]:
        return [_to_product(doc) for doc in self.products.find().sort("created_at", DESCENDING)]

    def get_product(self, product_id: str) -> Product | None:
        doc = self.products.find_one({"_id": product_id})
        return _to_product(doc) if doc is not None else None

    def count_products(self) -> int:
        return self.products.count_documents({})

    def count_customers(self) -> int:
        return self.customers.count_documents({})

    def get_customer(self, customer_id: str) -> Customer | None:
        return _to_customer(self.customers.find_one({"_id": customer_id}))

    def list_orders(self) -> list[Order]:
        docs = list(self.orders.find().sort("created_at", DESCENDING))
        customer_ids = list({doc["customer_id"] for doc in docs})
        customers = {
            doc["_id"]: _to_customer(doc) for doc in self.customers.find({"_id": {"$in": customer_ids}})
        }
        return [_to_order(doc, customers.get(doc["customer_id"])) for doc in docs]

    def get_order(self, order_id: str) -> Order | None:
        doc = self.orders.find_one({"_id": order_id})
        if doc is None:
            return None
        return _to_order(doc, self.get_customer(doc["customer_id"]))

    def setup(self) -> None:
        self.products.create_index([("created_at", DESCENDING)])
        self.orders.create_index([("created_at", DESCENDING)])
        self.orders.create_index("customer_id")
        logger.info("Document collections ready", database=self.db.name, transactions=self.transactions)

    def teardown(self) -> None:
        for collection in (self.products, self.customers, self.orders):
            collection.drop()

    def reset(self) -> None:
        for collection in (self.products, self.customers, self.orders):
            collection.delete_many({})

    def close(self) -> None:
        self.client.close()
