import os
from pathlib import Path

import mongomock
import pytest

BACKENDS = ("sql", "mongodb")


def pytest_addoption(parser):
    parser.addoption(
        "--backend",
        action="store",
        default="all",
        choices=("all", *BACKENDS),
        help="Storage backend(s) to run backend-parametrized tests on",
    )


def pytest_sessionstart(session):
    """Quiet logging and keep test runs from writing log files."""
    os.environ.setdefault("ENVIRONMENT", "test")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Storage backends
# ---------------------------------------------------------------------------
@pytest.fixture()
def sql_backend(tmp_path):
    from shared.storage.sql_adapter import SqlBackend

    backend = SqlBackend(f"sqlite:///{tmp_path / 'flash_tans.db'}")
    backend.setup()

    yield backend

    backend.teardown()
    backend.close()


@pytest.fixture()
def mongo_backend():
    from shared.storage.mongo_adapter import MongoBackend

    backend = MongoBackend(client=mongomock.MongoClient(), database="flash_tans_test")
    backend.setup()

    yield backend

    backend.teardown()
    backend.close()


@pytest.fixture(params=BACKENDS)
def backend(request):
    """Runs the test once per storage backend."""
    selected = request.config.getoption("--backend")
    if selected != "all" and selected != request.param:
        pytest.skip(f"backend {request.param} not selected")

    fixture_name = "sql_backend" if request.param == "sql" else "mongo_backend"
    return request.getfixturevalue(fixture_name)


# ---------------------------------------------------------------------------
# Stores and workflow
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalog(backend):
    from catalogue.product.store import CatalogStore

    return CatalogStore(backend)


@pytest.fixture()
def customers(backend):
    from identity.customer.store import CustomerStore

    return CustomerStore(backend)


@pytest.fixture()
def orders(backend):
    from ordering.order.store import OrderStore

    return OrderStore(backend)


@pytest.fixture()
def placement(backend, catalog, customers, orders):
    from ordering.order.placement import OrderPlacement

    return OrderPlacement(backend, catalog, customers, orders)


@pytest.fixture()
def add_product(backend):
    """Insert a product directly, bypassing validation. Returns the stored Product."""
    from catalogue.product.product import Product

    def _add(name="Widget", price=5.0, stock=10, description="A widget", created_at=None, id=None):
        product = Product.create(name=name, price=price, description=description, stock=stock, id=id)
        if created_at is not None:
            product = Product(
                id=product.id,
                name=product.name,
                price=product.price,
                description=product.description,
                image=product.image,
                stock=product.stock,
                created_at=created_at,
                updated_at=created_at,
            )
        with backend.unit_of_work() as uow:
            uow.add_product(product)
            uow.commit()
        return product

    return _add


@pytest.fixture()
def customer_info():
    return {"name": "Ada Lovelace", "email": "ada@example.com", "address": "12 St James's Square, London"}


# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------
@pytest.fixture()
def settings():
    from shared.config import Settings

    return Settings(environment="test", seed_sample_products=False, log_to_file=False)


@pytest.fixture()
def app(settings, backend):
    from app import create_app

    return create_app(settings=settings, backend=backend)


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient

    # Entering the client runs the app lifespan (schema setup, optional seeding)
    with TestClient(app) as test_client:
        yield test_client
