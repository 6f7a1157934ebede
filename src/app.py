"""Flash Tans FastAPI application.

Storefront JSON API over one storage backend (SQLAlchemy or MongoDB). The app
factory builds the backend, the stores and the order placement workflow, and
owns their lifecycle: schema setup and sample seeding on startup, closing the
backend on shutdown.

Usage:
    uvicorn app:create_app --factory --app-dir src --host 0.0.0.0 --port 3000
"""

from contextlib import asynccontextmanager

import structlog
from catalogue.api import product_router
from catalogue.product.store import CatalogStore
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from identity.customer.store import CustomerStore
from ordering.api import order_router
from ordering.order.placement import OrderPlacement
from ordering.order.store import OrderStore
from shared.config import Settings, get_settings
from shared.errors import ShopError
from shared.logging import configure_logging
from shared.storage import StorageBackend, build_backend

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
async def shop_error_handler(request: Request, exc: ShopError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            method=request.method,
            path=request.url.path,
            error=exc.message,
            exc_info=exc,
        )
    else:
        logger.warning(
            "Request rejected",
            method=request.method,
            path=request.url.path,
            status=exc.status_code,
            error=exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Invalid request body", method=request.method, path=request.url.path, errors=exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", method=request.method, path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Something went wrong!"})


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(settings: Settings | None = None, backend: StorageBackend | None = None) -> FastAPI:
    """Build the application.

    ``backend`` is built from ``settings`` when not given. Either way the app
    takes ownership and closes it on shutdown.
    """
    settings = settings or get_settings()
    configure_logging(
        level=settings.log_level,
        log_dir=settings.log_dir,
        to_file=settings.log_to_file,
        environment=settings.environment,
    )
    backend = backend or build_backend(settings)

    catalog = CatalogStore(backend)
    customers = CustomerStore(backend)
    orders = OrderStore(backend)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Preparing storage", backend=backend.name)
        backend.setup()
        if settings.seed_sample_products:
            catalog.seed_samples()
        logger.info("Flash Tans started", backend=backend.name, environment=settings.environment)
        yield
        logger.info("Flash Tans shutting down")
        backend.close()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Product catalog, customer capture and order placement",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.backend = backend
    app.state.catalog = catalog
    app.state.customers = customers
    app.state.orders = orders
    app.state.order_placement = OrderPlacement(backend, catalog, customers, orders)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ShopError, shop_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(product_router)
    app.include_router(order_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "backend": backend.name})

    return app
