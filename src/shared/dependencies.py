"""FastAPI dependencies that hand the stores built at startup to route handlers."""

from catalogue.product.store import CatalogStore
from fastapi import Request
from ordering.order.placement import OrderPlacement
from ordering.order.store import OrderStore


def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.catalog


def get_orders(request: Request) -> OrderStore:
    return request.app.state.orders


def get_order_placement(request: Request) -> OrderPlacement:
    return request.app.state.order_placement
