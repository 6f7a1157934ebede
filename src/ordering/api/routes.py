"""FastAPI endpoints for the Ordering domain."""

from typing import Annotated

from fastapi import APIRouter, Depends
from shared.dependencies import get_order_placement, get_orders
from shared.errors import NotFoundError

from ordering.api.schemas import OrderResponse, PlaceOrderRequest
from ordering.order.placement import OrderPlacement
from ordering.order.store import OrderStore

order_router = APIRouter(prefix="/api/orders", tags=["orders"])

Placement = Annotated[OrderPlacement, Depends(get_order_placement)]
Orders = Annotated[OrderStore, Depends(get_orders)]


@order_router.post("", status_code=201, response_model=OrderResponse)
def place_order(body: PlaceOrderRequest, placement: Placement) -> OrderResponse:
    order = placement.place(body.item_dicts(), body.customer_dict())
    return OrderResponse.from_order(order)


@order_router.get("", response_model=list[OrderResponse])
def list_orders(orders: Orders) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in orders.list_all()]


@order_router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: str, orders: Orders) -> OrderResponse:
    order = orders.get_by_id(order_id)
    if order is None:
        raise NotFoundError("Order not found")
    return OrderResponse.from_order(order)
