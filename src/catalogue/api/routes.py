"""FastAPI endpoints for the Catalogue domain."""

from typing import Annotated

from fastapi import APIRouter, Depends
from shared.dependencies import get_catalog

from catalogue.api.schemas import CreateProductRequest, MessageResponse, ProductResponse
from catalogue.product.store import CatalogStore

product_router = APIRouter(prefix="/api/products", tags=["products"])

Catalog = Annotated[CatalogStore, Depends(get_catalog)]


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
def list_products(catalog: Catalog) -> list[ProductResponse]:
    return [ProductResponse.model_validate(product) for product in catalog.list_all()]


@product_router.post("", status_code=201, response_model=ProductResponse)
def create_product(body: CreateProductRequest, catalog: Catalog) -> ProductResponse:
    product = catalog.create(body.model_dump())
    return ProductResponse.model_validate(product)


@product_router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(product_id: str, catalog: Catalog) -> MessageResponse:
    catalog.delete(product_id)
    return MessageResponse(message="Product deleted successfully")
