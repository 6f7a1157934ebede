"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, StrictFloat, StrictInt

# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    """Every field is optional here; the catalog store reports what is missing."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Load Balancers",
                    "price": 34.99,
                    "description": "Customizable load balancers for your applications",
                    "stock": 30,
                    "image": "/images/load-balancers.jpg",
                }
            ]
        }
    }

    name: str | None = None
    price: StrictFloat | StrictInt | None = None
    description: str | None = None
    stock: StrictInt | None = None
    image: str | None = None


# --- Response Schemas ---


class ProductResponse(BaseModel):
    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "b2c3d4e5-f6a7-8901-bcde-f12345678901",
                    "name": "Buckets",
                    "price": 29.99,
                    "description": "Amazon S3 Buckets for scalable storage",
                    "image": "/images/placeholder.jpg",
                    "stock": 50,
                    "created_at": "2026-10-19T09:30:00Z",
                    "updated_at": "2026-10-19T09:30:00Z",
                }
            ]
        },
    }

    id: str
    name: str
    price: float
    description: str | None = None
    image: str | None = None
    stock: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MessageResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"message": "Product deleted successfully"}]}}

    message: str
