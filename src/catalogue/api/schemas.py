"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Wireless Earbuds",
                    "price": 39.99,
                    "category": "Electronics",
                    "in_stock": True,
                    "image": "/images/earbuds.jpg",
                    "description": "Bluetooth 5.3 earbuds with charging case.",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., gt=0)
    category: str | None = Field(None, max_length=100)
    in_stock: bool = True
    image: str | None = Field(None, max_length=500)
    description: str | None = None


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    price: float | None = Field(None, gt=0)
    category: str | None = Field(None, max_length=100)
    in_stock: bool | None = None
    image: str | None = Field(None, max_length=500)
    description: str | None = None


# --- Category Request Schemas ---


class CreateCategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None


# --- Response Schemas ---


class ProductIdResponse(BaseModel):
    product_id: str


class CategoryIdResponse(BaseModel):
    category_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ProductResponse(BaseModel):
    id: str
    name: str
    price: float
    category: str | None = None
    in_stock: bool
    image: str | None = None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            price=product.price,
            category=product.category,
            in_stock=bool(product.in_stock),
            image=product.image,
            description=product.description,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str | None = None

    @classmethod
    def from_category(cls, category) -> CategoryResponse:
        return cls(id=str(category.id), name=category.name, description=category.description)


class InquiryLinkResponse(BaseModel):
    url: str
