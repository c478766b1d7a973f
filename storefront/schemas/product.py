"""Product request/response schemas."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from storefront.services.store_resolver import normalize_slug


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=255)
    description: str | None = None
    price: Decimal = Field(..., ge=0, decimal_places=2)
    compare_at_price: Decimal | None = Field(None, ge=0, decimal_places=2)
    images: list[str] = Field(default_factory=list)
    category: str | None = Field(None, max_length=100)
    stock: int = Field(0, ge=0)
    vto_enabled: bool = False
    is_active: bool = True
    sort_order: int = 0

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str | None) -> str | None:
        if v is None:
            return None
        slug = normalize_slug(v)
        if not slug:
            raise ValueError("Slug must contain at least one letter or digit")
        return slug


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, decimal_places=2)
    compare_at_price: Decimal | None = Field(None, ge=0, decimal_places=2)
    images: list[str] | None = None
    category: str | None = Field(None, max_length=100)
    stock: int | None = Field(None, ge=0)
    vto_enabled: bool | None = None
    is_active: bool | None = None
    sort_order: int | None = None


class ProductResponse(BaseModel):
    id: uuid.UUID
    name: str
    slug: str
    description: str | None = None
    price: Decimal
    compare_at_price: Decimal | None = None
    images: list[str]
    category: str | None = None
    stock: int
    vto_enabled: bool
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class PublicProductResponse(BaseModel):
    id: uuid.UUID
    name: str
    slug: str
    description: str | None = None
    price: Decimal
    compare_at_price: Decimal | None = None
    price_display: str
    images: list[str]
    category: str | None = None
    in_stock: bool
    vto_enabled: bool
