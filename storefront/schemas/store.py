"""Store request/response schemas."""

import re
import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from storefront.services.store_resolver import SLUG_PATTERN, normalize_slug
from storefront.theme.presets import VIBE_PRESETS

CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


class StoreCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    slug: str = Field(..., min_length=3, max_length=63)
    description: str | None = None
    logo_url: str | None = None
    banner_url: str | None = None
    currency: str = Field("XOF", min_length=3, max_length=3)
    vibe: str | None = Field(None, description="Vibe preset applied to the default theme")

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        slug = normalize_slug(v)
        if not SLUG_PATTERN.match(slug):
            raise ValueError(
                "Slug must be 3-63 chars, lowercase alphanumeric with hyphens, "
                "cannot start or end with a hyphen"
            )
        return slug

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        if not CURRENCY_PATTERN.match(v):
            raise ValueError("Currency must be a 3-letter uppercase ISO 4217 code")
        return v

    @field_validator("vibe")
    @classmethod
    def validate_vibe(cls, v: str | None) -> str | None:
        if v is not None and v not in {p.id for p in VIBE_PRESETS}:
            raise ValueError(f"Unknown vibe preset '{v}'")
        return v


class StoreUpdate(BaseModel):
    """PATCH body. The slug is fixed at creation."""

    name: str | None = Field(None, min_length=2, max_length=255)
    description: str | None = None
    logo_url: str | None = None
    banner_url: str | None = None
    currency: str | None = Field(None, min_length=3, max_length=3)
    is_active: bool | None = None

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str | None) -> str | None:
        if v is not None and not CURRENCY_PATTERN.match(v):
            raise ValueError("Currency must be a 3-letter uppercase ISO 4217 code")
        return v


class StoreResponse(BaseModel):
    id: uuid.UUID
    name: str
    slug: str
    description: str | None = None
    logo_url: str | None = None
    banner_url: str | None = None
    currency: str
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class PublicStoreResponse(BaseModel):
    """Store fields safe to expose on the public storefront (no owner, no ids)."""

    name: str
    slug: str
    description: str | None = None
    logo_url: str | None = None
    banner_url: str | None = None
    currency: str

    model_config = {"from_attributes": True}
