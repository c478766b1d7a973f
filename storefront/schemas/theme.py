"""Theme editor request bodies and storefront page responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.product import PublicProductResponse
from storefront.schemas.store import PublicStoreResponse
from storefront.theme.config import ThemeConfig, ThemeTokens
from storefront.theme.registry import Section
from storefront.theme.renderer import StorefrontPage


class BlockIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = ""
    type: str = Field(..., min_length=1)
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["BlockIn"] | None = None


class ThemeWrite(BaseModel):
    """Whole-theme body for replace and preview.

    Unlike ``ThemeConfig`` (which repairs stored data) this rejects malformed
    blocks and tokens, so nothing the owner sent is silently dropped.
    """

    model_config = ConfigDict(extra="allow")

    tokens: ThemeTokens = Field(default_factory=ThemeTokens)
    layout_home: list[BlockIn] | None = None
    layout_product: list[BlockIn] | None = None
    layout_collection: list[BlockIn] | None = None

    def to_theme(self) -> ThemeConfig:
        return ThemeConfig.model_validate(self.model_dump(mode="json", by_alias=True))


class BlockCreate(BaseModel):
    type: str = Field(..., min_length=1)
    id: str | None = Field(None, min_length=1, max_length=100)
    props: dict[str, Any] = Field(default_factory=dict)
    position: int | None = Field(None, ge=0, description="Insert index; appended when omitted")


class BlockPropsUpdate(BaseModel):
    props: dict[str, Any]


class BlockReorder(BaseModel):
    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)


class VibeApply(BaseModel):
    preset_id: str


class VibePresetResponse(BaseModel):
    id: str
    name: str
    description: str
    preview: str
    tokens: dict[str, str]


class StorefrontPageResponse(BaseModel):
    store: PublicStoreResponse
    is_subdomain: bool
    tokens: dict[str, Any]
    css_variables: dict[str, str]
    sections: list[Section]


class ProductPageResponse(StorefrontPageResponse):
    product: PublicProductResponse


def page_response(store, page: StorefrontPage, *, is_subdomain: bool) -> StorefrontPageResponse:
    return StorefrontPageResponse(
        store=PublicStoreResponse.model_validate(store),
        is_subdomain=is_subdomain,
        tokens=page.theme.tokens.model_dump(mode="json", by_alias=True),
        css_variables=page.css_variables,
        sections=page.sections,
    )
