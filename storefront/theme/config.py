"""Theme configuration: design tokens plus ordered block layouts.

A ``ThemeConfig`` is a value embedded in a store row (``stores.theme_config``).
Models are frozen, so editing always yields a new value and two stores never
share a mutable theme.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class LenientModel(BaseModel):
    """Frozen camelCase model whose ``coerce`` defaults invalid fields one by one."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @classmethod
    def coerce(cls, raw: Any) -> Self:
        """Parse ``raw`` leniently: every invalid field falls back to its default."""
        if not isinstance(raw, Mapping):
            return cls()
        data = dict(raw)
        while True:
            try:
                return cls.model_validate(data)
            except ValidationError as exc:
                bad = {err["loc"][0] for err in exc.errors() if err["loc"]}
                keys: set[str] = set()
                for name, info in cls.model_fields.items():
                    if name in bad or info.alias in bad:
                        keys.update({name, info.alias or name})
                removable = keys & data.keys()
                if not removable:
                    return cls()
                for key in removable:
                    del data[key]


class ThemeTokens(LenientModel):
    """Design tokens. Stored with camelCase keys (``textMuted``, ``fontDisplay``)."""

    # Colors
    primary: str = "#FE7501"
    secondary: str = "#B4160B"
    accent: str = "#FFE946"
    background: str = "#08080A"
    surface: str = "#121216"
    text: str = "#FFFFFF"
    text_muted: str = "rgba(255,255,255,0.5)"
    gradient_start: str | None = None
    gradient_end: str | None = None

    # Typography
    font_display: str = "Sora"
    font_body: str = "DM Sans"

    # Spacing & borders
    radius: str = "12px"
    radius_lg: str = "24px"
    radius_full: str = "9999px"

    @property
    def brand_gradient(self) -> tuple[str, str]:
        return (self.gradient_start or self.primary, self.gradient_end or self.secondary)


def _object_entries(entries: list, where: str) -> list:
    kept = [entry for entry in entries if isinstance(entry, (Mapping, Block))]
    if len(kept) != len(entries):
        logger.warning("Dropped %d non-object entries from %s", len(entries) - len(kept), where)
    return kept


class Block(BaseModel):
    """One typed unit of page content. ``props`` shape depends on ``type``."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    type: str = ""
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["Block"] | None = None

    @field_validator("id", "type", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @field_validator("props", mode="before")
    @classmethod
    def coerce_props(cls, v: Any) -> dict:
        # A non-mapping props payload degrades to "all defaults" for the block.
        if isinstance(v, Mapping):
            return dict(v)
        return {}

    @field_validator("children", mode="before")
    @classmethod
    def coerce_children(cls, v: Any) -> list | None:
        if not isinstance(v, list):
            return None
        return _object_entries(v, "block children")


Layout = list[Block]


class ThemeConfig(BaseModel):
    """Tokens plus one layout per page kind. Unknown top-level keys are kept."""

    model_config = ConfigDict(frozen=True, extra="allow")

    tokens: ThemeTokens = Field(default_factory=ThemeTokens)
    layout_home: Layout = Field(default_factory=list)
    layout_product: Layout | None = None
    layout_collection: Layout | None = None

    @field_validator("tokens", mode="before")
    @classmethod
    def coerce_tokens(cls, v: Any) -> ThemeTokens:
        # A bad token costs only that token; the layouts are kept.
        if isinstance(v, ThemeTokens):
            return v
        if v is not None and not isinstance(v, Mapping):
            logger.warning("Theme tokens are a %s, not a mapping; using defaults", type(v).__name__)
        return ThemeTokens.coerce(v)

    @field_validator("layout_home", mode="before")
    @classmethod
    def default_home_layout(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("layout_home", "layout_product", "layout_collection", mode="before")
    @classmethod
    def drop_malformed_blocks(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return v
        return _object_entries(v, "layout")

    def layout_for(self, page: str) -> Layout:
        """Return the layout for ``home``, ``product`` or ``collection`` (empty if unset)."""
        layout = getattr(self, f"layout_{page}", None) if page in PAGE_KINDS else None
        return list(layout or [])


PAGE_KINDS = ("home", "product", "collection")

DEFAULT_THEME = ThemeConfig(
    tokens=ThemeTokens(),
    layout_home=[
        Block(
            id="hero-1",
            type="hero_v1",
            props={
                "title": "Welcome to the Future",
                "subtitle": "Discover our exclusive collection",
                "ctaText": "Shop Now",
                "ctaLink": "/products",
                "backgroundImage": None,
            },
        ),
        Block(
            id="products-1",
            type="product_grid",
            props={"title": "Featured Products", "limit": 4, "columns": 4},
        ),
        Block(
            id="marquee-1",
            type="marquee",
            props={
                "text": "FREE SHIPPING ON ORDERS OVER $100 • NEW ARRIVALS EVERY WEEK • ",
                "speed": 30,
            },
        ),
    ],
)


def default_theme() -> ThemeConfig:
    """A fresh deep copy of ``DEFAULT_THEME``."""
    return DEFAULT_THEME.model_copy(deep=True)


def load_theme(raw: ThemeConfig | Mapping | None) -> ThemeConfig:
    """Build a ThemeConfig from a persisted value, falling back to the default.

    ``None`` (store never themed) and unparseable payloads both yield the
    default theme; the latter is logged since it indicates corrupt data.
    """
    if raw is None:
        return default_theme()
    if isinstance(raw, ThemeConfig):
        return raw.model_copy(deep=True)
    if not isinstance(raw, Mapping):
        logger.warning("Theme config is a %s, not a mapping; using default", type(raw).__name__)
        return default_theme()
    try:
        return ThemeConfig.model_validate(copy.deepcopy(dict(raw)))
    except ValidationError as exc:
        logger.warning("Unreadable theme config, using default: %s", exc.errors())
        return default_theme()


def dump_theme(theme: ThemeConfig) -> dict:
    """JSON-compatible representation for the ``stores.theme_config`` column."""
    return theme.model_dump(mode="json", by_alias=True)
