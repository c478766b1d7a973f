"""Block registry: block type identifier -> props model + render function.

Registration happens at import time (see ``storefront.theme.blocks``); the
request path only ever calls ``resolve``.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from storefront.theme.config import Block, LenientModel

if TYPE_CHECKING:
    from storefront.models.product import Product
    from storefront.models.store import Store


class BlockProps(LenientModel):
    """Base for the typed props payload of one block type (camelCase on the wire)."""


class Section(BaseModel):
    """One rendered page section handed to the page-composition layer."""

    id: str
    type: str
    props: dict[str, Any] = Field(default_factory=dict)
    data: dict[str, Any] = Field(default_factory=dict)


@dataclass(frozen=True)
class RenderContext:
    """Everything a block renderer may read besides its own props."""

    store: "Store"
    products: Sequence["Product"] = field(default_factory=tuple)
    is_subdomain: bool = False

    def href(self, path: str) -> str:
        """Store-relative link: bare on a native subdomain, ``/store/{slug}`` prefixed otherwise."""
        if not path.startswith("/") or path.startswith("//"):
            return path
        if self.is_subdomain:
            return path
        return f"/store/{self.store.slug}{path}"


Renderer = Callable[[Block, RenderContext], Section]


@dataclass(frozen=True)
class BlockSpec:
    type: str
    props_model: type[BlockProps]
    render: Renderer


class BlockRegistry:
    def __init__(self) -> None:
        self._specs: dict[str, BlockSpec] = {}

    def register(
        self, block_type: str, props_model: type[BlockProps]
    ) -> Callable[[Renderer], Renderer]:
        """Decorator registering ``fn`` as the renderer for ``block_type``."""

        def decorator(fn: Renderer) -> Renderer:
            if block_type in self._specs:
                raise ValueError(f"Block type '{block_type}' is already registered")
            self._specs[block_type] = BlockSpec(block_type, props_model, fn)
            return fn

        return decorator

    def resolve(self, block_type: str) -> Renderer | None:
        spec = self._specs.get(block_type)
        return spec.render if spec else None

    def spec(self, block_type: str) -> BlockSpec | None:
        return self._specs.get(block_type)

    def types(self) -> list[str]:
        return list(self._specs)

    def __contains__(self, block_type: object) -> bool:
        return block_type in self._specs

    def __len__(self) -> int:
        return len(self._specs)
