"""Layout renderer: walks a layout's blocks in order and emits sections."""

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from storefront.theme.blocks import block_registry
from storefront.theme.config import Block, ThemeConfig
from storefront.theme.provider import css_variables, current_theme, theme_scope
from storefront.theme.registry import BlockRegistry, RenderContext, Section

logger = logging.getLogger(__name__)


def render_layout(
    layout: Iterable[Block],
    context: RenderContext,
    registry: BlockRegistry = block_registry,
) -> Iterator[Section]:
    """Yield one section per renderable block, in layout order.

    Unknown block types are skipped with a warning. A renderer that raises
    costs only its own section. Must run inside ``theme_scope``.
    """
    current_theme()  # fail fast outside a render pass

    for block in layout:
        render = registry.resolve(block.type)
        if render is None:
            logger.warning(
                "Skipping block %r: unknown block type %r (store=%s)",
                block.id,
                block.type,
                context.store.slug,
            )
            continue
        try:
            section = render(block, context)
        except Exception:
            logger.exception(
                "Block %r (%s) failed to render (store=%s)",
                block.id,
                block.type,
                context.store.slug,
            )
            continue
        yield section


def render_page(
    layout: Iterable[Block],
    context: RenderContext,
    registry: BlockRegistry = block_registry,
) -> list[Section]:
    return list(render_layout(layout, context, registry))


@dataclass(frozen=True)
class StorefrontPage:
    theme: ThemeConfig
    css_variables: dict[str, str]
    sections: list[Section]


def render_storefront(
    store,
    products: Sequence,
    *,
    is_subdomain: bool = False,
    page: str = "home",
    theme: ThemeConfig | None = None,
    registry: BlockRegistry = block_registry,
) -> StorefrontPage:
    """Render one storefront page for ``store``.

    The theme is ``theme`` when given (editor preview), otherwise the store's
    persisted theme, otherwise the default theme.
    """
    context = RenderContext(store=store, products=tuple(products), is_subdomain=is_subdomain)
    with theme_scope(theme if theme is not None else store.theme_config) as active:
        sections = render_page(active.layout_for(page), context, registry)
        return StorefrontPage(
            theme=active,
            css_variables=css_variables(active.tokens),
            sections=sections,
        )
