"""Built-in storefront blocks and the default registry that holds them.

Each block type pairs a typed props model with a pure render function. Props
are coerced, so a malformed value only ever costs that field its default.
"""

from typing import Literal

from pydantic import Field

from storefront.services.currency import format_price
from storefront.theme.config import Block
from storefront.theme.provider import current_tokens
from storefront.theme.registry import BlockProps, BlockRegistry, RenderContext, Section

block_registry = BlockRegistry()

DEFAULT_STORE_TAGLINE = "A unique shopping experience powered by AuraStore."


def _section(block: Block, props: BlockProps, **data) -> Section:
    return Section(
        id=block.id,
        type=block.type,
        props=props.model_dump(mode="json", by_alias=True),
        data=data,
    )


class HeroProps(BlockProps):
    title: str = "Welcome to the Future"
    subtitle: str = "Discover our exclusive collection"
    cta_text: str = "Shop Now"
    cta_link: str = "/products"
    background_image: str | None = None


@block_registry.register("hero_v1", HeroProps)
def render_hero(block: Block, context: RenderContext) -> Section:
    props = HeroProps.coerce(block.props)
    return _section(block, props, cta_href=context.href(props.cta_link))


class ImageBannerProps(BlockProps):
    background_image: str | None = None


@block_registry.register("image_banner", ImageBannerProps)
def render_image_banner(block: Block, context: RenderContext) -> Section:
    props = ImageBannerProps.coerce(block.props)
    store = context.store
    return _section(
        block,
        props,
        image_url=store.banner_url or props.background_image,
        title=store.name,
        description=store.description or DEFAULT_STORE_TAGLINE,
    )


class ProductGridProps(BlockProps):
    title: str = "Featured Products"
    limit: int = Field(4, ge=1, le=48)
    columns: Literal[2, 3, 4] = 4
    show_price: bool = True


def _product_card(product, context: RenderContext, show_price: bool) -> dict:
    currency = context.store.currency
    images = product.images or []
    on_sale = product.compare_at_price is not None and product.compare_at_price > product.price
    card = {
        "id": str(product.id),
        "name": product.name,
        "slug": product.slug,
        "href": context.href(f"/products/{product.slug}"),
        "image_url": images[0] if images else None,
        "category": product.category,
        "on_sale": on_sale,
        "in_stock": (product.stock or 0) > 0,
    }
    if show_price:
        card["price"] = format_price(product.price, currency)
        card["compare_at_price"] = (
            format_price(product.compare_at_price, currency) if on_sale else None
        )
    return card


@block_registry.register("product_grid", ProductGridProps)
def render_product_grid(block: Block, context: RenderContext) -> Section:
    props = ProductGridProps.coerce(block.props)
    start, end = current_tokens().brand_gradient
    return _section(
        block,
        props,
        products=[
            _product_card(p, context, props.show_price) for p in context.products[: props.limit]
        ],
        view_all_href=context.href("/products"),
        accent_gradient=[start, end],
    )


class MarqueeProps(BlockProps):
    text: str = "FREE SHIPPING ON ORDERS OVER $100 • NEW ARRIVALS EVERY WEEK • "
    speed: float = Field(30, gt=0)
    direction: Literal["left", "right"] = "left"


@block_registry.register("marquee", MarqueeProps)
def render_marquee(block: Block, context: RenderContext) -> Section:
    props = MarqueeProps.coerce(block.props)
    tokens = current_tokens()
    return _section(
        block,
        props,
        background_color=tokens.primary,
        text_color=tokens.background,
    )


class TextBlockProps(BlockProps):
    title: str | None = None
    body: str = ""
    align: Literal["left", "center", "right"] = "center"


@block_registry.register("text_block", TextBlockProps)
def render_text_block(block: Block, context: RenderContext) -> Section:
    return _section(block, TextBlockProps.coerce(block.props))


class SpacerProps(BlockProps):
    height: int = Field(64, ge=0, le=400)


@block_registry.register("spacer", SpacerProps)
def render_spacer(block: Block, context: RenderContext) -> Section:
    return _section(block, SpacerProps.coerce(block.props))
