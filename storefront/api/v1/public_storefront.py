"""Public read-only storefront endpoints (anonymous, store-scoped by slug or host).

Flow: slug (path) or subdomain (Host) -> active store -> products -> render.
Store and products are read in the same DB session; a missing or inactive
store is a 404, never a partial page. No owner or store ids are exposed.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, tuple_
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.dependencies import get_storefront
from storefront.models.product import Product
from storefront.models.store import Store
from storefront.schemas.common import PaginatedResponse
from storefront.schemas.product import PublicProductResponse
from storefront.schemas.theme import ProductPageResponse, StorefrontPageResponse, page_response
from storefront.services.catalog import list_active_products
from storefront.services.currency import format_price
from storefront.services.store_resolver import StoreResolution
from storefront.theme.config import ThemeConfig, load_theme
from storefront.theme.renderer import render_storefront

router = APIRouter()

DEFAULT_PAGE_SIZE = 20


def _public_product(product: Product, store: Store) -> PublicProductResponse:
    return PublicProductResponse(
        id=product.id,
        name=product.name,
        slug=product.slug,
        description=product.description,
        price=product.price,
        compare_at_price=product.compare_at_price,
        price_display=format_price(product.price, store.currency),
        images=product.images or [],
        category=product.category,
        in_stock=product.stock > 0,
        vto_enabled=product.vto_enabled,
    )


def _encode_cursor(sort_order: int, item_id: uuid.UUID) -> str:
    return f"{sort_order}:{item_id}"


def _decode_cursor(cursor: str) -> tuple[int, uuid.UUID]:
    try:
        sort_str, id_str = cursor.split(":", 1)
        return int(sort_str), uuid.UUID(id_str)
    except (ValueError, AttributeError) as exc:
        raise HTTPException(status_code=400, detail="Invalid cursor") from exc


async def _render_home(db: AsyncSession, resolution: StoreResolution) -> StorefrontPageResponse:
    store = resolution.store
    products = await list_active_products(db, store)
    page = render_storefront(store, products, is_subdomain=resolution.is_subdomain)
    return page_response(store, page, is_subdomain=resolution.is_subdomain)


@router.get("", response_model=StorefrontPageResponse)
async def get_storefront_for_host(
    db_resolution: tuple[AsyncSession, StoreResolution] = Depends(get_storefront),
) -> StorefrontPageResponse:
    """Home page of the store whose subdomain is the request's Host."""
    db, resolution = db_resolution
    return await _render_home(db, resolution)


@router.get("/{slug}", response_model=StorefrontPageResponse)
async def get_storefront_page(
    slug: str,
    db_resolution: tuple[AsyncSession, StoreResolution] = Depends(get_storefront),
) -> StorefrontPageResponse:
    """Rendered home page: theme tokens plus the ordered sections of ``layout_home``."""
    db, resolution = db_resolution
    return await _render_home(db, resolution)


@router.get("/{slug}/theme", response_model=ThemeConfig)
async def get_public_theme(
    slug: str,
    db_resolution: tuple[AsyncSession, StoreResolution] = Depends(get_storefront),
):
    """The store's theme, or the default theme when it has none."""
    _db, resolution = db_resolution
    return load_theme(resolution.store.theme_config)


@router.get("/{slug}/products", response_model=PaginatedResponse[PublicProductResponse])
async def list_public_products(
    slug: str,
    category: str | None = Query(None),
    cursor: str | None = Query(None),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    db_resolution: tuple[AsyncSession, StoreResolution] = Depends(get_storefront),
) -> PaginatedResponse[PublicProductResponse]:
    db, resolution = db_resolution
    store = resolution.store

    stmt = (
        select(Product)
        .where(Product.store_id == store.id, Product.is_active.is_(True))
        .order_by(Product.sort_order, Product.id)
    )

    if category is not None:
        stmt = stmt.where(Product.category == category)
    if cursor is not None:
        cursor_sort, cursor_id = _decode_cursor(cursor)
        stmt = stmt.where(tuple_(Product.sort_order, Product.id) > tuple_(cursor_sort, cursor_id))

    stmt = stmt.limit(limit + 1)
    result = await db.execute(stmt)
    rows = list(result.scalars().all())

    has_more = len(rows) > limit
    items = rows[:limit]

    return PaginatedResponse(
        items=[_public_product(p, store) for p in items],
        next_cursor=(
            _encode_cursor(items[-1].sort_order, items[-1].id) if has_more and items else None
        ),
        has_more=has_more,
    )


@router.get("/{slug}/products/{product_slug}", response_model=ProductPageResponse)
async def get_public_product(
    slug: str,
    product_slug: str,
    db_resolution: tuple[AsyncSession, StoreResolution] = Depends(get_storefront),
) -> ProductPageResponse:
    """Product detail plus the sections of the store's ``layout_product`` (empty if unset)."""
    db, resolution = db_resolution
    store = resolution.store

    result = await db.execute(
        select(Product).where(
            Product.store_id == store.id,
            Product.slug == product_slug,
            Product.is_active.is_(True),
        )
    )
    product = result.scalar_one_or_none()
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")

    related = [p for p in await list_active_products(db, store) if p.id != product.id]
    page = render_storefront(
        store,
        [product, *related],
        is_subdomain=resolution.is_subdomain,
        page="product",
    )
    base = page_response(store, page, is_subdomain=resolution.is_subdomain)
    return ProductPageResponse(**base.model_dump(), product=_public_product(product, store))
