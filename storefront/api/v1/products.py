"""Authenticated CRUD endpoints for a store's products."""

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, tuple_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.dependencies import get_owned_store
from storefront.models.product import Product
from storefront.models.store import Store
from storefront.schemas.common import PaginatedResponse
from storefront.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from storefront.services.store_resolver import normalize_slug

router = APIRouter()

DEFAULT_PAGE_SIZE = 20


def _encode_cursor(product: Product) -> str:
    return f"{product.created_at.isoformat()}|{product.id}"


def _decode_cursor(cursor: str) -> tuple[datetime, uuid.UUID]:
    try:
        dt_str, id_str = cursor.split("|", 1)
        return datetime.fromisoformat(dt_str), uuid.UUID(id_str)
    except (ValueError, AttributeError) as exc:
        raise HTTPException(status_code=400, detail="Invalid cursor") from exc


async def _get_product(db: AsyncSession, store: Store, product_id: uuid.UUID) -> Product:
    result = await db.execute(
        select(Product).where(Product.id == product_id, Product.store_id == store.id)
    )
    product = result.scalar_one_or_none()
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("", response_model=PaginatedResponse[ProductResponse])
async def list_products(
    is_active: bool | None = Query(None),
    cursor: str | None = Query(None),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
) -> PaginatedResponse[ProductResponse]:
    db, store = db_store

    stmt = (
        select(Product)
        .where(Product.store_id == store.id)
        .order_by(Product.created_at.desc(), Product.id.desc())
    )

    if is_active is not None:
        stmt = stmt.where(Product.is_active == is_active)
    if cursor is not None:
        cursor_dt, cursor_id = _decode_cursor(cursor)
        stmt = stmt.where(tuple_(Product.created_at, Product.id) < tuple_(cursor_dt, cursor_id))

    stmt = stmt.limit(limit + 1)
    result = await db.execute(stmt)
    rows = list(result.scalars().all())

    has_more = len(rows) > limit
    items = rows[:limit]

    return PaginatedResponse(
        items=[ProductResponse.model_validate(p) for p in items],
        next_cursor=_encode_cursor(items[-1]) if has_more and items else None,
        has_more=has_more,
    )


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    body: ProductCreate,
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
) -> ProductResponse:
    db, store = db_store

    product = Product(
        store_id=store.id,
        name=body.name,
        slug=body.slug or normalize_slug(body.name) or uuid.uuid4().hex[:8],
        description=body.description,
        price=body.price,
        compare_at_price=body.compare_at_price,
        images=body.images,
        category=body.category,
        stock=body.stock,
        vto_enabled=body.vto_enabled,
        is_active=body.is_active,
        sort_order=body.sort_order,
    )
    db.add(product)

    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Product slug already used") from exc

    await db.refresh(product)
    return ProductResponse.model_validate(product)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: uuid.UUID,
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
) -> ProductResponse:
    db, store = db_store
    return ProductResponse.model_validate(await _get_product(db, store, product_id))


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: uuid.UUID,
    body: ProductUpdate,
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
) -> ProductResponse:
    db, store = db_store
    product = await _get_product(db, store, product_id)

    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(product, field, value)

    await db.flush()
    await db.refresh(product)
    return ProductResponse.model_validate(product)


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: uuid.UUID,
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
) -> None:
    db, store = db_store
    product = await _get_product(db, store, product_id)

    await db.delete(product)
    await db.flush()
