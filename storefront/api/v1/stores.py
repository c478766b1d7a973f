"""Store provisioning and settings endpoints (owner-facing)."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.dependencies import get_current_user, get_db, get_owned_store
from storefront.models.store import Store
from storefront.models.user import User
from storefront.schemas.store import StoreCreate, StoreResponse, StoreUpdate
from storefront.theme.config import default_theme, dump_theme
from storefront.theme.presets import apply_vibe

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=StoreResponse, status_code=201)
async def create_store(
    body: StoreCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a store owned by the caller, seeded with the default theme.

    The slug arrives normalized (lower-case, URL-safe) from StoreCreate, so
    storefront lookups can stay a plain equality match.
    """
    theme = default_theme()
    if body.vibe:
        theme = apply_vibe(theme, body.vibe)

    store = Store(
        owner_id=user.id,
        name=body.name,
        slug=body.slug,
        description=body.description,
        logo_url=body.logo_url,
        banner_url=body.banner_url,
        currency=body.currency,
        theme_config=dump_theme(theme),
    )
    db.add(store)

    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Slug already taken") from exc

    await db.refresh(store)
    logger.info("Created store %s for user %s", store.slug, user.id)
    return store


@router.get("", response_model=list[StoreResponse])
async def list_my_stores(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's stores, active or not."""
    result = await db.execute(
        select(Store).where(Store.owner_id == user.id).order_by(Store.created_at, Store.slug)
    )
    return list(result.scalars().all())


@router.get("/{slug}", response_model=StoreResponse)
async def get_store(
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
):
    _db, store = db_store
    return store


@router.patch("/{slug}", response_model=StoreResponse)
async def update_store(
    body: StoreUpdate,
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
):
    """Partial update. ``is_active=false`` takes the storefront offline without deleting it."""
    db, store = db_store

    for key, value in body.model_dump(exclude_unset=True).items():
        setattr(store, key, value)

    await db.flush()
    await db.refresh(store)
    return store
