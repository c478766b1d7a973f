"""Theme editor endpoints for a store's owner (or an administrator).

Each mutation loads the persisted theme, applies one pure edit from
``storefront.theme.editor`` and writes the whole value back.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.dependencies import get_owned_store
from storefront.models.store import Store
from storefront.schemas.theme import (
    BlockCreate,
    BlockPropsUpdate,
    BlockReorder,
    StorefrontPageResponse,
    ThemeWrite,
    VibeApply,
    page_response,
)
from storefront.services.catalog import list_active_products
from storefront.theme import editor
from storefront.theme.config import ThemeConfig, dump_theme, load_theme
from storefront.theme.presets import apply_vibe
from storefront.theme.renderer import render_storefront

logger = logging.getLogger(__name__)

router = APIRouter()


async def _save(db: AsyncSession, store: Store, theme: ThemeConfig) -> ThemeConfig:
    store.theme_config = dump_theme(theme)
    await db.flush()
    logger.info("Theme updated for store %s (%d home blocks)", store.slug, len(theme.layout_home))
    return theme


@router.get("", response_model=ThemeConfig)
async def get_theme(
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
):
    """Current theme; the default theme when none has been saved."""
    _db, store = db_store
    return load_theme(store.theme_config)


@router.put("", response_model=ThemeConfig)
async def replace_theme(
    body: ThemeWrite,
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
):
    db, store = db_store
    return await _save(db, store, editor.validate_theme(body.to_theme()))


@router.patch("/tokens", response_model=ThemeConfig)
async def update_tokens(
    body: dict[str, str | None],
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
):
    """Merge a partial token map (``{"primary": "#000000"}``) into the theme."""
    db, store = db_store
    theme = editor.update_tokens(load_theme(store.theme_config), body)
    return await _save(db, store, theme)


@router.post("/blocks", response_model=ThemeConfig, status_code=201)
async def add_block(
    body: BlockCreate,
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
):
    db, store = db_store
    theme = editor.add_block(
        load_theme(store.theme_config),
        body.type,
        body.props,
        block_id=body.id,
        position=body.position,
    )
    return await _save(db, store, theme)


@router.patch("/blocks/{block_id}", response_model=ThemeConfig)
async def update_block(
    block_id: str,
    body: BlockPropsUpdate,
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
):
    db, store = db_store
    theme = editor.update_block_props(load_theme(store.theme_config), block_id, body.props)
    return await _save(db, store, theme)


@router.delete("/blocks/{block_id}", response_model=ThemeConfig)
async def remove_block(
    block_id: str,
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
):
    db, store = db_store
    theme = editor.remove_block(load_theme(store.theme_config), block_id)
    return await _save(db, store, theme)


@router.post("/blocks/reorder", response_model=ThemeConfig)
async def reorder_blocks(
    body: BlockReorder,
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
):
    db, store = db_store
    theme = editor.reorder_blocks(load_theme(store.theme_config), body.from_index, body.to_index)
    return await _save(db, store, theme)


@router.post("/reset", response_model=ThemeConfig)
async def reset_theme(
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
):
    db, store = db_store
    return await _save(db, store, editor.reset_theme())


@router.post("/vibe", response_model=ThemeConfig)
async def apply_vibe_preset(
    body: VibeApply,
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
):
    db, store = db_store
    theme = apply_vibe(load_theme(store.theme_config), body.preset_id)
    return await _save(db, store, theme)


@router.post("/preview", response_model=StorefrontPageResponse)
async def preview_theme(
    body: ThemeWrite,
    db_store: tuple[AsyncSession, Store] = Depends(get_owned_store),
):
    """Render an unsaved theme against the store's live products. Nothing is persisted."""
    db, store = db_store
    products = await list_active_products(db, store)
    page = render_storefront(store, products, theme=editor.validate_theme(body.to_theme()))
    return page_response(store, page, is_subdomain=False)
