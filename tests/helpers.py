"""Shared helpers for API and DB tests."""

import uuid
from decimal import Decimal

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.product import Product
from storefront.models.store import Store
from storefront.models.user import User
from tests.conftest import auth_headers


async def create_store_get_headers(
    client: AsyncClient,
    *,
    slug_prefix: str = "shop",
    **fields,
) -> tuple[dict, str]:
    """Create a store via the API and return (auth_headers, slug).

    Uses a unique sub/email per call so each test gets its own owner.
    """
    unique = uuid.uuid4().hex[:8]
    sub = f"{slug_prefix}-sub-{unique}"
    email = f"{slug_prefix}-{unique}@example.com"
    slug = f"{slug_prefix}-{unique}"
    headers = auth_headers(sub=sub, email=email)

    resp = await client.post(
        "/api/v1/stores",
        json={"name": f"Test {slug}", "slug": slug, **fields},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return headers, resp.json()["slug"]


async def create_product(
    client: AsyncClient,
    headers: dict,
    store_slug: str,
    **fields,
) -> dict:
    body = {"name": f"Product {uuid.uuid4().hex[:6]}", "price": "5000", "stock": 5, **fields}
    resp = await client.post(f"/api/v1/stores/{store_slug}/products", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def seed_store(
    db: AsyncSession,
    *,
    slug: str,
    is_active: bool = True,
    theme_config: dict | None = None,
) -> Store:
    """Insert an owner and a store directly, bypassing the API."""
    unique = uuid.uuid4().hex[:8]
    owner = User(auth_sub=f"seed-{unique}", email=f"seed-{unique}@example.com", full_name="Seed")
    db.add(owner)
    await db.flush()

    store = Store(
        owner_id=owner.id,
        name=f"Store {slug}",
        slug=slug,
        currency="XOF",
        is_active=is_active,
        theme_config=theme_config,
    )
    db.add(store)
    await db.flush()
    return store


def make_store(slug: str = "demo", **fields) -> Store:
    """Transient Store for render tests (never persisted)."""
    values = {
        "id": uuid.uuid4(),
        "name": "Demo Store",
        "slug": slug,
        "description": None,
        "banner_url": None,
        "currency": "XOF",
        "theme_config": None,
        "is_active": True,
    }
    values.update(fields)
    return Store(**values)


def make_product(store: Store, slug: str, price: str = "5000", **fields) -> Product:
    """Transient Product for render tests (never persisted)."""
    values = {
        "id": uuid.uuid4(),
        "store_id": store.id,
        "name": slug.replace("-", " ").title(),
        "slug": slug,
        "description": None,
        "price": Decimal(price),
        "compare_at_price": None,
        "images": [],
        "category": None,
        "stock": 3,
        "is_active": True,
        "sort_order": 0,
    }
    values.update(fields)
    return Product(**values)
