"""Public storefront API tests: resolution by slug or host, rendering, product pages."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from storefront.db.session import async_session_factory
from storefront.models.store import Store
from tests.helpers import create_product, create_store_get_headers

pytestmark = pytest.mark.api


async def test_storefront_page_by_slug(client: AsyncClient):
    headers, slug = await create_store_get_headers(client, slug_prefix="pub")
    await create_product(client, headers, slug, name="Red Dress", price="5000")

    resp = await client.get(f"/api/v1/storefront/{slug}")
    assert resp.status_code == 200
    data = resp.json()
    assert data["is_subdomain"] is False
    assert data["store"]["slug"] == slug
    assert "id" not in data["store"]
    assert "owner_id" not in data["store"]
    assert data["tokens"]["primary"] == "#FE7501"
    assert data["css_variables"]["--theme-font-display"] == "Sora"
    assert [s["type"] for s in data["sections"]] == ["hero_v1", "product_grid", "marquee"]

    hero, grid, _marquee = data["sections"]
    assert hero["data"]["cta_href"] == f"/store/{slug}/products"
    card = grid["data"]["products"][0]
    assert card["href"] == f"/store/{slug}/products/red-dress"
    assert card["price"] == "5 000 FCFA"


async def test_storefront_page_by_host_subdomain(client: AsyncClient):
    headers, slug = await create_store_get_headers(client, slug_prefix="host")
    await create_product(client, headers, slug, name="Red Dress")

    resp = await client.get("/api/v1/storefront", headers={"Host": f"{slug}.aurastore.com"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["is_subdomain"] is True
    assert data["store"]["slug"] == slug
    hero, grid, _marquee = data["sections"]
    assert hero["data"]["cta_href"] == "/products"
    assert grid["data"]["products"][0]["href"] == "/products/red-dress"


async def test_bare_domain_has_no_storefront(client: AsyncClient):
    resp = await client.get("/api/v1/storefront", headers={"Host": "aurastore.com"})
    assert resp.status_code == 404
    assert resp.json()["title"] == "Storefront not found"


async def test_unknown_slug_is_404(client: AsyncClient):
    resp = await client.get("/api/v1/storefront/no-such-shop")
    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("application/problem+json")
    assert resp.json()["status"] == 404


async def test_slug_lookup_is_exact(client: AsyncClient):
    _headers, slug = await create_store_get_headers(client, slug_prefix="exact")
    resp = await client.get(f"/api/v1/storefront/{slug.upper()}")
    assert resp.status_code == 404


async def test_public_theme_endpoint(client: AsyncClient):
    headers, slug = await create_store_get_headers(client, slug_prefix="theme")
    await client.patch(
        f"/api/v1/stores/{slug}/theme/tokens", json={"textMuted": "#AAAAAA"}, headers=headers
    )
    resp = await client.get(f"/api/v1/storefront/{slug}/theme")
    assert resp.status_code == 200
    assert resp.json()["tokens"]["textMuted"] == "#AAAAAA"


async def test_store_without_theme_renders_default(client: AsyncClient):
    _headers, slug = await create_store_get_headers(client, slug_prefix="bare")
    async with async_session_factory() as session:
        store = (await session.execute(select(Store).where(Store.slug == slug))).scalar_one()
        store.theme_config = None
        await session.commit()

    resp = await client.get(f"/api/v1/storefront/{slug}")
    assert resp.status_code == 200
    assert [s["id"] for s in resp.json()["sections"]] == ["hero-1", "products-1", "marquee-1"]


async def test_stored_unknown_block_is_skipped(client: AsyncClient):
    _headers, slug = await create_store_get_headers(client, slug_prefix="legacy")
    async with async_session_factory() as session:
        store = (await session.execute(select(Store).where(Store.slug == slug))).scalar_one()
        store.theme_config = {
            "layout_home": [
                {"id": "b1", "type": "hero_v1", "props": {"title": "Old"}},
                {"id": "b2", "type": "carousel_v9"},
                {"id": "b3", "type": "marquee"},
            ]
        }
        await session.commit()

    resp = await client.get(f"/api/v1/storefront/{slug}")
    assert resp.status_code == 200
    sections = resp.json()["sections"]
    assert [s["id"] for s in sections] == ["b1", "b3"]
    assert sections[0]["props"]["title"] == "Old"


async def test_public_products_paginate(client: AsyncClient):
    headers, slug = await create_store_get_headers(client, slug_prefix="page")
    for i in range(3):
        await create_product(client, headers, slug, name=f"Item {i}", sort_order=i)
    await create_product(client, headers, slug, name="Hidden", is_active=False)

    resp = await client.get(f"/api/v1/storefront/{slug}/products?limit=2")
    assert resp.status_code == 200
    page = resp.json()
    assert [p["name"] for p in page["items"]] == ["Item 0", "Item 1"]
    assert page["has_more"] is True

    resp = await client.get(
        f"/api/v1/storefront/{slug}/products", params={"limit": 2, "cursor": page["next_cursor"]}
    )
    page = resp.json()
    assert [p["name"] for p in page["items"]] == ["Item 2"]
    assert page["has_more"] is False
    assert page["next_cursor"] is None


async def test_public_products_category_filter(client: AsyncClient):
    headers, slug = await create_store_get_headers(client, slug_prefix="cat")
    await create_product(client, headers, slug, name="Scarf", category="accessories")
    await create_product(client, headers, slug, name="Coat", category="outerwear")

    resp = await client.get(f"/api/v1/storefront/{slug}/products?category=outerwear")
    assert [p["name"] for p in resp.json()["items"]] == ["Coat"]


async def test_public_products_bad_cursor(client: AsyncClient):
    _headers, slug = await create_store_get_headers(client, slug_prefix="cur")
    resp = await client.get(f"/api/v1/storefront/{slug}/products?cursor=garbage")
    assert resp.status_code == 400


async def test_product_page(client: AsyncClient):
    headers, slug = await create_store_get_headers(client, slug_prefix="pdp", currency="EUR")
    await create_product(
        client, headers, slug, name="Lamp", price="1234.50", compare_at_price="1500", stock=0
    )
    await create_product(client, headers, slug, name="Chair", price="80")

    resp = await client.get(f"/api/v1/storefront/{slug}/products/lamp")
    assert resp.status_code == 200
    data = resp.json()
    assert data["product"]["price_display"] == "1 234,50 €"
    assert data["product"]["in_stock"] is False
    # No product layout configured yet
    assert data["sections"] == []

    await client.put(
        f"/api/v1/stores/{slug}/theme",
        json={"layout_product": [{"id": "related", "type": "product_grid"}]},
        headers=headers,
    )
    resp = await client.get(f"/api/v1/storefront/{slug}/products/lamp")
    (grid,) = resp.json()["sections"]
    assert [c["slug"] for c in grid["data"]["products"]] == ["lamp", "chair"]


async def test_inactive_product_page_is_404(client: AsyncClient):
    headers, slug = await create_store_get_headers(client, slug_prefix="pdp")
    await create_product(client, headers, slug, name="Ghost", is_active=False)
    resp = await client.get(f"/api/v1/storefront/{slug}/products/ghost")
    assert resp.status_code == 404


async def test_theme_catalog(client: AsyncClient):
    resp = await client.get("/api/v1/themes/vibes")
    assert resp.status_code == 200
    assert "volcanic-luxe" in [v["id"] for v in resp.json()]

    resp = await client.get("/api/v1/themes/blocks")
    assert resp.status_code == 200
    blocks = {b["type"]: b["props_schema"] for b in resp.json()}
    assert "ctaText" in blocks["hero_v1"]["properties"]
    assert set(blocks) == {
        "hero_v1",
        "image_banner",
        "product_grid",
        "marquee",
        "text_block",
        "spacer",
    }
