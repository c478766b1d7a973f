"""Map a request's host or path slug to an active store.

Slugs are normalized once, when a store is created (``normalize_slug`` plus
``SLUG_PATTERN``). Lookups compare by plain equality, so ``MyStore`` never
finds ``mystore``.
"""

import logging
import re
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.exceptions import StoreNotFoundError
from storefront.models.store import Store

logger = logging.getLogger(__name__)

SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]{1,61}[a-z0-9]$")
RESERVED_SUBDOMAINS = frozenset({"www"})

_SEPARATORS_RE = re.compile(r"[\s_]+")
_INVALID_CHARS_RE = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUN_RE = re.compile(r"-{2,}")


@dataclass(frozen=True)
class StoreResolution:
    store: Store
    # True when served from <slug>.<APP_DOMAIN>; links then omit the /store/{slug} prefix.
    is_subdomain: bool


def normalize_slug(value: str) -> str:
    """Lower-case, URL-safe form of ``value``: ``" My Shop_2 "`` -> ``"my-shop-2"``."""
    slug = _SEPARATORS_RE.sub("-", value.strip().lower())
    slug = _INVALID_CHARS_RE.sub("", slug)
    slug = _HYPHEN_RUN_RE.sub("-", slug)
    return slug.strip("-")


def extract_subdomain(host: str | None, base_domain: str) -> str | None:
    """Return the store subdomain of ``host`` under ``base_domain``, if any.

    ``shop.aurastore.com`` -> ``shop``; ``shop.localhost:3000`` -> ``shop``;
    the bare domain, ``www`` and foreign hosts -> ``None``.
    """
    if not host:
        return None
    hostname = host.strip().lower().split(":", 1)[0]
    base = base_domain.strip().lower()

    if hostname.endswith(".localhost"):
        candidate = hostname[: -len(".localhost")]
    elif base and hostname.endswith(f".{base}"):
        candidate = hostname[: -len(base) - 1]
    else:
        return None

    if not candidate or candidate in RESERVED_SUBDOMAINS or "." in candidate:
        return None
    return candidate


async def resolve_store(db: AsyncSession, slug: str) -> Store:
    """Return the active store whose slug equals ``slug`` or raise StoreNotFoundError."""
    result = await db.execute(select(Store).where(Store.slug == slug, Store.is_active.is_(True)))
    store = result.scalar_one_or_none()
    if store is None:
        logger.info("No active store for slug %r", slug)
        raise StoreNotFoundError(slug)
    return store


async def resolve_storefront(
    db: AsyncSession,
    host: str | None,
    path_slug: str | None,
    base_domain: str,
) -> StoreResolution:
    """Resolve the store for a storefront request from its path slug or host subdomain."""
    subdomain = extract_subdomain(host, base_domain)
    slug = path_slug or subdomain
    if not slug:
        raise StoreNotFoundError(None)
    store = await resolve_store(db, slug)
    return StoreResolution(store=store, is_subdomain=subdomain is not None and subdomain == slug)
