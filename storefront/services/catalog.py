"""Product reads shared by the public storefront and the theme preview."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.product import Product
from storefront.models.store import Store

# Upper bound on products handed to one page render; blocks slice further.
RENDER_PRODUCT_LIMIT = 48


async def list_active_products(
    db: AsyncSession,
    store: Store,
    limit: int = RENDER_PRODUCT_LIMIT,
) -> list[Product]:
    """Active products of ``store`` in display order (sort_order, then newest)."""
    result = await db.execute(
        select(Product)
        .where(Product.store_id == store.id, Product.is_active.is_(True))
        .order_by(Product.sort_order, Product.created_at.desc(), Product.id)
        .limit(limit)
    )
    return list(result.scalars().all())
