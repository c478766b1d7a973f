"""FastAPI dependency chain: JWT → User → owned Store; slug/host → public Store."""

from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.config import settings
from storefront.core.security import decode_access_token
from storefront.db.session import async_session_factory
from storefront.models.store import Store
from storefront.models.user import User
from storefront.services.store_resolver import StoreResolution, resolve_storefront

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session. Commits on success, rolls back on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_current_user_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """Extract and verify the Bearer token, returning JWT claims."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    try:
        claims = await decode_access_token(credentials.credentials)
    except JWTError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {e}") from e

    return claims


async def get_current_user(
    claims: dict = Depends(get_current_user_claims),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the token's sub claim to a User row.

    Auto-provisions the user if they exist at the auth provider but not yet in our DB.
    """
    auth_sub = claims.get("sub")
    if not auth_sub:
        raise HTTPException(status_code=401, detail="Token missing sub claim")

    result = await db.execute(select(User).where(User.auth_sub == auth_sub))
    user = result.scalar_one_or_none()

    if user is None:
        email = claims.get("email", f"{auth_sub}@placeholder.local")
        full_name = claims.get("name", claims.get("email", "Unknown"))
        user = User(
            auth_sub=auth_sub,
            email=email,
            full_name=full_name,
        )
        db.add(user)
        await db.flush()

    if not user.is_active:
        raise HTTPException(status_code=403, detail="User account is deactivated")

    return user


async def get_owned_store(
    slug: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> tuple[AsyncSession, Store]:
    """Resolve a store the caller may edit: its owner, or any administrator.

    Inactive stores are included so an owner can reactivate them.
    """
    result = await db.execute(select(Store).where(Store.slug == slug))
    store = result.scalar_one_or_none()
    if store is None:
        raise HTTPException(status_code=404, detail="Store not found")
    if store.owner_id != user.id and not user.is_admin:
        raise HTTPException(status_code=403, detail="Not the owner of this store")
    return db, store


async def get_storefront(
    request: Request,
    slug: str | None = None,
    db: AsyncSession = Depends(get_db),
) -> tuple[AsyncSession, StoreResolution]:
    """Resolve the public store from the path slug, else the Host subdomain.

    Used by public /storefront endpoints (no auth required). Missing or
    inactive stores surface as 404 problem+json.
    """
    resolution = await resolve_storefront(
        db,
        host=request.headers.get("host"),
        path_slug=slug,
        base_domain=settings.APP_DOMAIN,
    )
    return db, resolution
