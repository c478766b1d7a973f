"""Health check endpoint."""

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from storefront.db.session import engine
from storefront.theme.blocks import block_registry

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    """Check DB connectivity and report how many block types are registered."""
    db_status = "ok"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        logger.warning("Health check: database unreachable", exc_info=True)
        db_status = "error"

    return {
        "status": "ok" if db_status == "ok" else "degraded",
        "db": db_status,
        "block_types": len(block_registry),
        "version": "0.1.0",
    }
