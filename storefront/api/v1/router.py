"""Aggregate all v1 sub-routers."""

from fastapi import APIRouter

from storefront.api.v1.health import router as health_router
from storefront.api.v1.products import router as products_router
from storefront.api.v1.public_storefront import router as public_storefront_router
from storefront.api.v1.stores import router as stores_router
from storefront.api.v1.theme import router as theme_router
from storefront.api.v1.themes import router as themes_router
from storefront.schemas.common import ProblemResponse

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["health"])
api_v1_router.include_router(stores_router, prefix="/stores", tags=["stores"])
api_v1_router.include_router(products_router, prefix="/stores/{slug}/products", tags=["products"])
api_v1_router.include_router(theme_router, prefix="/stores/{slug}/theme", tags=["theme-editor"])
api_v1_router.include_router(themes_router, prefix="/themes", tags=["themes"])
api_v1_router.include_router(
    public_storefront_router,
    prefix="/storefront",
    tags=["storefront"],
    responses={404: {"model": ProblemResponse}},
)
