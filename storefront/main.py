"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.api.v1.router import api_v1_router
from storefront.core.config import settings
from storefront.core.exceptions import (
    ProblemDetailError,
    http_exception_handler,
    problem_detail_handler,
    validation_exception_handler,
)
from storefront.core.logging import configure_logging
from storefront.core.middleware.cors import get_cors_config
from storefront.core.middleware.request_id import RequestIdMiddleware

configure_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)

app = FastAPI(
    title="Storefront Engine API",
    version="0.1.0",
    docs_url="/docs",
    openapi_url="/openapi.json",
)

# Middleware (last added = first executed)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(CORSMiddleware, **get_cors_config())

# Exception handlers (RFC 7807)
app.add_exception_handler(ProblemDetailError, problem_detail_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Routes
app.include_router(api_v1_router, prefix="/api/v1")
