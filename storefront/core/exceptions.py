"""RFC 7807 Problem Details error handling."""

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class ProblemDetailError(Exception):
    """Raise for RFC 7807 problem+json responses."""

    def __init__(
        self,
        status: int,
        title: str,
        detail: str | list | dict,
        error_type: str | None = None,
    ):
        super().__init__(detail)
        self.status = status
        self.title = title
        self.detail = detail
        self.error_type = error_type or "about:blank"


class StoreNotFoundError(ProblemDetailError):
    """No active store matches the requested slug or host."""

    def __init__(self, slug: str | None = None):
        detail = f"No storefront for '{slug}'" if slug else "No storefront for this host"
        super().__init__(404, "Storefront not found", detail)
        self.slug = slug


class ThemeValidationError(ProblemDetailError):
    """A theme submitted for storage failed write-time validation."""

    def __init__(self, errors: list[dict]):
        super().__init__(422, "Invalid theme", errors)
        self.errors = errors


class BlockNotFoundError(ProblemDetailError):
    def __init__(self, block_id: str):
        super().__init__(404, "Block not found", f"No block with id '{block_id}'")
        self.block_id = block_id


class UnknownPresetError(ProblemDetailError):
    def __init__(self, preset_id: str):
        super().__init__(404, "Preset not found", f"No vibe preset '{preset_id}'")
        self.preset_id = preset_id


async def problem_detail_handler(request: Request, exc: ProblemDetailError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status,
        content={
            "type": exc.error_type,
            "title": exc.title,
            "status": exc.status,
            "detail": jsonable_encoder(exc.detail),
            "instance": str(request.url.path),
        },
        media_type="application/problem+json",
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "type": "about:blank",
            "title": exc.detail if isinstance(exc.detail, str) else "Error",
            "status": exc.status_code,
            "detail": exc.detail,
            "instance": str(request.url.path),
        },
        media_type="application/problem+json",
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "type": "about:blank",
            "title": "Validation Error",
            "status": 422,
            "detail": jsonable_encoder(exc.errors()),
            "instance": str(request.url.path),
        },
        media_type="application/problem+json",
    )
