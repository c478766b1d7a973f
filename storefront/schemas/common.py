"""Shared schema types: keyset pagination and problem+json bodies."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of a keyset-paginated listing; pass ``next_cursor`` back as ``cursor``."""

    items: list[T]
    next_cursor: str | None = None
    has_more: bool = False


class ProblemResponse(BaseModel):
    """RFC 7807 body produced by ``storefront.core.exceptions`` handlers (OpenAPI docs only)."""

    type: str
    title: str
    status: int
    detail: str | dict | list
    instance: str
