# gst_compliance/api/v1/envelope.py
"""
Response envelope shared by every v1 endpoint and by the error handlers
installed in ``gst_compliance.main``:

    {"status": "ok" | "error", "data": ..., "message": ..., "errors": [...]}

List endpoints that can grow without bound (invoices, purchases) put a
``Page`` in ``data``.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Sequence, TypeVar

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    status: str = "ok"
    data: T | None = None
    message: str | None = None
    errors: list[dict[str, Any]] | None = None


class Page(BaseModel):
    items: list[dict[str, Any]]
    total: int
    limit: int
    offset: int
    has_more: bool


class PaginationParams(BaseModel):
    """Query parameters for paginated endpoints (use as Depends)."""

    limit: int = Field(default=50, ge=1, le=200, description="Items per page")
    offset: int = Field(default=0, ge=0, description="Number of items to skip")


def ok(data: Any = None, message: str | None = None) -> dict:
    return ApiResponse(status="ok", data=data, message=message).model_dump()


def paginate(
    rows: Sequence[Any],
    total: int,
    page: PaginationParams,
    serialize: Callable[[Any], dict],
) -> dict:
    """Serialize one page of ``rows`` (already limited in SQL) into a success envelope."""
    body = Page(
        items=[serialize(row) for row in rows],
        total=total,
        limit=page.limit,
        offset=page.offset,
        has_more=(page.offset + len(rows)) < total,
    )
    return ApiResponse(status="ok", data=body).model_dump()


def error_response(status_code: int, message: str, errors: list[dict[str, Any]] | None = None) -> JSONResponse:
    """Error envelope as a ready response, for exception handlers."""
    body = ApiResponse(status="error", message=message, errors=errors).model_dump()
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))
