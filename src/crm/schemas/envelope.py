"""
Response envelope and paging models.

Every HTTP response body, success or failure, is an `ApiResponse`:
`{"success", "message", "data", "errors"}`.
"""
from typing import Generic, TypeVar

from pydantic import Field

from .common import CamelModel

T = TypeVar("T")

DEFAULT_SUCCESS_MESSAGE = "Operation completed successfully"


class ApiResponse(CamelModel, Generic[T]):
    """Standard API response wrapper."""
    success: bool = True
    message: str = DEFAULT_SUCCESS_MESSAGE
    data: T | None = None
    errors: list[str] | None = None

    @classmethod
    def ok(cls, data: T | None = None, message: str = DEFAULT_SUCCESS_MESSAGE) -> "ApiResponse[T]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, errors: list[str] | None = None) -> "ApiResponse[T]":
        return cls(success=False, message=message, data=None, errors=errors)

    def to_body(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class PagedResult(CamelModel, Generic[T]):
    """One page of a list plus the numbers a client needs to page through it."""
    items: list[T] = Field(default_factory=list)
    page_number: int
    page_size: int
    total_count: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def create(cls, items: list[T], total_count: int, page_number: int, page_size: int) -> "PagedResult[T]":
        total_pages = (total_count + page_size - 1) // page_size if page_size > 0 else 0
        return cls(
            items=items,
            page_number=page_number,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_previous_page=page_number > 1,
            has_next_page=page_number < total_pages,
        )
