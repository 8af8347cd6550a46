"""
Pagination Utilities.

Page-number pagination for list endpoints. Raw page parameters come
straight from the query string and are never trusted: normalization
always yields a usable page and page size instead of raising.
"""

import math
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from notevault.core.utils import parse_int
from notevault.schemas.base import PaginatedResponse, PaginationInfo, ResponseMetadata

DEFAULT_PAGE_SIZE = 20
MIN_PAGE_SIZE = 5
MAX_PAGE_SIZE = 100


# =============================================================================
# Normalization
# =============================================================================


def normalize_page(raw: Any) -> int:
    """Parse a page number; missing, non-numeric or non-positive values become 1."""
    page = parse_int(raw)
    if page is None or page < 1:
        return 1
    return page


def normalize_page_size(raw: Any) -> int:
    """Parse a page size; missing or non-numeric values use the default, then clamp."""
    size = parse_int(raw)
    if size is None:
        size = DEFAULT_PAGE_SIZE
    return min(max(size, MIN_PAGE_SIZE), MAX_PAGE_SIZE)


def page_count(total: int, page_size: int) -> int:
    """Number of pages for a total; an empty result still has one page."""
    return max(math.ceil(total / page_size), 1)


@dataclass(frozen=True)
class PageParams:
    """Normalized page position."""

    page: int
    page_size: int

    @classmethod
    def parse(cls, page: Any = None, page_size: Any = None) -> "PageParams":
        return cls(page=normalize_page(page), page_size=normalize_page_size(page_size))

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


# =============================================================================
# Paginated Response Builder
# =============================================================================


def create_paginated_response(
    items: list[Any],
    item_schema: type[BaseModel],
    total: int,
    page: int,
    page_size: int,
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Create a standardized paginated response.

    Usage:
        return create_paginated_response(
            items=result.items,
            item_schema=NoteListItem,
            total=result.total,
            page=result.page,
            page_size=result.page_size,
        )
    """
    validated_items = [
        item_schema.model_validate(item).model_dump(mode="json")
        for item in items
    ]

    pagination = PaginationInfo(
        total=total,
        page=page,
        page_size=page_size,
        page_count=page_count(total, page_size),
        has_more=page * page_size < total,
    )

    response = PaginatedResponse(
        data=validated_items,
        pagination=pagination,
        metadata=ResponseMetadata(request_id=request_id),
    )

    return response.model_dump(mode="json")
