"""
Note Listing Queries.

Turns raw listing parameters into a bounded, validated query.
Parsing never raises: malformed input falls back to
defaults. The owner id is always supplied by the caller from the
authenticated identity, never from request parameters.
"""

from dataclasses import dataclass
from typing import Any

from notevault.core.pagination import PageParams

MIN_SEARCH_LENGTH = 2
ALL_CATEGORIES = "all"
TRUTHY_FLAGS = frozenset({"true", "1"})

LIKE_ESCAPE = "\\"


def normalize_search(raw: Any) -> str | None:
    """Trimmed search text, or None when too short to search on."""
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if len(text) < MIN_SEARCH_LENGTH:
        return None
    return text


def normalize_category_filter(raw: Any) -> str | None:
    """Category id to filter on, or None for "all" / absent."""
    if not isinstance(raw, str):
        return None
    value = raw.strip()
    if not value or value.lower() == ALL_CATEGORIES:
        return None
    return value


def normalize_flag(raw: Any) -> bool:
    """True only for True or an explicit truthy string."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw.strip().lower() in TRUTHY_FLAGS
    return False


def like_pattern(text: str) -> str:
    """Substring LIKE pattern with wildcard characters escaped."""
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


@dataclass(frozen=True)
class NoteQuerySpec:
    """
    A normalized note listing query.

    Soft-deleted notes are always excluded. Results are ordered pinned
    first, then most recently updated.
    """

    owner_id: str
    page: int
    page_size: int
    search: str | None = None
    category_id: str | None = None
    include_archived: bool = False
    exclude_deleted: bool = True

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def search_pattern(self) -> str | None:
        if self.search is None:
            return None
        return like_pattern(self.search)

    @classmethod
    def build(
        cls,
        owner_id: str,
        q: Any = None,
        category_id: Any = None,
        page: Any = None,
        page_size: Any = None,
        include_archived: Any = None,
    ) -> "NoteQuerySpec":
        """Build a query from untrusted listing parameters."""
        params = PageParams.parse(page, page_size)
        return cls(
            owner_id=owner_id,
            page=params.page,
            page_size=params.page_size,
            search=normalize_search(q),
            category_id=normalize_category_filter(category_id),
            include_archived=normalize_flag(include_archived),
        )
