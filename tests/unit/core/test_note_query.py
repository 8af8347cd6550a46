"""
Unit Tests for Note Query Specification.

Listing parameters arrive untrusted; building a query must never raise.
"""

import pytest

from notevault.schemas.note_query import (
    NoteQuerySpec,
    like_pattern,
    normalize_category_filter,
    normalize_flag,
    normalize_search,
)


class TestNormalizeSearch:
    """Tests for normalize_search."""

    @pytest.mark.parametrize("raw", [None, "", " ", "a", "  b  ", 42])
    def test_short_or_missing_search_is_dropped(self, raw):
        """Should ignore queries shorter than two characters after trimming."""
        assert normalize_search(raw) is None

    def test_search_is_trimmed(self):
        """Should trim surrounding whitespace."""
        assert normalize_search("  ab  ") == "ab"


class TestNormalizeCategoryFilter:
    """Tests for normalize_category_filter."""

    @pytest.mark.parametrize("raw", [None, "", "   ", "all", "ALL", " All ", 7])
    def test_all_or_empty_means_no_filter(self, raw):
        """Should not filter on 'all', blanks, or non-strings."""
        assert normalize_category_filter(raw) is None

    def test_identifier_is_kept(self):
        """Should keep a category id."""
        assert normalize_category_filter(" cat-1 ") == "cat-1"


class TestNormalizeFlag:
    """Tests for normalize_flag."""

    @pytest.mark.parametrize("raw", [True, "true", "TRUE", " 1 ", "1"])
    def test_truthy_values(self, raw):
        """Should accept True and the explicit truthy strings."""
        assert normalize_flag(raw) is True

    @pytest.mark.parametrize("raw", [None, False, "false", "yes", "0", "", 1, "on"])
    def test_everything_else_is_false(self, raw):
        """Should treat anything else as false."""
        assert normalize_flag(raw) is False


class TestLikePattern:
    """Tests for like_pattern."""

    def test_wraps_in_wildcards(self):
        """Should match the text as a substring."""
        assert like_pattern("plan") == "%plan%"

    def test_escapes_wildcards(self):
        """Should make % and _ match literally."""
        assert like_pattern("50%_off") == "%50\\%\\_off%"

    def test_escapes_escape_character(self):
        """Should double the escape character itself."""
        assert like_pattern("a\\b") == "%a\\\\b%"


class TestNoteQuerySpecBuild:
    """Tests for NoteQuerySpec.build."""

    def test_defaults(self):
        """Should exclude deleted and archived notes on the first page."""
        spec = NoteQuerySpec.build("user-a")

        assert spec.owner_id == "user-a"
        assert spec.page == 1
        assert spec.page_size == 20
        assert spec.limit == 20
        assert spec.offset == 0
        assert spec.search is None
        assert spec.search_pattern is None
        assert spec.category_id is None
        assert spec.include_archived is False
        assert spec.exclude_deleted is True

    def test_garbage_input_never_raises(self):
        """Should fall back to defaults for malformed parameters."""
        spec = NoteQuerySpec.build(
            "user-a",
            q=["x"],
            category_id={"id": 1},
            page="-3",
            page_size="lots",
            include_archived="maybe",
        )

        assert spec.page == 1
        assert spec.page_size == 20
        assert spec.search is None
        assert spec.category_id is None
        assert spec.include_archived is False

    def test_all_parameters_applied(self):
        """Should carry normalized values through."""
        spec = NoteQuerySpec.build(
            "user-a",
            q=" roadmap ",
            category_id="cat-1",
            page="2",
            page_size="500",
            include_archived="1",
        )

        assert spec.search == "roadmap"
        assert spec.search_pattern == "%roadmap%"
        assert spec.category_id == "cat-1"
        assert spec.page == 2
        assert spec.page_size == 100
        assert spec.offset == 100
        assert spec.include_archived is True
