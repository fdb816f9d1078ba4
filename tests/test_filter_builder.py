# =============================================================================
# tests/test_filter_builder.py - Filter Builder Tests
# =============================================================================
# Query parameters -> Query predicates. No store involved.
# =============================================================================

from datetime import datetime, timezone

import pytest

from app.exceptions import MissingSearchParamsError
from core.models.filters import FilterCondition, FilterOperator
from core.services.filter_builder import (
    build_post_advanced_query,
    build_post_search_query,
    build_product_advanced_query,
    build_product_list_query,
    parse_date,
)


def _cond(field, operator, value):
    return FilterCondition(field=field, operator=operator, value=value)


# =============================================================================
# Posts
# =============================================================================

class TestPostSearchQuery:
    """GET /posts?search=..."""

    def test_no_search_matches_everything(self):
        assert build_post_search_query().is_empty
        assert build_post_search_query("").is_empty

    def test_search_is_or_over_text_fields(self):
        query = build_post_search_query("mongo")

        assert query.conditions == []
        assert query.any_of == [
            _cond("title", FilterOperator.CONTAINS, "mongo"),
            _cond("content", FilterOperator.CONTAINS, "mongo"),
            _cond("author", FilterOperator.CONTAINS, "mongo"),
        ]


class TestPostAdvancedQuery:
    """GET /posts/search/advanced"""

    def test_requires_at_least_one_param(self):
        with pytest.raises(MissingSearchParamsError) as exc_info:
            build_post_advanced_query()

        assert exc_info.value.status_code == 400
        assert "title" in exc_info.value.details["accepted_params"]

    def test_empty_strings_count_as_missing(self):
        with pytest.raises(MissingSearchParamsError):
            build_post_advanced_query(title="", author="")

    def test_text_fields_are_and_combined(self):
        query = build_post_advanced_query(title="intro", author="budi")

        assert query.any_of == []
        assert query.conditions == [
            _cond("title", FilterOperator.CONTAINS, "intro"),
            _cond("author", FilterOperator.CONTAINS, "budi"),
        ]

    def test_date_range_is_inclusive_on_created_at(self):
        query = build_post_advanced_query(date_from="2024-01-01", date_to="2024-01-31")

        assert query.conditions == [
            _cond("created_at", FilterOperator.GTE, datetime(2024, 1, 1, tzinfo=timezone.utc)),
            _cond("created_at", FilterOperator.LTE, datetime(2024, 1, 31, tzinfo=timezone.utc)),
        ]

    def test_single_date_bound(self):
        query = build_post_advanced_query(date_to="2024-06-01")

        assert len(query.conditions) == 1
        assert query.conditions[0].operator == FilterOperator.LTE

    def test_invalid_date_is_not_ignored(self):
        with pytest.raises(ValueError):
            build_post_advanced_query(date_from="not-a-date")


class TestParseDate:

    def test_naive_dates_are_utc(self):
        assert parse_date("2024-03-05T10:30:00") == datetime(2024, 3, 5, 10, 30, tzinfo=timezone.utc)

    def test_offset_is_kept(self):
        parsed = parse_date("2024-03-05T10:30:00+07:00")
        assert parsed.utcoffset().total_seconds() == 7 * 3600

    @pytest.mark.parametrize("value", ["2024-01-15T00:00:00Z", "2024-01-15T00:00:00z"])
    def test_zulu_suffix(self, value):
        assert parse_date(value) == datetime(2024, 1, 15, tzinfo=timezone.utc)


# =============================================================================
# Products
# =============================================================================

class TestProductListQuery:
    """GET /api/produk"""

    def test_no_params_matches_everything(self):
        assert build_product_list_query().is_empty

    def test_search_over_name_and_description(self):
        query = build_product_list_query(search="pen")

        assert [c.field for c in query.any_of] == ["nama_produk", "deskripsi"]

    def test_all_filters_compose(self):
        query = build_product_list_query(
            search="pen", kategori="office", min_harga=10, max_harga=20
        )

        assert len(query.any_of) == 2
        assert query.conditions == [
            _cond("kategori", FilterOperator.CONTAINS, "office"),
            _cond("harga", FilterOperator.GTE, 10),
            _cond("harga", FilterOperator.LTE, 20),
        ]

    def test_price_bounds_are_independent(self):
        only_min = build_product_list_query(min_harga=10)
        only_max = build_product_list_query(max_harga=0)

        assert only_min.conditions == [_cond("harga", FilterOperator.GTE, 10)]
        assert only_max.conditions == [_cond("harga", FilterOperator.LTE, 0)]


class TestProductAdvancedQuery:
    """GET /api/produk/search/advanced"""

    def test_requires_at_least_one_param(self):
        with pytest.raises(MissingSearchParamsError):
            build_product_advanced_query()

    def test_field_mapping(self):
        query = build_product_advanced_query(nama="pen", kode="P", supplier="abc")

        assert query.conditions == [
            _cond("nama_produk", FilterOperator.CONTAINS, "pen"),
            _cond("kode_produk", FilterOperator.CONTAINS, "P"),
            _cond("supplier", FilterOperator.CONTAINS, "abc"),
        ]

    def test_empty_stock_flag(self):
        query = build_product_advanced_query(stok_kosong="true")

        assert query.conditions == [_cond("stok", FilterOperator.LTE, 0)]

    def test_empty_stock_flag_other_values_add_nothing(self):
        # Still a recognized parameter, so no MissingSearchParamsError
        query = build_product_advanced_query(stok_kosong="false")

        assert query.is_empty
