# =============================================================================
# core/services/filter_builder.py - Query Parameter -> Filter Predicate
# =============================================================================
# Turns optional query-string values into Query objects. All builders are
# pure: they never touch the store.
#
# Semantics:
# - Empty strings count as "not provided"
# - Text parameters are case-insensitive substring matches
# - Different parameters are AND-ed; free-text search is one OR group
# - Advanced searches require at least one parameter
# =============================================================================

from datetime import datetime, timezone

from app.exceptions import MissingSearchParamsError
from core.models.filters import FilterCondition, FilterOperator, Query


POST_SEARCH_FIELDS = ("title", "content", "author")
PRODUCT_SEARCH_FIELDS = ("nama_produk", "deskripsi")

POST_ADVANCED_PARAMS = ["title", "author", "content", "date_from", "date_to"]
PRODUCT_ADVANCED_PARAMS = [
    "nama", "kode", "kategori", "min_harga", "max_harga", "supplier", "stok_kosong",
]


def _provided(value) -> bool:
    return value is not None and value != ""


def _search_group(search: str | None, fields: tuple[str, ...]) -> list[FilterCondition]:
    if not _provided(search):
        return []
    return [
        FilterCondition(field=field, operator=FilterOperator.CONTAINS, value=search)
        for field in fields
    ]


def _add_contains(query: Query, field: str, value: str | None) -> None:
    if _provided(value):
        query.where(field, FilterOperator.CONTAINS, value)


def _add_range(
    query: Query,
    field: str,
    lower: float | datetime | None,
    upper: float | datetime | None,
) -> None:
    if lower is not None:
        query.where(field, FilterOperator.GTE, lower)
    if upper is not None:
        query.where(field, FilterOperator.LTE, upper)


def parse_date(value: str) -> datetime:
    """
    Parse an ISO-8601 date or datetime; naive values are taken as UTC.

    Raises:
        ValueError: If the string is not a valid date
    """
    if value.endswith(("Z", "z")):
        # fromisoformat only accepts a "Z" suffix from Python 3.11
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# =============================================================================
# Posts
# =============================================================================

def build_post_search_query(search: str | None = None) -> Query:
    """GET /posts?search=... matches title, content or author."""
    return Query(any_of=_search_group(search, POST_SEARCH_FIELDS))


def build_post_advanced_query(
    title: str | None = None,
    author: str | None = None,
    content: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
) -> Query:
    """
    Build the filter for GET /posts/search/advanced.

    Raises:
        MissingSearchParamsError: If no parameter is provided
        ValueError: If date_from/date_to is not a valid date
    """
    if not any(_provided(v) for v in (title, author, content, date_from, date_to)):
        raise MissingSearchParamsError(POST_ADVANCED_PARAMS)

    query = Query()
    _add_contains(query, "title", title)
    _add_contains(query, "author", author)
    _add_contains(query, "content", content)
    _add_range(
        query,
        "created_at",
        parse_date(date_from) if _provided(date_from) else None,
        parse_date(date_to) if _provided(date_to) else None,
    )
    return query


# =============================================================================
# Products
# =============================================================================

def build_product_list_query(
    search: str | None = None,
    kategori: str | None = None,
    min_harga: float | None = None,
    max_harga: float | None = None,
) -> Query:
    """GET /api/produk filters: free text, category and price range."""
    query = Query(any_of=_search_group(search, PRODUCT_SEARCH_FIELDS))
    _add_contains(query, "kategori", kategori)
    _add_range(query, "harga", min_harga, max_harga)
    return query


def build_product_advanced_query(
    nama: str | None = None,
    kode: str | None = None,
    kategori: str | None = None,
    min_harga: float | None = None,
    max_harga: float | None = None,
    supplier: str | None = None,
    stok_kosong: str | None = None,
) -> Query:
    """
    Build the filter for GET /api/produk/search/advanced.

    stok_kosong counts as a parameter whenever it is set, but only the
    value "true" restricts results to products with stok <= 0.

    Raises:
        MissingSearchParamsError: If no parameter is provided
    """
    params = (nama, kode, kategori, min_harga, max_harga, supplier, stok_kosong)
    if not any(_provided(v) for v in params):
        raise MissingSearchParamsError(PRODUCT_ADVANCED_PARAMS)

    query = Query()
    _add_contains(query, "nama_produk", nama)
    _add_contains(query, "kode_produk", kode)
    _add_contains(query, "kategori", kategori)
    _add_contains(query, "supplier", supplier)
    _add_range(query, "harga", min_harga, max_harga)
    if stok_kosong == "true":
        query.where("stok", FilterOperator.LTE, 0)
    return query
