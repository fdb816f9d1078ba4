# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas:
# - filters.py: Store-agnostic filter predicates (Query, FilterCondition)
# - pagination.py: Pagination metadata for list responses
# - product.py: Product document schema
#
# Posts have no model: they are free-form dicts.
# =============================================================================

from .filters import (
    ASCENDING,
    DESCENDING,
    FilterCondition,
    FilterOperator,
    Query,
    SortSpec,
)
from .pagination import Pagination, skip_for
from .product import DEFAULT_PRODUCT_STATUS, Product

__all__ = [
    # Filters
    "ASCENDING",
    "DESCENDING",
    "FilterCondition",
    "FilterOperator",
    "Query",
    "SortSpec",
    # Pagination
    "Pagination",
    "skip_for",
    # Product
    "DEFAULT_PRODUCT_STATUS",
    "Product",
]
