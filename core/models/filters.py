# =============================================================================
# core/models/filters.py - Store-Agnostic Filter Predicates
# =============================================================================
# Query parameters are translated into these value types by the filter
# builder. Document stores translate them into their own query syntax, so
# the HTTP and service layers never build store-specific filters.
#
# Example:
#   Query(
#       conditions=[FilterCondition(field="harga", operator="gte", value=10)],
#       any_of=[
#           FilterCondition(field="nama_produk", operator="contains", value="pen"),
#           FilterCondition(field="deskripsi", operator="contains", value="pen"),
#       ],
#   )
#   -> harga >= 10 AND (nama_produk ~ "pen" OR deskripsi ~ "pen")
# =============================================================================

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


ASCENDING = 1
DESCENDING = -1

SortSpec = list[tuple[str, int]]


class FilterOperator(str, Enum):
    """Operators a document store must support."""

    CONTAINS = "contains"   # Case-insensitive substring
    EQ = "eq"
    NE = "ne"
    GTE = "gte"
    LTE = "lte"


class FilterCondition(BaseModel):
    """
    A single predicate on one document field.

    Examples:
        {"field": "kategori", "operator": "contains", "value": "office"}
        {"field": "stok", "operator": "lte", "value": 0}
    """

    field: str = Field(..., min_length=1, description="Document field name")
    operator: FilterOperator = Field(..., description="Comparison operator")
    value: Any = Field(default=None, description="Value to compare against")


class Query(BaseModel):
    """
    A filter predicate for a collection.

    `conditions` are combined with AND. `any_of` is a single OR group which
    is AND-ed with the conditions when non-empty. An empty Query matches
    every document.
    """

    conditions: list[FilterCondition] = Field(default_factory=list)
    any_of: list[FilterCondition] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.conditions and not self.any_of

    def where(self, field: str, operator: FilterOperator, value: Any) -> "Query":
        """Append an AND condition and return self for chaining."""
        self.conditions.append(
            FilterCondition(field=field, operator=operator, value=value)
        )
        return self

    def describe(self) -> dict[str, Any]:
        """JSON-friendly summary used in `filters_applied` responses."""
        return self.model_dump(mode="json", exclude_defaults=True)
