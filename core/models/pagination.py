# =============================================================================
# core/models/pagination.py - Pagination Metadata
# =============================================================================
# Returned alongside every list response:
#   {
#       "current_page": 2,
#       "total_pages": 5,
#       "total_data": 42,
#       "per_page": 10,
#       "has_next": true,
#       "has_prev": true
#   }
# =============================================================================

import math

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Page position and totals for a list response."""

    current_page: int = Field(..., ge=1, description="Current page number (1-indexed)")
    total_pages: int = Field(..., ge=0, description="ceil(total_data / per_page)")
    total_data: int = Field(..., ge=0, description="Documents matching the filter")
    per_page: int = Field(..., ge=1, description="Page size")
    has_next: bool
    has_prev: bool

    @classmethod
    def from_counts(cls, page: int, per_page: int, total: int) -> "Pagination":
        total_pages = math.ceil(total / per_page)
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_data=total,
            per_page=per_page,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


def skip_for(page: int, per_page: int) -> int:
    """Number of documents before the first one on `page`."""
    return (page - 1) * per_page
