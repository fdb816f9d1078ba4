# =============================================================================
# app/routers/health.py - Health Check Endpoint
# =============================================================================
# Reports database connectivity and document counts for both collections.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.dependencies import OptionalStoreDep
from lib.document_store import POSTS_COLLECTION, PRODUCTS_COLLECTION, StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


ENDPOINTS = {
    "posts_crud": [
        "GET /posts - List posts (search & pagination)",
        "GET /posts/:id - Get a post by ID",
        "GET /posts/search/advanced - Advanced post search",
        "POST /posts - Create a post",
        "PUT /posts/:id - Update a post",
        "DELETE /posts/:id - Delete a post",
    ],
    "produk_crud": [
        "GET /api/produk - List products (search & filters)",
        "GET /api/produk/:id - Get a product by ID",
        "GET /api/produk/search/advanced - Advanced product search",
        "POST /api/produk - Create a product",
        "PUT /api/produk/:id - Update a product",
        "DELETE /api/produk/:id - Delete a product",
    ],
    "system": [
        "GET /health - Health check & statistics",
    ],
}


# =============================================================================
# Response Models
# =============================================================================

class Statistics(BaseModel):
    """Document counts per collection."""
    total_posts: int
    total_produk: int


class HealthResponse(BaseModel):
    """Healthy service response."""
    success: bool = True
    message: str
    status: str
    timestamp: str
    database: str
    statistics: Statistics
    endpoints: dict[str, list[str]]


class HealthErrorResponse(BaseModel):
    """Returned with status 500 when the database cannot be queried."""
    success: bool = False
    message: str
    status: str
    timestamp: str
    database: str
    error: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"model": HealthErrorResponse}},
)
def health_check(store: OptionalStoreDep):
    """
    Health check endpoint.

    Counts documents in both collections; any database failure is
    reported as a 500 instead of raising.
    """
    timestamp = datetime.now(timezone.utc).isoformat()

    try:
        if store is None:
            raise StoreError("Database not connected", code="NOT_CONNECTED")
        statistics = Statistics(
            total_posts=store.count(POSTS_COLLECTION),
            total_produk=store.count(PRODUCTS_COLLECTION),
        )
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        error = HealthErrorResponse(
            message="Database check failed",
            status="ERROR",
            timestamp=timestamp,
            database="Error",
            error=str(e),
        )
        return JSONResponse(status_code=500, content=error.model_dump())

    return HealthResponse(
        message="Service is healthy",
        status="OK",
        timestamp=timestamp,
        database="Connected",
        statistics=statistics,
        endpoints=ENDPOINTS,
    )
