# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Kampus API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import (
    KampusException,
    http_exception_handler,
    kampus_exception_handler,
    store_exception_handler,
    validation_exception_handler,
)
from app.routers import health, posts, products
from lib.document_store import StoreError
from lib.mongo_store import MongoDocumentStore

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: connect to MongoDB (retrying with backoff until it answers),
      then create collections and indexes
    - Shutdown: close the MongoDB client
    """
    logger.info(f"Starting Kampus API in {settings.ENVIRONMENT} mode")

    store = MongoDocumentStore.from_settings(settings)
    await run_in_threadpool(
        store.connect_with_retry,
        settings.MONGO_RETRY_BASE_DELAY,
        settings.MONGO_RETRY_MAX_DELAY,
        settings.MONGO_RETRY_MAX_ATTEMPTS,
    )
    await run_in_threadpool(store.ensure_schema)
    app.state.store = store

    yield

    logger.info("Shutting down Kampus API")
    app.state.store = None
    store.close()


# Create FastAPI application
app = FastAPI(
    title="Kampus API",
    description="""
## CRUD API for posts and products on MongoDB

### Resources

| Resource | Base path | Notes |
|----------|-----------|-------|
| **Posts** | `/posts` | Free-form JSON documents |
| **Produk** | `/api/produk` | Validated products, unique `kode_produk` |

Every response has `success` and `message`. Lists add `data` and
`pagination`; errors add `error` and, for invalid products, `errors`.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Posts",
            "description": "Create, search and manage posts",
        },
        {
            "name": "Produk",
            "description": "Create, filter and manage products",
        },
        {
            "name": "Health",
            "description": "Database connectivity and statistics",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(KampusException)
async def handle_kampus_exception(request: Request, exc: KampusException):
    """Handle API errors raised by services."""
    return await kampus_exception_handler(request, exc)


@app.exception_handler(StoreError)
async def handle_store_exception(request: Request, exc: StoreError):
    """Handle database failures."""
    return await store_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed query parameters and bodies."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    """Handle unmatched routes and methods."""
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "An unexpected error occurred",
            "error": str(exc),
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoint
app.include_router(
    health.router,
    tags=["Health"]
)

# Post endpoints
app.include_router(
    posts.router,
    prefix="/posts",
    tags=["Posts"]
)

# Product endpoints
app.include_router(
    products.router,
    prefix="/api/produk",
    tags=["Produk"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "success": True,
        "message": "Kampus API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
