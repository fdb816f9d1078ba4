# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# The document store is created by the lifespan handler in main.py and kept
# on app.state. Tests swap it via app.dependency_overrides[get_optional_store].
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.exceptions import InternalError
from core.services.post_service import PostService
from core.services.product_service import ProductService
from lib.document_store import DocumentStore


def get_optional_store(request: Request) -> DocumentStore | None:
    """The connected store, or None while startup is still connecting."""
    return getattr(request.app.state, "store", None)


def get_store(
    store: Annotated[DocumentStore | None, Depends(get_optional_store)],
) -> DocumentStore:
    """
    Get the connected document store.

    Raises:
        InternalError: If the database connection is not established
    """
    if store is None:
        raise InternalError(
            "Database not connected",
            code="DATABASE_UNAVAILABLE",
            suggestion="Check that MongoDB is running and reachable",
        )
    return store


# Type aliases for dependency injection
OptionalStoreDep = Annotated[DocumentStore | None, Depends(get_optional_store)]
StoreDep = Annotated[DocumentStore, Depends(get_store)]


def get_post_service(store: StoreDep) -> PostService:
    return PostService(store)


def get_product_service(store: StoreDep) -> ProductService:
    return ProductService(store)


PostServiceDep = Annotated[PostService, Depends(get_post_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
