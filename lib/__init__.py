# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains the database layer:
# - document_store.py: DocumentStore interface and store errors
# - mongo_store.py: MongoDB implementation (pymongo)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.document_store import (
    POSTS_COLLECTION,
    PRODUCTS_COLLECTION,
    DocumentStore,
    DuplicateKeyStoreError,
    StoreError,
)
from lib.mongo_store import MongoDocumentStore, build_mongo_filter

__all__ = [
    # Interface
    "DocumentStore",
    "StoreError",
    "DuplicateKeyStoreError",
    "POSTS_COLLECTION",
    "PRODUCTS_COLLECTION",
    # MongoDB
    "MongoDocumentStore",
    "build_mongo_filter",
]
