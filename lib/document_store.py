# =============================================================================
# lib/document_store.py - Document Store Interface
# =============================================================================
# The contract every document store must fulfil. Services receive an
# implementation through dependency injection and never touch the driver.
#
# Documents cross this boundary as plain dicts. The identifier is always
# exposed as a string under the "_id" key.
#
# Implementations:
#   - lib/mongo_store.py: MongoDB via pymongo
# =============================================================================

from __future__ import annotations

from typing import Any, Protocol

from core.models.filters import Query, SortSpec


POSTS_COLLECTION = "posts"
PRODUCTS_COLLECTION = "produk"


class StoreError(Exception):
    """
    Error raised by a document store when the backend fails.

    Wraps driver exceptions so callers never depend on driver types.
    """

    def __init__(
        self,
        message: str,
        code: str = "STORE_ERROR",
        suggestion: str | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class DuplicateKeyStoreError(StoreError):
    """Raised when a write violates a unique index."""

    def __init__(self, message: str):
        super().__init__(
            message,
            code="DUPLICATE_KEY",
            suggestion="Use a different value for the unique field",
        )


class DocumentStore(Protocol):
    """Operations the API needs from a document database."""

    def is_valid_id(self, doc_id: str) -> bool:
        """Return True if doc_id is a well-formed identifier for this store."""
        ...

    def find(
        self,
        collection: str,
        query: Query | None = None,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[dict[str, Any]]:
        """Return matching documents. limit=0 means no limit."""
        ...

    def count(self, collection: str, query: Query | None = None) -> int:
        ...

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        ...

    def find_one(self, collection: str, query: Query) -> dict[str, Any] | None:
        ...

    def insert(self, collection: str, document: dict[str, Any]) -> str:
        """Insert a document and return its new identifier."""
        ...

    def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> int:
        """Set fields on one document and return the modified count."""
        ...

    def delete(self, collection: str, doc_id: str) -> int:
        """Delete one document and return the deleted count."""
        ...

    def ping(self) -> bool:
        ...

    def close(self) -> None:
        ...
