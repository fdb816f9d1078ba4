# =============================================================================
# core/services/resource_service.py - Shared Document Service Logic
# =============================================================================
# Both resources follow the same contract for single-document operations:
# malformed IDs are rejected before the store is queried, and missing
# documents become 404s.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.exceptions import DocumentNotFoundError, InvalidIdError
from lib.document_store import DocumentStore

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ResourceService:
    """Base class binding a store to one collection."""

    collection: str = ""
    resource_name: str = "document"

    def __init__(self, store: DocumentStore):
        self.store = store

    def _require_valid_id(self, doc_id: str) -> None:
        if not self.store.is_valid_id(doc_id):
            raise InvalidIdError(self.resource_name, doc_id)

    def _get_document(self, doc_id: str) -> dict[str, Any]:
        """
        Fetch a document by ID.

        Raises:
            InvalidIdError: If doc_id is malformed
            DocumentNotFoundError: If no document has this ID
        """
        self._require_valid_id(doc_id)
        document = self.store.get(self.collection, doc_id)
        if document is None:
            raise DocumentNotFoundError(self.resource_name, doc_id)
        return document

    def _delete_document(self, doc_id: str) -> dict[str, Any]:
        """Delete a document and return it as it was before removal."""
        document = self._get_document(doc_id)
        deleted = self.store.delete(self.collection, doc_id)
        if deleted == 0:
            # Removed by a concurrent request after we read it
            raise DocumentNotFoundError(self.resource_name, doc_id)
        logger.info(f"Deleted {self.resource_name}: {doc_id}")
        return document

    @staticmethod
    def _is_unchanged(existing: dict[str, Any], changes: dict[str, Any]) -> bool:
        """True if every changed field already holds the given value."""
        return all(
            field in existing and existing[field] == value
            for field, value in changes.items()
        )
