# =============================================================================
# core/services/post_service.py - Post Business Logic
# =============================================================================
# Posts are free-form documents: any JSON object is accepted, the server only
# manages _id and the created_at/updated_at timestamps.
# =============================================================================

import logging
from typing import Any

from app.exceptions import DocumentNotFoundError, EmptyBodyError, NoChangesError
from core.models.filters import DESCENDING, Query
from core.models.pagination import Pagination, skip_for
from core.services.filter_builder import (
    build_post_advanced_query,
    build_post_search_query,
)
from core.services.resource_service import ResourceService, utc_now
from lib.document_store import POSTS_COLLECTION

logger = logging.getLogger(__name__)


# Posts have no schema
PostDocument = dict[str, Any]

SERVER_MANAGED_FIELDS = ("_id", "created_at", "updated_at")
ADVANCED_SEARCH_LIMIT = 50
NEWEST_FIRST = [("_id", DESCENDING)]


def _client_fields(body: dict[str, Any] | None) -> dict[str, Any]:
    """Drop keys the server owns; raise if nothing is left."""
    fields = {
        key: value
        for key, value in (body or {}).items()
        if key not in SERVER_MANAGED_FIELDS
    }
    if not fields:
        raise EmptyBodyError()
    return fields


class PostService(ResourceService):
    """
    Service for the "posts" collection.

    Example:
        service = PostService(store)
        posts, pagination = service.list_posts(search="mongo", page=1, limit=10)
    """

    collection = POSTS_COLLECTION
    resource_name = "post"

    def list_posts(
        self,
        search: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[PostDocument], Pagination]:
        """Newest-first page of posts whose title, content or author match."""
        query = build_post_search_query(search)
        posts = self.store.find(
            self.collection,
            query,
            sort=NEWEST_FIRST,
            skip=skip_for(page, limit),
            limit=limit,
        )
        total = self.store.count(self.collection, query)
        return posts, Pagination.from_counts(page, limit, total)

    def search_posts(
        self,
        title: str | None = None,
        author: str | None = None,
        content: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> tuple[list[PostDocument], Query]:
        """
        Multi-field search, capped at ADVANCED_SEARCH_LIMIT results.

        Raises:
            MissingSearchParamsError: If no parameter is provided
            ValueError: If a date parameter is not a valid date
        """
        query = build_post_advanced_query(title, author, content, date_from, date_to)
        posts = self.store.find(
            self.collection,
            query,
            sort=NEWEST_FIRST,
            limit=ADVANCED_SEARCH_LIMIT,
        )
        return posts, query

    def get_post(self, post_id: str) -> PostDocument:
        return self._get_document(post_id)

    def create_post(self, body: dict[str, Any] | None) -> PostDocument:
        """
        Insert a post with server timestamps.

        Raises:
            EmptyBodyError: If the body has no client fields
        """
        post = _client_fields(body)
        now = utc_now()
        post["created_at"] = now
        post["updated_at"] = now

        post_id = self.store.insert(self.collection, post)
        logger.info(f"Created post: {post_id}")
        return {"_id": post_id, **post}

    def update_post(self, post_id: str, body: dict[str, Any] | None) -> PostDocument:
        """
        Merge the body into an existing post.

        Fields not in the body are kept. created_at never changes.

        Raises:
            InvalidIdError: If post_id is malformed
            EmptyBodyError: If the body has no client fields
            DocumentNotFoundError: If the post does not exist
            NoChangesError: If the body matches the stored values
        """
        self._require_valid_id(post_id)
        changes = _client_fields(body)
        existing = self._get_document(post_id)

        if self._is_unchanged(existing, changes):
            raise NoChangesError()

        modified = self.store.update(
            self.collection,
            post_id,
            {**changes, "updated_at": utc_now()},
        )
        if modified == 0:
            raise NoChangesError()

        updated = self.store.get(self.collection, post_id)
        if updated is None:
            raise DocumentNotFoundError(self.resource_name, post_id)
        logger.info(f"Updated post: {post_id}")
        return updated

    def delete_post(self, post_id: str) -> PostDocument:
        return self._delete_document(post_id)
