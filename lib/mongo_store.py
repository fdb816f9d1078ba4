# =============================================================================
# lib/mongo_store.py - MongoDB Document Store
# =============================================================================
# pymongo implementation of the DocumentStore interface.
#
# One MongoClient is shared by the whole process. pymongo pools connections
# and is thread-safe, so route handlers running in FastAPI's threadpool use
# it concurrently without locking.
#
# Lifecycle:
#   store = MongoDocumentStore.from_settings(settings)
#   store.connect_with_retry()   # blocks until the server answers a ping
#   store.ensure_schema()        # collections + indexes
#   ...
#   store.close()
# =============================================================================

from __future__ import annotations

import logging
import re
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from bson import ObjectId
from pymongo import ASCENDING, TEXT, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import (
    CollectionInvalid,
    DuplicateKeyError,
    OperationFailure,
    PyMongoError,
)

from core.models.filters import FilterCondition, FilterOperator, Query, SortSpec
from lib.document_store import (
    POSTS_COLLECTION,
    PRODUCTS_COLLECTION,
    DuplicateKeyStoreError,
    StoreError,
)

logger = logging.getLogger(__name__)

# IndexOptionsConflict / IndexKeySpecsConflict: an equivalent index exists
IGNORED_INDEX_ERROR_CODES = {85, 86}

PRODUCT_INDEXES: list[tuple[list[tuple[str, Any]], dict[str, Any]]] = [
    ([("kode_produk", ASCENDING)], {"unique": True, "name": "idx_kode_produk_unique"}),
    ([("nama_produk", TEXT), ("deskripsi", TEXT)], {"name": "idx_produk_text_search"}),
    ([("kategori", ASCENDING)], {"name": "idx_kategori"}),
    ([("harga", ASCENDING)], {"name": "idx_harga"}),
]

_MONGO_OPERATORS = {
    FilterOperator.EQ: "$eq",
    FilterOperator.NE: "$ne",
    FilterOperator.GTE: "$gte",
    FilterOperator.LTE: "$lte",
}


# =============================================================================
# Query Translation
# =============================================================================

def _mongo_value(field: str, value: Any) -> Any:
    if field == "_id" and isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def _condition_to_mongo(condition: FilterCondition) -> dict[str, Any]:
    if condition.operator == FilterOperator.CONTAINS:
        # Literal substring, not a user-supplied regex
        return {
            condition.field: {
                "$regex": re.escape(str(condition.value)),
                "$options": "i",
            }
        }
    op = _MONGO_OPERATORS[condition.operator]
    return {condition.field: {op: _mongo_value(condition.field, condition.value)}}


def build_mongo_filter(query: Query | None) -> dict[str, Any]:
    """
    Translate a Query into a MongoDB filter document.

    Conditions on the same field are merged into one operator document
    (e.g. {"harga": {"$gte": 10, "$lte": 20}}). The OR group becomes "$or".

    Example:
        >>> build_mongo_filter(Query().where("stok", FilterOperator.LTE, 0))
        {'stok': {'$lte': 0}}
    """
    if query is None or query.is_empty:
        return {}

    mongo_filter: dict[str, Any] = {}
    for condition in query.conditions:
        for field, clause in _condition_to_mongo(condition).items():
            existing = mongo_filter.get(field)
            if isinstance(existing, dict) and "$regex" not in clause and "$regex" not in existing:
                existing.update(clause)
            elif existing is not None:
                mongo_filter.setdefault("$and", []).append({field: clause})
            else:
                mongo_filter[field] = clause

    if query.any_of:
        mongo_filter["$or"] = [_condition_to_mongo(c) for c in query.any_of]

    return mongo_filter


def _serialize(document: dict[str, Any] | None) -> dict[str, Any] | None:
    """Expose ObjectId as a plain string so callers stay driver-free."""
    if document is None:
        return None
    if "_id" in document:
        document["_id"] = str(document["_id"])
    return document


# =============================================================================
# Store
# =============================================================================

class MongoDocumentStore:
    """
    DocumentStore backed by a MongoDB database.

    The client is created lazily by connect(); every data operation before
    that raises StoreError("NOT_CONNECTED").
    """

    def __init__(
        self,
        url: str,
        db_name: str,
        *,
        server_selection_timeout_ms: int = 5000,
        client_factory: Callable[..., MongoClient] = MongoClient,
    ):
        self.url = url
        self.db_name = db_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self._client_factory = client_factory
        self._client: MongoClient | None = None
        self._db: Database | None = None

    @classmethod
    def from_settings(cls, settings: Any) -> "MongoDocumentStore":
        return cls(
            settings.mongo_url,
            settings.MONGO_DB_NAME,
            server_selection_timeout_ms=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    def connect(self) -> None:
        """
        Create the client and verify the server answers a ping.

        Raises:
            StoreError: If the server is unreachable
        """
        self.close()
        client = None
        try:
            # SRV URLs resolve DNS here, so construction can fail too
            client = self._client_factory(
                self.url,
                serverSelectionTimeoutMS=self.server_selection_timeout_ms,
                tz_aware=True,
            )
            client.admin.command("ping")
        except PyMongoError as e:
            if client is not None:
                client.close()
            raise StoreError(
                message=f"Failed to connect to MongoDB: {e}",
                code="CONNECTION_FAILED",
                suggestion="Check MONGO_HOST, MONGO_USER and MONGO_PASSWORD",
            ) from e

        self._client = client
        self._db = client[self.db_name]
        logger.info(f"Connected to MongoDB database '{self.db_name}'")

    def connect_with_retry(
        self,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        max_attempts: int | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """
        Connect, retrying with capped exponential backoff.

        The delay after failed attempt n (0-based) is
        min(max_delay, base_delay * 2**n). With max_attempts=None this
        retries until the server becomes reachable.

        Returns:
            Number of attempts it took to connect

        Raises:
            StoreError: If max_attempts is reached
        """
        attempt = 0
        while True:
            attempt += 1
            logger.info(f"Connecting to MongoDB (attempt {attempt})...")
            try:
                self.connect()
                return attempt
            except StoreError as e:
                if max_attempts is not None and attempt >= max_attempts:
                    logger.error(f"Giving up on MongoDB after {attempt} attempts")
                    raise
                delay = min(max_delay, base_delay * (2 ** (attempt - 1)))
                logger.warning(f"{e.message}. Retrying in {delay:.0f}s")
                sleep(delay)

    def ensure_schema(self) -> None:
        """Create the posts/produk collections and the product indexes."""
        db = self.db
        existing = set(db.list_collection_names())
        for name in (POSTS_COLLECTION, PRODUCTS_COLLECTION):
            if name in existing:
                continue
            try:
                db.create_collection(name)
                logger.info(f"Created collection '{name}'")
            except CollectionInvalid:
                # Created concurrently by another process
                pass

        products = db[PRODUCTS_COLLECTION]
        for keys, options in PRODUCT_INDEXES:
            try:
                products.create_index(keys, **options)
                logger.info(f"Ensured index {options['name']}")
            except OperationFailure as e:
                if e.code not in IGNORED_INDEX_ERROR_CODES:
                    logger.error(f"Failed to create index {options['name']}: {e}")

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._db = None

    def ping(self) -> bool:
        with self._driver_errors("ping"):
            self.db.command("ping")
        return True

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @property
    def db(self) -> Database:
        if self._db is None:
            raise StoreError(
                message="Database not connected",
                code="NOT_CONNECTED",
                suggestion="Wait for the startup connection to succeed",
            )
        return self._db

    def _collection(self, name: str) -> Collection:
        return self.db[name]

    @contextmanager
    def _driver_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except DuplicateKeyError as e:
            raise DuplicateKeyStoreError(str(e)) from e
        except PyMongoError as e:
            logger.error(f"MongoDB {operation} failed: {e}")
            raise StoreError(message=str(e), code="QUERY_FAILED") from e

    # -------------------------------------------------------------------------
    # DocumentStore
    # -------------------------------------------------------------------------

    def is_valid_id(self, doc_id: str) -> bool:
        return isinstance(doc_id, str) and ObjectId.is_valid(doc_id)

    def find(
        self,
        collection: str,
        query: Query | None = None,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[dict[str, Any]]:
        with self._driver_errors("find"):
            cursor = self._collection(collection).find(build_mongo_filter(query))
            if sort:
                cursor = cursor.sort(sort)
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            return [_serialize(doc) for doc in cursor]

    def count(self, collection: str, query: Query | None = None) -> int:
        with self._driver_errors("count"):
            return self._collection(collection).count_documents(build_mongo_filter(query))

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        with self._driver_errors("get"):
            doc = self._collection(collection).find_one({"_id": ObjectId(doc_id)})
        return _serialize(doc)

    def find_one(self, collection: str, query: Query) -> dict[str, Any] | None:
        with self._driver_errors("find_one"):
            doc = self._collection(collection).find_one(build_mongo_filter(query))
        return _serialize(doc)

    def insert(self, collection: str, document: dict[str, Any]) -> str:
        # insert_one adds the generated _id to the dict it is given
        to_insert = dict(document)
        with self._driver_errors("insert"):
            result = self._collection(collection).insert_one(to_insert)
        return str(result.inserted_id)

    def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> int:
        with self._driver_errors("update"):
            result = self._collection(collection).update_one(
                {"_id": ObjectId(doc_id)},
                {"$set": fields},
            )
        return result.modified_count

    def delete(self, collection: str, doc_id: str) -> int:
        with self._driver_errors("delete"):
            result = self._collection(collection).delete_one({"_id": ObjectId(doc_id)})
        return result.deleted_count
