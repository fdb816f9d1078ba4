# =============================================================================
# core/services/product_service.py - Product Business Logic
# =============================================================================
# Products are validated, normalized and kept unique by kode_produk.
#
# Uniqueness is checked by the service before writing so clients get a clear
# 409. The unique index on kode_produk still catches races between two
# concurrent writers; its DuplicateKeyStoreError is mapped to the same 409.
# =============================================================================

import logging
from typing import Any

from app.exceptions import (
    DocumentNotFoundError,
    DuplicateProductCodeError,
    NoChangesError,
    ProductValidationError,
)
from core.models.filters import DESCENDING, FilterOperator, Query
from core.models.pagination import Pagination, skip_for
from core.models.product import DEFAULT_PRODUCT_STATUS, Product
from core.services.filter_builder import (
    build_product_advanced_query,
    build_product_list_query,
)
from core.services.product_validator import normalize_product, validate_product
from core.services.resource_service import ResourceService, utc_now
from lib.document_store import PRODUCTS_COLLECTION, DuplicateKeyStoreError

logger = logging.getLogger(__name__)


ADVANCED_SEARCH_LIMIT = 100
NEWEST_FIRST = [("tanggal_dibuat", DESCENDING)]


class ProductService(ResourceService):
    """
    Service for the "produk" collection.

    Example:
        service = ProductService(store)
        product = service.create_product({
            "kode_produk": "P1", "nama_produk": "Pen",
            "kategori": "Office", "harga": 5, "stok": 10,
        })
        product.status  # "aktif"
    """

    collection = PRODUCTS_COLLECTION
    resource_name = "product"

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_products(
        self,
        search: str | None = None,
        kategori: str | None = None,
        min_harga: float | None = None,
        max_harga: float | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Product], Pagination]:
        query = build_product_list_query(search, kategori, min_harga, max_harga)
        documents = self.store.find(
            self.collection,
            query,
            sort=NEWEST_FIRST,
            skip=skip_for(page, limit),
            limit=limit,
        )
        total = self.store.count(self.collection, query)
        return [Product.model_validate(d) for d in documents], Pagination.from_counts(page, limit, total)

    def search_products(
        self,
        nama: str | None = None,
        kode: str | None = None,
        kategori: str | None = None,
        min_harga: float | None = None,
        max_harga: float | None = None,
        supplier: str | None = None,
        stok_kosong: str | None = None,
    ) -> tuple[list[Product], Query]:
        """
        Multi-field search, capped at ADVANCED_SEARCH_LIMIT results.

        Raises:
            MissingSearchParamsError: If no parameter is provided
        """
        query = build_product_advanced_query(
            nama, kode, kategori, min_harga, max_harga, supplier, stok_kosong
        )
        documents = self.store.find(
            self.collection,
            query,
            sort=NEWEST_FIRST,
            limit=ADVANCED_SEARCH_LIMIT,
        )
        return [Product.model_validate(d) for d in documents], query

    def get_product(self, product_id: str) -> Product:
        return Product.model_validate(self._get_document(product_id))

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def _validated(self, body: dict[str, Any] | None) -> dict[str, Any]:
        payload = body or {}
        errors = validate_product(payload)
        if errors:
            raise ProductValidationError(errors)
        return normalize_product(payload)

    def _ensure_code_available(self, kode_produk: str, exclude_id: str | None = None) -> None:
        query = Query().where("kode_produk", FilterOperator.EQ, kode_produk)
        if exclude_id is not None:
            query.where("_id", FilterOperator.NE, exclude_id)
        if self.store.find_one(self.collection, query) is not None:
            raise DuplicateProductCodeError(kode_produk)

    def create_product(self, body: dict[str, Any] | None) -> Product:
        """
        Validate and insert a new product.

        Raises:
            ProductValidationError: With every failed rule
            DuplicateProductCodeError: If kode_produk is taken
        """
        data = self._validated(body)
        self._ensure_code_available(data["kode_produk"])

        now = utc_now()
        document = {
            **data,
            "tanggal_dibuat": now,
            "tanggal_diupdate": now,
            "status": DEFAULT_PRODUCT_STATUS,
        }
        try:
            product_id = self.store.insert(self.collection, document)
        except DuplicateKeyStoreError:
            raise DuplicateProductCodeError(data["kode_produk"])

        logger.info(f"Created product {data['kode_produk']}: {product_id}")
        return Product.model_validate({"_id": product_id, **document})

    def update_product(self, product_id: str, body: dict[str, Any] | None) -> Product:
        """
        Replace the client fields of a product.

        tanggal_dibuat and status are preserved; tanggal_diupdate is
        re-stamped.

        Raises:
            InvalidIdError: If product_id is malformed
            ProductValidationError: With every failed rule
            DocumentNotFoundError: If the product does not exist
            DuplicateProductCodeError: If another product uses kode_produk
            NoChangesError: If every field already holds the submitted value
        """
        self._require_valid_id(product_id)
        data = self._validated(body)
        existing = self._get_document(product_id)
        self._ensure_code_available(data["kode_produk"], exclude_id=product_id)

        if self._is_unchanged(existing, data):
            raise NoChangesError()

        try:
            modified = self.store.update(
                self.collection,
                product_id,
                {**data, "tanggal_diupdate": utc_now()},
            )
        except DuplicateKeyStoreError:
            raise DuplicateProductCodeError(data["kode_produk"])
        if modified == 0:
            raise NoChangesError()

        updated = self.store.get(self.collection, product_id)
        if updated is None:
            raise DocumentNotFoundError(self.resource_name, product_id)
        logger.info(f"Updated product: {product_id}")
        return Product.model_validate(updated)

    def delete_product(self, product_id: str) -> Product:
        return Product.model_validate(self._delete_document(product_id))
