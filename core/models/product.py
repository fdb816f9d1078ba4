# =============================================================================
# core/models/product.py - Product Schema
# =============================================================================
# Products are structured documents in the "produk" collection. Unlike
# posts, every field is known and typed.
#
# Request bodies are NOT parsed into this model directly: they go through
# validate_product() so clients get every problem at once as plain strings.
# This model describes what is stored and returned.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_PRODUCT_STATUS = "aktif"


class Product(BaseModel):
    """
    A product as stored in MongoDB.

    Example:
        {
            "_id": "6650f1c2a7b3e5d4c3b2a190",
            "kode_produk": "P1",
            "nama_produk": "Pen",
            "kategori": "Office",
            "harga": 5.0,
            "stok": 10,
            "deskripsi": "",
            "supplier": "",
            "status": "aktif",
            "tanggal_dibuat": "2024-01-15T10:30:00Z",
            "tanggal_diupdate": "2024-01-15T10:30:00Z"
        }
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = Field(default=None, alias="_id", description="Store-generated ID")
    kode_produk: str = Field(..., description="Unique product code")
    nama_produk: str = Field(..., description="Product name")
    kategori: str = Field(..., description="Category")
    harga: float = Field(..., description="Unit price")
    stok: int = Field(..., description="Units in stock")
    deskripsi: str = Field(default="", description="Optional description")
    supplier: str = Field(default="", description="Optional supplier name")
    status: str = Field(default=DEFAULT_PRODUCT_STATUS)
    tanggal_dibuat: datetime | None = Field(default=None, description="Creation timestamp")
    tanggal_diupdate: datetime | None = Field(default=None, description="Last update timestamp")

    def to_response(self) -> dict:
        """Dump with the `_id` key, as clients expect."""
        return self.model_dump(by_alias=True)
