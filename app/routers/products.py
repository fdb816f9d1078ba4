# =============================================================================
# app/routers/products.py - Product CRUD Endpoints
# =============================================================================
# Structured products with validation, filters and pagination.
# Mounted at /api/produk in main.py.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Body, Path, Query

from app.dependencies import ProductServiceDep

router = APIRouter()

ProductId = Annotated[str, Path(description="Product ObjectId (24 hex characters)")]
ProductBody = Annotated[
    dict[str, Any] | None,
    Body(
        examples=[{
            "kode_produk": "P1",
            "nama_produk": "Pen",
            "kategori": "Office",
            "harga": 5000,
            "stok": 10,
            "deskripsi": "Blue ballpoint pen",
            "supplier": "PT Alat Tulis",
        }],
    ),
]


@router.get("")
def list_products(
    service: ProductServiceDep,
    search: Annotated[str | None, Query(description="Matches nama_produk or deskripsi")] = None,
    kategori: Annotated[str | None, Query(description="Category substring")] = None,
    min_harga: Annotated[float | None, Query(description="Minimum price, inclusive")] = None,
    max_harga: Annotated[float | None, Query(description="Maximum price, inclusive")] = None,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[int, Query(ge=1, description="Items per page")] = 10,
):
    """List products, newest first."""
    products, pagination = service.list_products(
        search=search,
        kategori=kategori,
        min_harga=min_harga,
        max_harga=max_harga,
        page=page,
        limit=limit,
    )

    return {
        "success": True,
        "message": f"Found {len(products)} products",
        "data": [p.to_response() for p in products],
        "pagination": pagination.model_dump(),
        "filters_applied": {
            "search": search or None,
            "kategori": kategori or None,
            "min_harga": min_harga,
            "max_harga": max_harga,
        },
    }


@router.get("/search/advanced")
def search_products(
    service: ProductServiceDep,
    nama: Annotated[str | None, Query(description="nama_produk substring")] = None,
    kode: Annotated[str | None, Query(description="kode_produk substring")] = None,
    kategori: Annotated[str | None, Query()] = None,
    min_harga: Annotated[float | None, Query()] = None,
    max_harga: Annotated[float | None, Query()] = None,
    supplier: Annotated[str | None, Query()] = None,
    stok_kosong: Annotated[str | None, Query(description="'true' for out-of-stock only")] = None,
):
    """
    Search products by several fields at once (at most 100 results).

    At least one parameter is required.
    """
    products, query = service.search_products(
        nama=nama,
        kode=kode,
        kategori=kategori,
        min_harga=min_harga,
        max_harga=max_harga,
        supplier=supplier,
        stok_kosong=stok_kosong,
    )

    return {
        "success": True,
        "message": f"Found {len(products)} products",
        "data": [p.to_response() for p in products],
        "filters_applied": query.describe(),
    }


@router.get("/{product_id}")
def get_product(product_id: ProductId, service: ProductServiceDep):
    """Get a single product."""
    return {
        "success": True,
        "message": "Product found",
        "data": service.get_product(product_id).to_response(),
    }


@router.post("", status_code=201)
def create_product(service: ProductServiceDep, body: ProductBody = None):
    """
    Create a product.

    Returns 400 with every validation error, or 409 if kode_produk is
    already used.
    """
    return {
        "success": True,
        "message": "Product created successfully",
        "data": service.create_product(body).to_response(),
    }


@router.put("/{product_id}")
def update_product(product_id: ProductId, service: ProductServiceDep, body: ProductBody = None):
    """Replace a product's fields, keeping tanggal_dibuat."""
    return {
        "success": True,
        "message": "Product updated successfully",
        "data": service.update_product(product_id, body).to_response(),
    }


@router.delete("/{product_id}")
def delete_product(product_id: ProductId, service: ProductServiceDep):
    """Delete a product and return it."""
    return {
        "success": True,
        "message": "Product deleted successfully",
        "data": service.delete_product(product_id).to_response(),
    }
