# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .post_service import PostService
from .product_service import ProductService
from .product_validator import normalize_product, validate_product

__all__ = [
    "PostService",
    "ProductService",
    "normalize_product",
    "validate_product",
]
