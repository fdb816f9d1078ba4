# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by resource:
# - health.py: Health check with collection statistics
# - posts.py: Free-form post CRUD, search and pagination
# - products.py: Product CRUD with validation and filters
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import posts
from . import products

__all__ = [
    "health",
    "posts",
    "products",
]
