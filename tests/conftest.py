# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Provides an in-memory document store and a TestClient wired to it
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("MONGO_HOST", "localhost")
os.environ.setdefault("MONGO_DB_NAME", "db_kampus_test")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_optional_store
from app.main import app
from core.services.post_service import PostService
from core.services.product_service import ProductService
from tests.fakes import InMemoryDocumentStore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def client(store):
    """TestClient whose routes use the in-memory store (no lifespan)."""
    app.dependency_overrides[get_optional_store] = lambda: store
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def post_service(store):
    return PostService(store)


@pytest.fixture
def product_service(store):
    return ProductService(store)


@pytest.fixture
def product_payload():
    """A valid product body."""
    return {
        "kode_produk": "P1",
        "nama_produk": "Pen",
        "kategori": "Office",
        "harga": 5,
        "stok": 10,
    }


@pytest.fixture
def missing_id():
    """Well-formed ObjectId that no test document uses."""
    return "ffffffffffffffffffffffff"
