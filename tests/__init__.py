# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Kampus API:
# - test_models.py: Filters, pagination and Product schema
# - test_filter_builder.py: Query parameters -> filter predicates
# - test_product_validator.py: Product payload rules and normalization
# - test_mongo_store.py: Mongo query translation, retry and provisioning
# - test_services.py: Post/Product services on an in-memory store
# - test_api.py: HTTP endpoints end to end
# - test_config.py: Settings and connection URL
#
# Run tests with: pytest
# =============================================================================
