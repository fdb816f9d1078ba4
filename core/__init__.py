# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic:
# - models/: Pydantic schemas (filters, pagination, products)
# - services/: Filter builder, product validator, resource services
#
# Code in this package should NOT import routers or app.config.
# Services talk to the database only through lib.document_store.DocumentStore.
# =============================================================================
