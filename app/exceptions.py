# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every error response uses the same envelope as successful ones:
#   {"success": false, "message": "...", "error": "CODE", "errors": [...]}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lib.document_store import StoreError

logger = logging.getLogger(__name__)


class KampusException(Exception):
    """
    Base exception for the Kampus API.

    All custom exceptions inherit from this class and carry the HTTP status
    they map to.
    """

    def __init__(
        self,
        message: str,
        code: str = "KAMPUS_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        errors: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.errors = errors or []
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "success": False,
            "message": self.message,
            "error": self.code,
        }
        if self.errors:
            result["errors"] = self.errors
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Error Categories
# =============================================================================

class InvalidRequestError(KampusException):
    """The request cannot be processed as sent (400)."""

    def __init__(self, message: str, code: str = "INVALID_REQUEST", **kwargs: Any):
        super().__init__(message, code=code, status_code=400, **kwargs)


class NotFoundError(KampusException):
    """The addressed document does not exist (404)."""

    def __init__(self, message: str, code: str = "NOT_FOUND", **kwargs: Any):
        super().__init__(message, code=code, status_code=404, **kwargs)


class ConflictError(KampusException):
    """A unique value is already taken (409)."""

    def __init__(self, message: str, code: str = "CONFLICT", **kwargs: Any):
        super().__init__(message, code=code, status_code=409, **kwargs)


class InternalError(KampusException):
    """Unexpected failure (500)."""

    def __init__(self, message: str, code: str = "INTERNAL_ERROR", **kwargs: Any):
        super().__init__(message, code=code, status_code=500, **kwargs)


# =============================================================================
# Request Exceptions
# =============================================================================

class InvalidIdError(InvalidRequestError):
    """Raised when a path identifier is not a valid document ID."""

    def __init__(self, resource: str, doc_id: str):
        super().__init__(
            message=f"Invalid {resource} ID: {doc_id}",
            code="INVALID_ID",
            suggestion="Use the 24-character hexadecimal _id returned by the API",
            details={"id": doc_id},
        )


class EmptyBodyError(InvalidRequestError):
    """Raised when a write request has no fields."""

    def __init__(self):
        super().__init__(
            message="Request body must not be empty",
            code="EMPTY_BODY",
            suggestion="Send a JSON object with at least one field",
        )


class ProductValidationError(InvalidRequestError):
    """Raised when a product payload fails validation."""

    def __init__(self, errors: list[str]):
        super().__init__(
            message="Invalid product data",
            code="VALIDATION_ERROR",
            errors=errors,
        )


class MissingSearchParamsError(InvalidRequestError):
    """Raised when an advanced search has no recognized parameter."""

    def __init__(self, accepted: list[str]):
        super().__init__(
            message="At least one search parameter is required",
            code="MISSING_SEARCH_PARAMS",
            suggestion=f"Provide one of: {', '.join(accepted)}",
            details={"accepted_params": accepted},
        )


class NoChangesError(InvalidRequestError):
    """Raised when an update would not change the stored document."""

    def __init__(self):
        super().__init__(
            message="No changes detected: data is identical to the stored document",
            code="NO_CHANGES",
        )


# =============================================================================
# Document Exceptions
# =============================================================================

class DocumentNotFoundError(NotFoundError):
    """Raised when no document has the requested ID."""

    def __init__(self, resource: str, doc_id: str):
        super().__init__(
            message=f"{resource.capitalize()} not found: {doc_id}",
            code=f"{resource.upper()}_NOT_FOUND",
            details={"id": doc_id},
        )


class DuplicateProductCodeError(ConflictError):
    """Raised when kode_produk is already used by another product."""

    def __init__(self, kode_produk: str):
        super().__init__(
            message=f"Product code already in use: {kode_produk}",
            code="DUPLICATE_KODE_PRODUK",
            suggestion="Use a different kode_produk",
            details={"kode_produk": kode_produk},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def kampus_exception_handler(
    request: Request,
    exc: KampusException
) -> JSONResponse:
    """Convert KampusException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def store_exception_handler(
    request: Request,
    exc: StoreError
) -> JSONResponse:
    """Store failures surface as 500 with the driver message."""
    logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Database operation failed",
            "error": exc.message,
        }
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle FastAPI request validation errors (query params, body type).

    Rendered as 400 so every client error shares one status code.
    """
    errors = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "Invalid request parameters",
            "error": "VALIDATION_ERROR",
            "errors": errors,
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Unmatched routes and unsupported methods."""
    if exc.status_code == 404:
        message = f"Endpoint {request.method} {request.url.path} not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": message,
            "error": "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR",
        },
        headers=getattr(exc, "headers", None),
    )
