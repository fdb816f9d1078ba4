# =============================================================================
# core/services/product_validator.py - Product Payload Validation
# =============================================================================
# validate_product() checks every rule and returns all messages, so a client
# can fix a form in one round trip. normalize_product() turns a valid payload
# into the shape that is stored.
# =============================================================================

import math
from typing import Any


def _text(value: Any) -> str | None:
    """Trimmed string, or None when the value is not a string."""
    if not isinstance(value, str):
        return None
    return value.strip()


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_integer(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip():
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def validate_product(payload: dict[str, Any]) -> list[str]:
    """
    Validate a product write payload.

    Returns:
        Error messages in rule order; empty when the payload is valid

    Example:
        >>> validate_product({"kode_produk": "P1", "nama_produk": "Pe"})
        ['nama_produk is required and must be at least 3 characters',
         'kategori is required',
         'harga is required and must be a number greater than 0',
         'stok is required and must be an integer that is not negative']
    """
    errors: list[str] = []

    if not _text(payload.get("kode_produk")):
        errors.append("kode_produk is required")

    nama = _text(payload.get("nama_produk"))
    if nama is None or len(nama) < 3:
        errors.append("nama_produk is required and must be at least 3 characters")

    if not _text(payload.get("kategori")):
        errors.append("kategori is required")

    harga = _as_number(payload.get("harga"))
    if harga is None or not harga > 0:
        errors.append("harga is required and must be a number greater than 0")

    stok = _as_integer(payload.get("stok"))
    if stok is None or stok < 0:
        errors.append("stok is required and must be an integer that is not negative")

    return errors


def normalize_product(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Trim text and coerce numbers of a payload that passed validate_product().

    Optional text fields default to an empty string.
    """
    return {
        "kode_produk": payload["kode_produk"].strip(),
        "nama_produk": payload["nama_produk"].strip(),
        "kategori": payload["kategori"].strip(),
        "harga": _as_number(payload["harga"]),
        "stok": _as_integer(payload["stok"]),
        "deskripsi": _text(payload.get("deskripsi")) or "",
        "supplier": _text(payload.get("supplier")) or "",
    }
