# =============================================================================
# tests/test_product_validator.py - Product Validation Tests
# =============================================================================

import pytest

from core.services.product_validator import normalize_product, validate_product


NAMA_ERROR = "nama_produk is required and must be at least 3 characters"


class TestValidateProduct:

    def test_valid_payload_has_no_errors(self, product_payload):
        assert validate_product(product_payload) == []

    def test_empty_payload_reports_every_rule(self):
        errors = validate_product({})

        assert errors == [
            "kode_produk is required",
            NAMA_ERROR,
            "kategori is required",
            "harga is required and must be a number greater than 0",
            "stok is required and must be an integer that is not negative",
        ]

    @pytest.mark.parametrize("nama", [None, "", "ab", "  ab  ", 123])
    def test_short_or_missing_name(self, product_payload, nama):
        payload = {**product_payload, "nama_produk": nama}
        if nama is None:
            del payload["nama_produk"]

        assert NAMA_ERROR in validate_product(payload)

    def test_blank_code_and_category(self, product_payload):
        errors = validate_product({**product_payload, "kode_produk": "   ", "kategori": ""})

        assert errors == ["kode_produk is required", "kategori is required"]

    @pytest.mark.parametrize("harga", [0, -1, "abc", "", None, True, float("nan")])
    def test_invalid_price(self, product_payload, harga):
        errors = validate_product({**product_payload, "harga": harga})

        assert errors == ["harga is required and must be a number greater than 0"]

    @pytest.mark.parametrize("harga", [1, 0.5, "2500", "12.75"])
    def test_valid_price(self, product_payload, harga):
        assert validate_product({**product_payload, "harga": harga}) == []

    @pytest.mark.parametrize("stok", [-1, 2.5, "x", None, False])
    def test_invalid_stock(self, product_payload, stok):
        errors = validate_product({**product_payload, "stok": stok})

        assert errors == ["stok is required and must be an integer that is not negative"]

    @pytest.mark.parametrize("stok", [0, 7, "12", 3.0])
    def test_valid_stock(self, product_payload, stok):
        assert validate_product({**product_payload, "stok": stok}) == []


class TestNormalizeProduct:

    def test_trims_and_coerces(self):
        normalized = normalize_product({
            "kode_produk": " P1 ",
            "nama_produk": "  Pen ",
            "kategori": "Office ",
            "harga": "5000",
            "stok": "10",
            "supplier": " PT Maju ",
        })

        assert normalized == {
            "kode_produk": "P1",
            "nama_produk": "Pen",
            "kategori": "Office",
            "harga": 5000.0,
            "stok": 10,
            "deskripsi": "",
            "supplier": "PT Maju",
        }

    def test_ignores_unknown_fields(self, product_payload):
        normalized = normalize_product({**product_payload, "status": "nonaktif", "_id": "x"})

        assert "status" not in normalized
        assert "_id" not in normalized
