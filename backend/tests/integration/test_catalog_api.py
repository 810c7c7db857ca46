"""Integration tests for the product catalog API

Tests the catalog workflow through HTTP:
- Browsing and searching the active catalog
- Importing spreadsheets (replace-all semantics, rejection cases)
- Template download
- Clearing the catalog
- Description translation
"""

import io
from unittest.mock import MagicMock

import openpyxl
import pytest

from catalog.import_service import CatalogImportService
from config import get_settings
from dependencies import get_import_service
from domain.catalog.ports import CatalogStoreError
from infrastructure.tabular.registry import build_default_registry

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class TestBrowseProducts:
    """GET /api/v1/products"""

    def test_list_all(self, client):
        response = client.get("/api/v1/products")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 4
        assert [item["id"] for item in data["items"]] == ["p1", "p2", "p3", "p4"]

    def test_search_english(self, client):
        data = client.get("/api/v1/products", params={"search": "PEPSI"}).json()
        assert [item["id"] for item in data["items"]] == ["p1"]

    def test_search_arabic(self, client):
        data = client.get("/api/v1/products", params={"search": "بيبسي"}).json()
        assert [item["id"] for item in data["items"]] == ["p2"]

    def test_pagination(self, client):
        data = client.get("/api/v1/products", params={"limit": 2, "offset": 1}).json()
        assert data["total"] == 4
        assert [item["id"] for item in data["items"]] == ["p2", "p3"]

    def test_get_product(self, client):
        response = client.get("/api/v1/products/p3")
        assert response.status_code == 200
        assert response.json()["name"] == "Almarai Fresh Milk 1L"

    def test_get_product_not_found(self, client):
        assert client.get("/api/v1/products/missing").status_code == 404


class TestTemplate:
    """GET /api/v1/products/template"""

    def test_download(self, client):
        response = client.get("/api/v1/products/template")

        assert response.status_code == 200
        assert response.headers["content-type"] == XLSX_TYPE
        assert "template_products.xlsx" in response.headers["content-disposition"]

        wb = openpyxl.load_workbook(io.BytesIO(response.content))
        assert wb.active.cell(row=1, column=2).value == "اسم المنتج"

    def test_template_imports_one_product(self, client):
        template = client.get("/api/v1/products/template").content
        response = client.post(
            "/api/v1/products/import",
            files={"file": ("template_products.xlsx", template, XLSX_TYPE)},
        )
        assert response.status_code == 200
        assert response.json()["imported_count"] == 1


class TestImportProducts:
    """POST /api/v1/products/import"""

    def test_import_xlsx_replaces_catalog(self, client, xlsx_factory):
        raw = xlsx_factory([
            ["كود المنتج", "اسم المنتج", "السعر"],
            [1001, "بيبسي 330 مل", 2.5],
            [2001, "حليب المراعي", 6],
        ])

        response = client.post(
            "/api/v1/products/import",
            files={"file": ("catalog.xlsx", raw, XLSX_TYPE)},
        )

        assert response.status_code == 200
        result = response.json()
        assert result["replaced"] is True
        assert result["imported_count"] == 2
        assert result["columns"]["name"] == "اسم المنتج"

        items = client.get("/api/v1/products").json()["items"]
        assert [(item["code"], item["name"], item["price"]) for item in items] == [
            ("1001", "بيبسي 330 مل", "2.5"),
            ("2001", "حليب المراعي", "6"),
        ]

    def test_import_csv(self, client):
        response = client.post(
            "/api/v1/products/import",
            files={"file": ("catalog.csv", "name,brand\nLays Classic,Lays\n".encode("utf-8"), "text/csv")},
        )
        assert response.status_code == 200
        assert client.get("/api/v1/products").json()["total"] == 1

    def test_import_legacy_xls(self, client, fake_xls):
        fake_xls([["name", "brand"], ["Lays Classic", "Lays"]])

        response = client.post(
            "/api/v1/products/import",
            files={"file": ("catalog.xls", b"xls-bytes", "application/vnd.ms-excel")},
        )

        assert response.status_code == 200
        assert response.json()["imported_count"] == 1
        assert [p["name"] for p in client.get("/api/v1/products").json()["items"]] == ["Lays Classic"]

    def test_csv_labelled_as_excel_is_read_as_csv(self, client):
        response = client.post(
            "/api/v1/products/import",
            files={"file": ("catalog.csv", b"name\nPepsi\n", "application/vnd.ms-excel")},
        )
        assert response.status_code == 200
        assert response.json()["imported_count"] == 1

    def test_no_valid_products_keeps_catalog(self, client):
        response = client.post(
            "/api/v1/products/import",
            files={"file": ("catalog.csv", b"code,price\n1001,2.5\n", "text/csv")},
        )

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["code"] == "no_valid_products"
        assert detail["skipped_rows"] == [2]
        assert client.get("/api/v1/products").json()["total"] == 4

    def test_header_only_file(self, client):
        response = client.post(
            "/api/v1/products/import",
            files={"file": ("catalog.csv", b"code,name\n", "text/csv")},
        )
        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "file_empty"

    def test_unsupported_file_type(self, client):
        response = client.post(
            "/api/v1/products/import",
            files={"file": ("catalog.pdf", b"%PDF-1.4", "application/pdf")},
        )
        assert response.status_code == 400
        assert "Unsupported file type" in response.json()["detail"]

    def test_empty_upload(self, client):
        response = client.post(
            "/api/v1/products/import",
            files={"file": ("catalog.csv", b"", "text/csv")},
        )
        assert response.status_code == 400

    def test_oversized_upload(self, client, monkeypatch):
        monkeypatch.setattr(get_settings(), "MAX_UPLOAD_SIZE_BYTES", 10)
        response = client.post(
            "/api/v1/products/import",
            files={"file": ("catalog.csv", b"name\nPepsi\nLays\n", "text/csv")},
        )
        assert response.status_code == 413

    def test_missing_file(self, client):
        response = client.post("/api/v1/products/import")
        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    def test_store_failure_returns_503(self, client, catalog_state):
        from main import app

        store = MagicMock()
        store.replace_all.side_effect = CatalogStoreError("redis down")
        failing = CatalogImportService(store, catalog_state, build_default_registry())
        app.dependency_overrides[get_import_service] = lambda: failing

        response = client.post(
            "/api/v1/products/import",
            files={"file": ("catalog.csv", b"name\nPepsi\n", "text/csv")},
        )

        assert response.status_code == 503
        assert response.json()["error"] == "catalog_store_unavailable"
        assert len(catalog_state) == 4


class TestClearCatalog:
    """DELETE /api/v1/products"""

    def test_clear(self, client, memory_store):
        response = client.delete("/api/v1/products")

        assert response.status_code == 204
        assert client.get("/api/v1/products").json()["total"] == 0
        assert memory_store.get_all() == []


class TestTranslate:
    """POST /api/v1/products/{id}/translate"""

    def test_translate(self, client, fake_vision):
        response = client.post("/api/v1/products/p1/translate")

        assert response.status_code == 200
        data = response.json()
        assert data["translated"] == "مشروب غازي منعش"
        assert data["original"] == "Carbonated soft drink"
        assert data["translated_by_provider"] is True
        assert fake_vision.translate_calls == ["Carbonated soft drink"]

    def test_provider_failure_returns_original(self, client, fake_vision):
        fake_vision.error = RuntimeError("provider down")

        data = client.post("/api/v1/products/p3/translate").json()

        assert data["translated"] == "Full fat milk"
        assert data["translated_by_provider"] is False

    def test_not_found(self, client):
        assert client.post("/api/v1/products/missing/translate").status_code == 404

    @pytest.mark.parametrize("language", ["x", "toolong"])
    def test_invalid_language(self, client, language):
        response = client.post("/api/v1/products/p1/translate", params={"target_language": language})
        assert response.status_code == 422
