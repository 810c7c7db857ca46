"""Pytest fixtures for ProductLens tests.

Provides reusable test fixtures for:
- A small bilingual sample catalog
- In-memory catalog store and snapshot
- A scriptable fake vision/translation provider
- A fake xlrd workbook for legacy .xls uploads
- A FastAPI TestClient wired to the fakes through dependency overrides

Usage:
    def test_list_products(client):
        response = client.get("/api/v1/products")
        assert response.status_code == 200
"""

import io
import os
import sys
from pathlib import Path
from typing import List, Optional

# Set environment variables BEFORE any imports to ensure they take effect
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("CATALOG_STORE_BACKEND", "memory")
os.environ["OPENAI_API_KEY"] = ""

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

import openpyxl
import pytest
import xlrd
from fastapi.testclient import TestClient

from ai.ports import (
    TranslationProviderError,
    TranslationProviderPort,
    VisionProviderPort,
)
from catalog.import_service import CatalogImportService
from catalog.state import CatalogState
from domain.catalog.models import DetectedDescription, Product
from infrastructure.storage.catalog_store import InMemoryCatalogStore
from infrastructure.tabular import xls_reader
from infrastructure.tabular.registry import build_default_registry
from matching.service import ProductMatchService


class FakeVisionProvider(VisionProviderPort, TranslationProviderPort):
    """Vision/translation provider returning canned results.

    Set ``error`` to make every call raise it instead.
    """

    name = "fake"

    def __init__(
        self,
        detected: Optional[DetectedDescription] = None,
        translation: str = "",
        error: Optional[Exception] = None,
    ):
        self.detected = detected or DetectedDescription()
        self.translation = translation
        self.error = error
        self.identify_calls: List[bytes] = []
        self.translate_calls: List[str] = []

    def identify(self, image: bytes, mime_type: str = "image/jpeg") -> DetectedDescription:
        self.identify_calls.append(image)
        if self.error is not None:
            raise self.error
        return self.detected

    def translate(self, text: str, target_language: str = "ar") -> str:
        self.translate_calls.append(text)
        if self.error is not None:
            raise TranslationProviderError(str(self.error))
        return self.translation


def make_xlsx(rows: List[list], title: str = "Sheet1") -> bytes:
    """Build an .xlsx file in memory from a list of rows."""
    wb = openpyxl.Workbook()
    sheet = wb.active
    sheet.title = title
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def sample_products() -> List[Product]:
    """Small catalog mixing English and Arabic entries"""
    return [
        Product(id="p1", code="1001", name="Pepsi 330ml", brand="Pepsi", description="Carbonated soft drink", price="2.5"),
        Product(id="p2", code="1002", name="بيبسي 330 مل", brand="بيبسي", description="مشروب غازي", price="2.5"),
        Product(id="p3", code="2001", name="Almarai Fresh Milk 1L", brand="Almarai", description="Full fat milk", price="6"),
        Product(id="p4", code="3001", name="Lays Classic Chips", brand="Lays", description="Salted potato chips", price="1.75"),
    ]


@pytest.fixture
def memory_store(sample_products) -> InMemoryCatalogStore:
    return InMemoryCatalogStore(sample_products)


@pytest.fixture
def catalog_state(sample_products) -> CatalogState:
    return CatalogState(sample_products)


@pytest.fixture
def fake_vision() -> FakeVisionProvider:
    return FakeVisionProvider(
        detected=DetectedDescription(
            detected_name="Pepsi 330ml",
            detected_brand="Pepsi",
            category="Beverages",
            keywords=("pepsi", "بيبسي"),
        ),
        translation="مشروب غازي منعش",
    )


@pytest.fixture
def import_service(memory_store, catalog_state) -> CatalogImportService:
    return CatalogImportService(
        store=memory_store,
        state=catalog_state,
        registry=build_default_registry(),
    )


@pytest.fixture
def match_service(fake_vision) -> ProductMatchService:
    return ProductMatchService(vision=fake_vision, threshold=15, limit=5)


@pytest.fixture
def client(memory_store, catalog_state, fake_vision, import_service, match_service):
    """TestClient with every service dependency replaced by a fake.

    The lifespan runs, so the catalog is reloaded from ``memory_store`` on
    startup exactly as in production.
    """
    import dependencies
    from main import app

    overrides = {
        dependencies.get_catalog_store: lambda: memory_store,
        dependencies.get_catalog_state: lambda: catalog_state,
        dependencies.get_vision_provider: lambda: fake_vision,
        dependencies.get_translation_provider: lambda: fake_vision,
        dependencies.get_import_service: lambda: import_service,
        dependencies.get_match_service: lambda: match_service,
        dependencies.get_remote_catalog_source: lambda: None,
    }
    app.dependency_overrides.update(overrides)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def xlsx_factory():
    """Callable building .xlsx bytes from rows"""
    return make_xlsx


@pytest.fixture
def vision_factory():
    """FakeVisionProvider class, for tests that need a differently scripted provider"""
    return FakeVisionProvider


class FakeXlsSheet:
    def __init__(self, rows):
        self.name = "Sheet1"
        self._rows = rows
        self.nrows = len(rows)

    def row_types(self, index):
        return [cell_type for cell_type, _ in self._rows[index]]

    def row_values(self, index):
        return [value for _, value in self._rows[index]]


class FakeXlsBook:
    """Stand-in for an xlrd Book with a single sheet."""

    def __init__(self, rows, nsheets=1):
        self.nsheets = nsheets
        self.datemode = 0
        self.released = False
        self._sheet = FakeXlsSheet(rows)

    def sheet_by_index(self, index):
        return self._sheet

    def release_resources(self):
        self.released = True


def xls_cell(value):
    """(xlrd cell type, value) for a plain value; typed tuples pass through."""
    if isinstance(value, tuple):
        return value
    if value is None:
        return (xlrd.XL_CELL_EMPTY, "")
    if isinstance(value, str):
        return (xlrd.XL_CELL_TEXT, value)
    if isinstance(value, bool):
        return (xlrd.XL_CELL_BOOLEAN, int(value))
    return (xlrd.XL_CELL_NUMBER, float(value))


@pytest.fixture
def fake_xls(monkeypatch):
    """Make xlrd open a fake workbook built from rows of cells.

    Cells are plain values or ``(xlrd cell type, value)`` tuples.
    """
    def install(rows, nsheets=1):
        book = FakeXlsBook([[xls_cell(value) for value in row] for row in rows], nsheets)
        monkeypatch.setattr(xls_reader.xlrd, "open_workbook", lambda **kwargs: book)
        return book
    return install
