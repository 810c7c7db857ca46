"""Catalog application layer: snapshot, import, template and translation.

The API router lives in ``catalog.router`` and is mounted by ``main``.
"""

from .import_service import CatalogImportService
from .schemas import (
    CatalogImportResult,
    ProductListResponse,
    ProductResponse,
    TranslationResponse,
)
from .state import CatalogState
from .template import TEMPLATE_FILENAME, build_template_workbook
from .translation import translate_description

__all__ = [
    "CatalogImportService",
    "CatalogImportResult",
    "ProductListResponse",
    "ProductResponse",
    "TranslationResponse",
    "CatalogState",
    "TEMPLATE_FILENAME",
    "build_template_workbook",
    "translate_description",
]
