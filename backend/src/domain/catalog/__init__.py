"""Catalog domain: product model, header policy and grid ingestion."""

from .models import Catalog, DetectedDescription, MatchResult, Product
from .header_rules import (
    CATALOG_FIELDS,
    DEFAULT_HEADER_RULES,
    HeaderResolver,
    KeywordHeaderResolver,
    merge_rules,
)
from .ingestion import (
    UNKNOWN_PRODUCT_NAMES,
    IngestionReport,
    cell_to_string,
    ingest,
    ingest_grid,
)
from .ports import (
    CatalogError,
    CatalogImportError,
    CatalogStoreError,
    CatalogStorePort,
    RemoteSourceError,
    TabularReaderPort,
)

__all__ = [
    "Catalog",
    "DetectedDescription",
    "MatchResult",
    "Product",
    "CATALOG_FIELDS",
    "DEFAULT_HEADER_RULES",
    "HeaderResolver",
    "KeywordHeaderResolver",
    "merge_rules",
    "UNKNOWN_PRODUCT_NAMES",
    "IngestionReport",
    "cell_to_string",
    "ingest",
    "ingest_grid",
    "CatalogError",
    "CatalogImportError",
    "CatalogStoreError",
    "CatalogStorePort",
    "RemoteSourceError",
    "TabularReaderPort",
]
