"""Catalog import service.

Reads an uploaded or fetched spreadsheet into a grid, ingests it and, when it
yields at least one product, replaces the catalog in the store and in the
in-process snapshot.
"""

import logging
from typing import Optional, Sequence

from domain.catalog.header_rules import HeaderResolver
from domain.catalog.ingestion import IngestionReport, ingest_grid
from domain.catalog.models import Product
from domain.catalog.ports import (
    CatalogImportError,
    CatalogStoreError,
    CatalogStorePort,
    RemoteSourceError,
)
from infrastructure.tabular.registry import TabularReaderRegistry
from infrastructure.tabular.remote_source import RemoteCatalogSource
from observability.metrics import catalog_imports_total

from .schemas import CatalogImportResult
from .state import CatalogState

logger = logging.getLogger(__name__)


class CatalogImportService:
    """Service for importing and replacing the product catalog"""

    def __init__(
        self,
        store: CatalogStorePort,
        state: CatalogState,
        registry: TabularReaderRegistry,
        resolver: Optional[HeaderResolver] = None,
    ):
        self.store = store
        self.state = state
        self.registry = registry
        self.resolver = resolver

    def import_file(
        self,
        file_bytes: bytes,
        filename: str,
        mime_type: str = "",
        source: str = "upload",
    ) -> CatalogImportResult:
        """Import a catalog file.

        A file without data rows, or whose rows all lack a product name, leaves
        the current catalog untouched; ``replaced`` is False in that case.

        Args:
            file_bytes: Raw file bytes
            filename: Original filename (selects the reader)
            mime_type: MIME type reported by the client
            source: "upload" or "remote" (metrics label)

        Returns:
            CatalogImportResult with counts and resolved columns

        Raises:
            CatalogImportError: If the file type is unsupported or unreadable
            CatalogStoreError: If the store cannot be written
        """
        if not file_bytes:
            catalog_imports_total.labels(source=source, status="error").inc()
            raise CatalogImportError("File is empty")

        try:
            grid = self.registry.read(filename, file_bytes, mime_type)
        except CatalogImportError:
            catalog_imports_total.labels(source=source, status="error").inc()
            raise

        report = ingest_grid(grid, self.resolver)
        result = self._build_result(report, filename, source)

        if not report.products:
            catalog_imports_total.labels(source=source, status="empty").inc()
            logger.warning(
                f"Catalog import from {filename!r} produced no products "
                f"({report.data_rows} data rows, {len(report.skipped_rows)} skipped)"
            )
            return result

        self.replace_catalog(report.products)
        result.replaced = True
        catalog_imports_total.labels(source=source, status="success").inc()
        logger.info(
            f"Catalog imported from {filename!r}: {result.imported_count} products, "
            f"{result.skipped_count} rows skipped"
        )
        return result

    def replace_catalog(self, products: Sequence[Product]) -> None:
        """Write the catalog through the store, then swap the snapshot.

        Raises:
            CatalogStoreError: If the store cannot be written (snapshot unchanged)
        """
        self.store.replace_all(products)
        self.state.replace(products)

    def clear(self) -> None:
        """Replace the catalog with an empty one."""
        self.replace_catalog([])
        logger.info("Catalog cleared")

    def load_initial_catalog(self, remote: Optional[RemoteCatalogSource] = None) -> str:
        """Populate the snapshot at startup.

        The remote file wins when it yields products; otherwise the catalog is
        read back from the store.

        Returns:
            "remote", "store" or "empty" depending on where the catalog came from
        """
        if remote is not None:
            try:
                result = self.import_file(remote.fetch(), remote.filename, source="remote")
                if result.replaced:
                    return "remote"
            except RemoteSourceError as e:
                catalog_imports_total.labels(source="remote", status="error").inc()
                logger.warning(f"Remote catalog unavailable, using stored catalog: {e}")
            except CatalogImportError as e:
                logger.warning(f"Remote catalog unreadable, using stored catalog: {e}")
            except CatalogStoreError as e:
                logger.error(f"Failed to store remote catalog: {e}")

        try:
            products = self.store.get_all()
        except CatalogStoreError as e:
            logger.error(f"Failed to load stored catalog, starting empty: {e}")
            products = []

        self.state.replace(products)
        if products:
            logger.info(f"Loaded {len(products)} products from catalog store")
            return "store"
        return "empty"

    def _build_result(
        self,
        report: IngestionReport,
        filename: str,
        source: str,
    ) -> CatalogImportResult:
        header_row = report.header
        columns = {}
        for field_name, index in report.columns.items():
            if index is None or index >= len(header_row) or header_row[index] is None:
                columns[field_name] = None
            else:
                columns[field_name] = str(header_row[index]).strip()

        return CatalogImportResult(
            source=source,
            filename=filename,
            data_rows=report.data_rows,
            imported_count=len(report.products),
            skipped_count=len(report.skipped_rows),
            skipped_rows=report.skipped_rows,
            columns=columns,
        )
