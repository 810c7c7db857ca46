"""Tabular reader registry - selects a grid reader for an incoming file.

Registry pattern over TabularReaderPort implementations. Selection is by file
extension first, then by MIME type.
"""

import logging
from typing import List, Optional

from domain.catalog.ports import CatalogImportError, TabularReaderPort

from .csv_reader import CSVReader
from .excel_reader import ExcelReader
from .xls_reader import XlsReader

logger = logging.getLogger(__name__)


class TabularReaderRegistry:
    """Registry for managing available tabular readers.

    Example:
        registry = TabularReaderRegistry()
        registry.register(ExcelReader())
        registry.register(CSVReader())

        grid = registry.read("products.xlsx", file_bytes)
    """

    def __init__(self):
        """Initialize empty registry."""
        self._readers: List[TabularReaderPort] = []

    def register(self, reader: TabularReaderPort) -> None:
        """Register a reader.

        Raises:
            ValueError: If reader is None
        """
        if reader is None:
            raise ValueError("Cannot register None as reader")

        self._readers.append(reader)
        logger.debug(f"Registered tabular reader: {reader.name}")

    def get_reader(self, filename: str, mime_type: str = "") -> Optional[TabularReaderPort]:
        """Get the first registered reader supporting the file.

        Every reader is tried on the extension before any is tried on the
        MIME type, since clients often label .csv files as
        ``application/vnd.ms-excel``.

        Args:
            filename: Original filename (extension is checked)
            mime_type: MIME type reported by the client

        Returns:
            TabularReaderPort instance or None if the format is unsupported
        """
        if filename:
            for reader in self._readers:
                if reader.supports(filename, ""):
                    return reader

        if mime_type:
            for reader in self._readers:
                if reader.supports("", mime_type):
                    return reader

        logger.warning(f"No tabular reader for file={filename!r} mime_type={mime_type!r}")
        return None

    def read(self, filename: str, file_bytes: bytes, mime_type: str = "") -> List[list]:
        """Read a file into a grid with the matching reader.

        Raises:
            CatalogImportError: If the format is unsupported or unreadable
        """
        reader = self.get_reader(filename, mime_type)
        if reader is None:
            raise CatalogImportError(
                f"Unsupported file type: {filename or mime_type or 'unknown'}. "
                f"Supported: {', '.join(self.supported_extensions())}"
            )
        return reader.read_grid(file_bytes)

    def supported_extensions(self) -> List[str]:
        extensions: List[str] = []
        for reader in self._readers:
            for ext in getattr(reader, "EXTENSIONS", ()):
                if ext not in extensions:
                    extensions.append(ext)
        return extensions

    def __len__(self) -> int:
        return len(self._readers)


def build_default_registry() -> TabularReaderRegistry:
    """Registry with the Excel (.xlsx and .xls) and CSV readers."""
    registry = TabularReaderRegistry()
    registry.register(ExcelReader())
    registry.register(XlsReader())
    registry.register(CSVReader())
    return registry
