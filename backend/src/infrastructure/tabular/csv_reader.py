"""CSV reader - turns CSV catalog files into a raw cell grid.

Handles encoding detection (chardet) and separator detection (comma,
semicolon, tab, pipe). Cells are returned as strings exactly as written.
"""

import csv
import io
import logging
from typing import Any, List

from domain.catalog.ports import CatalogImportError, TabularReaderPort

from .format_detector import detect_encoding, detect_separator

logger = logging.getLogger(__name__)


class CSVReader(TabularReaderPort):
    """CSV catalog reader.

    Features:
    - Encoding detection (UTF-8 with or without BOM, windows-1256, ISO-8859-1)
    - Automatic separator detection
    - RFC 4180 compliant parsing (quoted values, escaping)
    - Blank lines are kept as empty rows so grid positions match line numbers
    """

    name = "csv"
    EXTENSIONS = ('.csv', '.txt')
    MIME_TYPES = ('text/csv', 'application/csv', 'text/plain')

    def supports(self, filename: str, mime_type: str = "") -> bool:
        if filename and filename.lower().endswith(self.EXTENSIONS):
            return True
        return (mime_type or "").lower() in self.MIME_TYPES

    def read_grid(self, file_bytes: bytes) -> List[List[Any]]:
        """Parse CSV bytes into rows of string cells.

        Args:
            file_bytes: Raw CSV file bytes

        Returns:
            One row per sheet row, blank rows included

        Raises:
            CatalogImportError: If the bytes cannot be decoded or parsed
        """
        encoding = detect_encoding(file_bytes)
        try:
            text = file_bytes.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.warning(f"Decoding with {encoding} failed, falling back to utf-8 with replacement")
            text = file_bytes.decode('utf-8', errors='replace')

        delimiter = detect_separator(text.splitlines()[:10])
        logger.debug(f"CSV encoding={encoding}, delimiter={delimiter!r}")

        try:
            reader = csv.reader(io.StringIO(text), delimiter=delimiter)
            rows = list(reader)
        except csv.Error as e:
            raise CatalogImportError(f"Invalid CSV file: {e}") from e

        return rows
