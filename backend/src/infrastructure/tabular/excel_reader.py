"""Excel reader - turns .xlsx workbooks into a raw cell grid.

Reads the first worksheet with openpyxl (read-only, cached values instead of
formulas). Cells keep their native type (str, int, float, datetime, None);
coercion to text is left to ingestion.
"""

import io
import logging
import zipfile
from typing import Any, List

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from domain.catalog.ports import CatalogImportError, TabularReaderPort

logger = logging.getLogger(__name__)


class ExcelReader(TabularReaderPort):
    """Excel workbook reader (.xlsx, .xlsm).

    Features:
    - First worksheet only (catalog sheets carry one table)
    - Blank rows are kept so grid positions match sheet row numbers
    - Trailing empty cells are kept so column indexes stay aligned
    """

    name = "excel"
    EXTENSIONS = ('.xlsx', '.xlsm')
    MIME_TYPES = (
        'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        'application/vnd.ms-excel.sheet.macroenabled.12',
    )

    def supports(self, filename: str, mime_type: str = "") -> bool:
        if filename and filename.lower().endswith(self.EXTENSIONS):
            return True
        return (mime_type or "").lower() in self.MIME_TYPES

    def read_grid(self, file_bytes: bytes) -> List[List[Any]]:
        """Parse workbook bytes into rows of raw cells.

        Args:
            file_bytes: Raw .xlsx bytes

        Returns:
            One row per sheet row, blank rows included

        Raises:
            CatalogImportError: If the workbook cannot be opened
        """
        try:
            wb = openpyxl.load_workbook(io.BytesIO(file_bytes), read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
            raise CatalogImportError(f"Invalid Excel file: {e}") from e

        try:
            if not wb.worksheets:
                raise CatalogImportError("Excel file has no worksheets")

            sheet = wb.worksheets[0]
            logger.info(f"Reading catalog sheet: {sheet.title}")

            return [list(row or ()) for row in sheet.iter_rows(values_only=True)]
        finally:
            wb.close()
