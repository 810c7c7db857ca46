"""Legacy Excel reader - turns .xls (BIFF) workbooks into a raw cell grid.

Reads the first worksheet with xlrd. Cells are converted to the same native
types the .xlsx reader yields: text stays str, numbers stay float, dates
become datetime, booleans become bool and empty cells become None.
"""

import logging
from typing import Any, List

import xlrd
from xlrd.compdoc import CompDocError

from domain.catalog.ports import CatalogImportError, TabularReaderPort

logger = logging.getLogger(__name__)


class XlsReader(TabularReaderPort):
    """Legacy Excel workbook reader (.xls).

    Features:
    - First worksheet only
    - Blank rows are kept so grid positions match sheet row numbers
    - Date cells are decoded with the workbook's date mode
    """

    name = "xls"
    EXTENSIONS = ('.xls',)
    MIME_TYPES = ('application/vnd.ms-excel',)

    def supports(self, filename: str, mime_type: str = "") -> bool:
        if filename and filename.lower().endswith(self.EXTENSIONS):
            return True
        return (mime_type or "").lower() in self.MIME_TYPES

    def read_grid(self, file_bytes: bytes) -> List[List[Any]]:
        """Parse .xls bytes into rows of raw cells.

        Raises:
            CatalogImportError: If the workbook cannot be opened
        """
        try:
            book = xlrd.open_workbook(file_contents=file_bytes, on_demand=True)
        except (xlrd.XLRDError, CompDocError, ValueError, OSError) as e:
            raise CatalogImportError(f"Invalid Excel file: {e}") from e

        try:
            if book.nsheets == 0:
                raise CatalogImportError("Excel file has no worksheets")

            sheet = book.sheet_by_index(0)
            logger.info(f"Reading catalog sheet: {sheet.name}")

            return [
                [
                    _cell_value(cell_type, value, book.datemode)
                    for cell_type, value in zip(sheet.row_types(index), sheet.row_values(index))
                ]
                for index in range(sheet.nrows)
            ]
        finally:
            book.release_resources()


def _cell_value(cell_type: int, value: Any, datemode: int) -> Any:
    if cell_type in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell_type == xlrd.XL_CELL_DATE:
        try:
            return xlrd.xldate.xldate_as_datetime(value, datemode)
        except xlrd.xldate.XLDateError:
            return value
    if cell_type == xlrd.XL_CELL_BOOLEAN:
        return bool(value)
    if cell_type == xlrd.XL_CELL_ERROR:
        return None
    return value
