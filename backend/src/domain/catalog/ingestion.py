"""Catalog ingestion: raw tabular grid -> canonical products.

A grid is a list of rows as produced by a spreadsheet or CSV reader, one row
per sheet row. The first non-blank row is the header row; every following
non-blank row is a data row. Cells may be strings, numbers, dates or ``None``
and are coerced with ``cell_to_string``.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence

from .header_rules import CATALOG_FIELDS, ColumnMap, HeaderResolver, KeywordHeaderResolver
from .models import Product

# Names that stand for "no name" in catalog sheets and exported catalogs
UNKNOWN_PRODUCT_NAMES = frozenset({"Unknown", "منتج غير معروف"})

Grid = Sequence[Sequence[Any]]


@dataclass
class IngestionReport:
    """Outcome of ingesting one grid.

    Attributes:
        products: Kept products in source row order
        header: Raw header row
        columns: Resolved column index per catalog field
        data_rows: Number of non-blank data rows seen (header excluded)
        skipped_rows: 1-based sheet row numbers dropped for a missing name
    """
    products: List[Product] = field(default_factory=list)
    header: List[Any] = field(default_factory=list)
    columns: ColumnMap = field(default_factory=dict)
    data_rows: int = 0
    skipped_rows: List[int] = field(default_factory=list)


def cell_to_string(value: Any) -> str:
    """Coerce a raw cell value to text.

    Mapping:
        - ``None`` -> ``""``
        - ``str`` -> unchanged
        - ``bool`` -> ``"true"`` / ``"false"``
        - integral ``float`` (``1001.0``) -> ``"1001"``
        - other numbers -> ``str(value)``
        - ``datetime`` / ``date`` / ``time`` -> ISO 8601
        - anything else -> ``str(value)``
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, (int, Decimal)):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def generate_product_id() -> str:
    return uuid.uuid4().hex


def ingest_grid(
    grid: Grid,
    resolver: Optional[HeaderResolver] = None,
    id_factory: Callable[[], str] = generate_product_id,
) -> IngestionReport:
    """Turn a header + data rows grid into catalog products.

    Fully blank rows are ignored without being counted, but they keep their
    place in the row numbering. A grid without a data row below the header
    yields an empty report. Rows whose resolved name is blank or one of
    ``UNKNOWN_PRODUCT_NAMES`` are skipped; every kept row gets a fresh id
    from ``id_factory``.

    Args:
        grid: Rows of raw cells, row 0 being the header row
        resolver: Header resolution strategy (keyword rules by default)
        id_factory: Callable producing unique product ids

    Returns:
        IngestionReport with products in source order
    """
    resolver = resolver or KeywordHeaderResolver()
    report = IngestionReport()

    numbered = [
        (row_number, row)
        for row_number, row in enumerate(grid or [], start=1)
        if not is_blank_row(row)
    ]
    if len(numbered) < 2:
        return report

    report.header = list(numbered[0][1])
    report.columns = resolver.resolve(report.header)

    for row_number, row in numbered[1:]:
        report.data_rows += 1
        values = _map_row(row or [], report.columns)

        name = values["name"]
        if not name.strip() or name.strip() in UNKNOWN_PRODUCT_NAMES:
            report.skipped_rows.append(row_number)
            continue

        report.products.append(Product(id=id_factory(), **values))

    return report


def ingest(grid: Grid, resolver: Optional[HeaderResolver] = None) -> List[Product]:
    """Shortcut for ``ingest_grid(grid, resolver).products``."""
    return ingest_grid(grid, resolver).products


def is_blank_row(row: Optional[Sequence[Any]]) -> bool:
    """True when every cell is ``None`` or whitespace-only text."""
    if not row:
        return True
    return all(cell is None or (isinstance(cell, str) and not cell.strip()) for cell in row)


def _map_row(row: Sequence[Any], columns: ColumnMap) -> Dict[str, str]:
    values = {}
    for field_name in CATALOG_FIELDS:
        index = columns.get(field_name)
        if index is None or index >= len(row):
            values[field_name] = ""
        else:
            values[field_name] = cell_to_string(row[index])
    return values
