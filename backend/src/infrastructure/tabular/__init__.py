"""Tabular source adapters: Excel/CSV grid readers and remote catalog fetch."""

from .csv_reader import CSVReader
from .excel_reader import ExcelReader
from .xls_reader import XlsReader
from .registry import TabularReaderRegistry, build_default_registry
from .remote_source import RemoteCatalogSource

__all__ = [
    "CSVReader",
    "ExcelReader",
    "TabularReaderRegistry",
    "build_default_registry",
    "RemoteCatalogSource",
    "XlsReader",
]
