"""Unit tests for CSV/Excel grid readers and format detection"""

from datetime import datetime

import pytest
import xlrd

from domain.catalog.ports import CatalogImportError
from infrastructure.tabular.csv_reader import CSVReader
from infrastructure.tabular.excel_reader import ExcelReader
from infrastructure.tabular.format_detector import detect_encoding, detect_separator
from infrastructure.tabular.xls_reader import XlsReader


class TestDetectEncoding:
    """Test encoding detection"""

    def test_utf8_bom(self):
        assert detect_encoding(b"\xef\xbb\xbfname\nPepsi\n") == "utf-8-sig"

    def test_utf8_arabic(self):
        assert detect_encoding("اسم المنتج\nبيبسي\n".encode("utf-8")) == "utf-8"

    def test_legacy_arabic_is_decodable(self):
        raw = "اسم المنتج,السعر\nبيبسي 330 مل,2.5\nحليب المراعي,6\n".encode("windows-1256")
        encoding = detect_encoding(raw)
        raw.decode(encoding)


class TestDetectSeparator:
    """Test separator detection"""

    def test_comma(self):
        assert detect_separator(["code,name,price", "1,Pepsi,2.5"]) == ","

    def test_semicolon(self):
        assert detect_separator(["code;name;price", "1;Pepsi;2,5"]) == ";"

    def test_tab(self):
        assert detect_separator(["code\tname", "1\tPepsi"]) == "\t"

    def test_default_comma(self):
        assert detect_separator(["name", "Pepsi"]) == ","


class TestCSVReader:
    """Test CSVReader"""

    def test_supports(self):
        reader = CSVReader()
        assert reader.supports("products.csv")
        assert reader.supports("PRODUCTS.CSV")
        assert reader.supports("export", "text/csv")
        assert not reader.supports("products.xlsx")

    def test_reads_arabic_utf8(self):
        raw = "كود المنتج,اسم المنتج,السعر\n1001,بيبسي 330 مل,2.5\n".encode("utf-8")
        grid = CSVReader().read_grid(raw)
        assert grid == [["كود المنتج", "اسم المنتج", "السعر"], ["1001", "بيبسي 330 مل", "2.5"]]

    def test_reads_bom_and_semicolons(self):
        raw = b"\xef\xbb\xbf" + b"code;name;price\n1001;Pepsi;2,5\n"
        grid = CSVReader().read_grid(raw)
        assert grid[0] == ["code", "name", "price"]
        assert grid[1] == ["1001", "Pepsi", "2,5"]

    def test_quoted_values(self):
        raw = b'name,description\n"Lays, Classic","Salted ""original"" chips"\n'
        grid = CSVReader().read_grid(raw)
        assert grid[1] == ["Lays, Classic", 'Salted "original" chips']

    def test_blank_lines_keep_their_position(self):
        raw = b"name\n\nPepsi\n,\nLays\n"
        assert CSVReader().read_grid(raw) == [["name"], [], ["Pepsi"], ["", ""], ["Lays"]]


class TestExcelReader:
    """Test ExcelReader"""

    def test_supports(self):
        reader = ExcelReader()
        assert reader.supports("catalog.xlsx")
        assert reader.supports("catalog.XLSM")
        assert reader.supports(
            "upload", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert not reader.supports("catalog.csv")
        assert not reader.supports("catalog.xls")

    def test_reads_first_sheet_with_native_types(self, xlsx_factory):
        raw = xlsx_factory([
            ["كود المنتج", "اسم المنتج", "السعر", "تاريخ"],
            [1001, "بيبسي 330 مل", 2.5, datetime(2024, 1, 31)],
        ])
        grid = ExcelReader().read_grid(raw)

        assert grid[0] == ["كود المنتج", "اسم المنتج", "السعر", "تاريخ"]
        assert grid[1][0] == 1001
        assert grid[1][1] == "بيبسي 330 مل"
        assert grid[1][2] == 2.5
        assert grid[1][3] == datetime(2024, 1, 31)

    def test_blank_rows_keep_their_position(self, xlsx_factory):
        raw = xlsx_factory([["name"], [None], ["Pepsi"], ["   "], ["Lays"]])
        grid = ExcelReader().read_grid(raw)

        assert len(grid) == 5
        assert grid[0][0] == "name"
        assert grid[2][0] == "Pepsi"
        assert grid[4][0] == "Lays"
        assert all(cell is None for cell in grid[1])

    def test_invalid_workbook(self):
        with pytest.raises(CatalogImportError):
            ExcelReader().read_grid(b"this is not a zip file")


class TestXlsReader:
    """Test XlsReader"""

    def test_supports(self):
        reader = XlsReader()
        assert reader.supports("catalog.xls")
        assert reader.supports("CATALOG.XLS")
        assert reader.supports("upload", "application/vnd.ms-excel")
        assert not reader.supports("catalog.xlsx")
        assert not reader.supports("catalog.csv")

    def test_reads_first_sheet_with_native_types(self, fake_xls):
        book = fake_xls([
            [(xlrd.XL_CELL_TEXT, "كود المنتج"), (xlrd.XL_CELL_TEXT, "اسم المنتج"),
             (xlrd.XL_CELL_TEXT, "متوفر"), (xlrd.XL_CELL_TEXT, "تاريخ")],
            [(xlrd.XL_CELL_NUMBER, 1001.0), (xlrd.XL_CELL_TEXT, "بيبسي 330 مل"),
             (xlrd.XL_CELL_BOOLEAN, 1), (xlrd.XL_CELL_DATE, 45322.0)],
        ])

        grid = XlsReader().read_grid(b"xls-bytes")

        assert grid[0] == ["كود المنتج", "اسم المنتج", "متوفر", "تاريخ"]
        assert grid[1] == [1001.0, "بيبسي 330 مل", True, datetime(2024, 1, 31)]
        assert book.released is True

    def test_empty_and_error_cells_become_none(self, fake_xls):
        fake_xls([
            [(xlrd.XL_CELL_TEXT, "name"), (xlrd.XL_CELL_TEXT, "price")],
            [(xlrd.XL_CELL_BLANK, ""), (xlrd.XL_CELL_ERROR, 0x07)],
        ])
        assert XlsReader().read_grid(b"xls-bytes")[1] == [None, None]

    def test_blank_rows_keep_their_position(self, fake_xls):
        fake_xls([["name"], [None], ["Pepsi"]])
        grid = XlsReader().read_grid(b"xls-bytes")
        assert grid == [["name"], [None], ["Pepsi"]]

    def test_no_worksheets(self, fake_xls):
        fake_xls([], nsheets=0)
        with pytest.raises(CatalogImportError, match="no worksheets"):
            XlsReader().read_grid(b"xls-bytes")

    def test_invalid_workbook(self):
        with pytest.raises(CatalogImportError):
            XlsReader().read_grid(b"this is not an xls file")

    def test_xlsx_bytes_are_rejected(self, xlsx_factory):
        with pytest.raises(CatalogImportError):
            XlsReader().read_grid(xlsx_factory([["name"], ["Pepsi"]]))
