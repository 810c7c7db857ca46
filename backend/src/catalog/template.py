"""Catalog template workbook.

The template uses Arabic headers that resolve to every catalog field and one
sample row, so importing it unchanged yields exactly one product.
"""

import io

import openpyxl

TEMPLATE_FILENAME = "template_products.xlsx"
TEMPLATE_SHEET_TITLE = "المنتجات"

TEMPLATE_HEADERS = [
    "رمز المنتج",
    "اسم المنتج",
    "ماركة المنتج",
    "وصف المنتج",
    "سعر المنتج",
    "رابط صورة المنتج",
]

TEMPLATE_SAMPLE_ROW = [
    "1001",
    "بيبسي 330 مل",
    "بيبسي",
    "مشروب غازي منعش",
    "2.5",
    "https://example.com/pepsi.jpg",
]


def build_template_workbook() -> bytes:
    """Render the template as .xlsx bytes."""
    wb = openpyxl.Workbook()
    sheet = wb.active
    sheet.title = TEMPLATE_SHEET_TITLE
    sheet.sheet_view.rightToLeft = True
    sheet.append(TEMPLATE_HEADERS)
    sheet.append(TEMPLATE_SAMPLE_ROW)

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
