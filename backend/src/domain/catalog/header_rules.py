"""Header resolution for catalog spreadsheets.

Catalog sheets come from many hands: headers can be English, Arabic or a mix
("Product Name", "اسم المنتج", "SKU / رمز"). Each catalog field owns an ordered
list of candidate substrings; a header column belongs to a field when its
lower-cased, trimmed text contains any of the field's candidates.

The table is plain data so that locale-specific variants can be supplied
without touching the resolver.
"""

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

# Catalog fields in resolution order
CATALOG_FIELDS: Tuple[str, ...] = (
    "code",
    "name",
    "brand",
    "description",
    "price",
    "image_url",
)

DEFAULT_HEADER_RULES: Dict[str, Tuple[str, ...]] = {
    "code": ("code", "sku", "id", "رمز", "كود", "رقم"),
    "name": ("name", "title", "product", "اسم", "منتج"),
    "brand": ("brand", "manufacturer", "ماركة", "براند", "شركة"),
    "description": ("desc", "details", "وصف", "تفاصيل", "معلومات"),
    "price": ("price", "cost", "سعر", "ثمن", "قيمة"),
    "image_url": ("image", "url", "photo", "img", "صورة", "رابط"),
}

# Field -> column index (None when the sheet has no matching column)
ColumnMap = Dict[str, Optional[int]]


def normalize_header(value: Any) -> str:
    """Lower-case and trim a raw header cell (``None`` becomes empty)."""
    if value is None:
        return ""
    return str(value).lower().strip()


class HeaderResolver(Protocol):
    """Strategy that maps a header row to catalog field columns."""

    def resolve(self, header_row: Sequence[Any]) -> ColumnMap:
        ...


class KeywordHeaderResolver:
    """Resolve columns by substring matching against a rules table.

    For every field, in ``CATALOG_FIELDS`` order, header cells are scanned in
    column order and the first cell containing any candidate wins.

    With ``exclusive`` set (the default) a column claimed by an earlier field is
    not offered to later ones, so in ``كود المنتج`` / ``اسم المنتج`` the first
    column goes to ``code`` and the second to ``name`` even though both contain
    "منتج".

    Example:
        >>> resolver = KeywordHeaderResolver()
        >>> resolver.resolve(["كود المنتج", "اسم المنتج", "السعر"])["name"]
        1
    """

    def __init__(
        self,
        rules: Optional[Mapping[str, Sequence[str]]] = None,
        exclusive: bool = True,
    ):
        rules = DEFAULT_HEADER_RULES if rules is None else rules
        self.rules: Dict[str, Tuple[str, ...]] = {
            field: tuple(c.lower() for c in rules.get(field, ()))
            for field in CATALOG_FIELDS
        }
        self.exclusive = exclusive

    def resolve(self, header_row: Sequence[Any]) -> ColumnMap:
        headers = [normalize_header(cell) for cell in header_row]
        claimed: set = set()
        columns: ColumnMap = {}

        for field in CATALOG_FIELDS:
            index = self._find_column(headers, self.rules[field], claimed)
            columns[field] = index
            if index is not None and self.exclusive:
                claimed.add(index)

        return columns

    def _find_column(
        self,
        headers: List[str],
        candidates: Tuple[str, ...],
        claimed: set,
    ) -> Optional[int]:
        if not candidates:
            return None
        for idx, header in enumerate(headers):
            if idx in claimed or not header:
                continue
            if any(candidate in header for candidate in candidates):
                return idx
        return None


def merge_rules(
    base: Mapping[str, Sequence[str]],
    extra: Mapping[str, Sequence[str]],
) -> Dict[str, Tuple[str, ...]]:
    """Extend a rules table with additional candidates.

    Candidates from ``base`` keep their priority; new candidates from ``extra``
    are appended after them, duplicates dropped.
    """
    merged: Dict[str, Tuple[str, ...]] = {}
    for field in CATALOG_FIELDS:
        seen = list(base.get(field, ()))
        for candidate in extra.get(field, ()):
            if candidate not in seen:
                seen.append(candidate)
        merged[field] = tuple(seen)
    return merged
