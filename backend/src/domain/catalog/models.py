"""Catalog domain models.

Plain dataclasses shared by ingestion, matching and the API layer. They carry no
behaviour beyond (de)serialization helpers used by the catalog store.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class Product:
    """Single catalog entry.

    Attributes:
        id: Opaque identifier generated at ingestion time
        code: Product code / SKU as written in the source sheet
        name: Product name (never empty for ingested products)
        brand: Brand or manufacturer
        description: Free-text description
        price: Price exactly as it appeared in the source (not parsed)
        image_url: Link to a product image
    """
    id: str
    code: str
    name: str
    brand: str = ""
    description: str = ""
    price: str = ""
    image_url: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Rebuild a product from its stored form.

        Accepts both ``image_url`` and the camelCase ``imageUrl`` key so that
        catalogs exported by older clients can be loaded.
        """
        return cls(
            id=str(data.get("id", "")),
            code=str(data.get("code") or ""),
            name=str(data.get("name") or ""),
            brand=str(data.get("brand") or ""),
            description=str(data.get("description") or ""),
            price=str(data.get("price") or ""),
            image_url=str(data.get("image_url") or data.get("imageUrl") or ""),
        )


# Ordered, immutable snapshot of the catalog
Catalog = Tuple[Product, ...]


@dataclass(frozen=True)
class DetectedDescription:
    """Structured description of a photographed product.

    Produced by the vision provider. The default instance (all fields empty) is
    what matching runs on when the provider is unavailable.

    Attributes:
        detected_name: Full product name read from the packaging
        detected_brand: Brand name
        category: Product category
        keywords: On-pack text fragments, mixed case and script, duplicates allowed
    """
    detected_name: str = ""
    detected_brand: str = ""
    category: str = ""
    keywords: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DetectedDescription":
        """Build a description from loosely-typed provider output.

        Non-string scalars are stringified, ``None`` becomes empty and a
        non-list ``keywords`` value is ignored.
        """
        raw_keywords = data.get("keywords") or []
        if not isinstance(raw_keywords, (list, tuple)):
            raw_keywords = []

        return cls(
            detected_name=_as_text(data.get("detectedName", data.get("detected_name"))),
            detected_brand=_as_text(data.get("detectedBrand", data.get("detected_brand"))),
            category=_as_text(data.get("category")),
            keywords=tuple(_as_text(k) for k in raw_keywords if k is not None),
        )

    def is_empty(self) -> bool:
        return not (self.detected_name or self.detected_brand or self.category or self.keywords)


@dataclass(frozen=True)
class MatchResult:
    """A catalog product paired with its relevance score for one request."""
    product: Product
    score: int


def products_to_dicts(products: List[Product]) -> List[Dict[str, str]]:
    return [p.to_dict() for p in products]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
