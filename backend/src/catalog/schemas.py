"""Pydantic schemas for catalog domain (products, imports)"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from domain.catalog.models import Product


class ProductResponse(BaseModel):
    """Schema for Product response"""
    id: str
    code: str = ""
    name: str
    brand: str = ""
    description: str = ""
    price: str = ""
    image_url: str = ""

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(**product.to_dict())


class ProductListResponse(BaseModel):
    """Paginated product list"""
    items: List[ProductResponse]
    total: int
    limit: int
    offset: int


class CatalogImportResult(BaseModel):
    """Schema for catalog import result"""
    source: str = Field(..., description="upload or remote")
    filename: Optional[str] = None
    data_rows: int = Field(0, description="Data rows in the file (header excluded)")
    imported_count: int = 0
    skipped_count: int = 0
    skipped_rows: List[int] = Field(default_factory=list, description="1-based sheet row numbers without a product name")
    columns: Dict[str, Optional[str]] = Field(
        default_factory=dict,
        description="Catalog field -> source header used (null when no column matched)",
    )
    replaced: bool = Field(False, description="True when the active catalog was replaced")


class TranslationResponse(BaseModel):
    """Translated product description"""
    product_id: str
    target_language: str
    original: str
    translated: str
    translated_by_provider: bool
