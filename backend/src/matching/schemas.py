"""Pydantic schemas for matching endpoints."""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from catalog.schemas import ProductResponse
from domain.catalog.models import DetectedDescription


class DetectedDescriptionSchema(BaseModel):
    """Structured description of a photographed product.

    Accepts the camelCase keys (``detectedName``, ``detectedBrand``) used by
    vision model output as well as the snake_case field names.
    """
    detected_name: str = Field(
        "",
        validation_alias=AliasChoices("detected_name", "detectedName"),
        description="Full product name read from the packaging",
    )
    detected_brand: str = Field(
        "",
        validation_alias=AliasChoices("detected_brand", "detectedBrand"),
    )
    category: str = ""
    keywords: List[str] = Field(default_factory=list, description="On-pack text fragments (Arabic and English)")

    def to_domain(self) -> DetectedDescription:
        return DetectedDescription(
            detected_name=self.detected_name,
            detected_brand=self.detected_brand,
            category=self.category,
            keywords=tuple(self.keywords),
        )

    @classmethod
    def from_domain(cls, detected: DetectedDescription) -> "DetectedDescriptionSchema":
        return cls(
            detected_name=detected.detected_name,
            detected_brand=detected.detected_brand,
            category=detected.category,
            keywords=list(detected.keywords),
        )


class MatchCandidateSchema(BaseModel):
    """Catalog product with its relevance score."""
    product: ProductResponse
    score: int = Field(ge=0)


class MatchResponse(BaseModel):
    """Result of a match request.

    An empty ``matches`` list means no catalog product cleared the threshold.
    """
    detected: DetectedDescriptionSchema
    vision_error: Optional[str] = Field(None, description="Set when identification failed and matching ran on an empty description")
    catalog_size: int
    threshold: int
    limit: int
    matches: List[MatchCandidateSchema]
