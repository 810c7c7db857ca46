"""Product match service: identify -> score -> rank.

The vision call is the only step that can fail. Any provider error is turned
into an empty description so that matching always completes; an empty
description scores near zero everywhere and usually yields no matches.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ai.ports import VisionProviderError, VisionProviderPort
from domain.catalog.models import Catalog, DetectedDescription, MatchResult
from domain.matching import DEFAULT_LIMIT, DEFAULT_THRESHOLD, find_matches
from observability.metrics import match_requests_total, match_results

logger = logging.getLogger(__name__)


@dataclass
class MatchOutcome:
    """Matches for one request plus what they were computed from."""
    detected: DetectedDescription
    matches: List[MatchResult]
    threshold: int
    limit: int
    catalog_size: int
    vision_error: Optional[str] = None


class ProductMatchService:
    """Matches product photos or descriptions against a catalog snapshot."""

    def __init__(
        self,
        vision: VisionProviderPort,
        threshold: int = DEFAULT_THRESHOLD,
        limit: int = DEFAULT_LIMIT,
    ):
        self.vision = vision
        self.threshold = threshold
        self.limit = limit

    def identify(self, image: bytes, mime_type: str = "image/jpeg") -> Tuple[DetectedDescription, Optional[str]]:
        """Describe the product in an image.

        Returns:
            Tuple of (description, error message). On provider failure the
            description is empty and the message is set.
        """
        try:
            return self.vision.identify(image, mime_type), None
        except VisionProviderError as e:
            logger.warning(f"Vision identification failed, matching on empty description: {e}")
            return DetectedDescription(), str(e)

    def match_image(
        self,
        catalog: Catalog,
        image: bytes,
        mime_type: str = "image/jpeg",
        threshold: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> MatchOutcome:
        """Identify the product in a photo and rank the catalog against it.

        Args:
            catalog: Catalog snapshot taken by the caller
            image: Raw image bytes
            mime_type: Image MIME type
            threshold: Minimum score (service default when None)
            limit: Maximum results (service default when None)

        Returns:
            MatchOutcome with the detected description and ranked matches
        """
        detected, error = self.identify(image, mime_type)
        outcome = self._match(catalog, detected, threshold, limit)
        outcome.vision_error = error
        self._record("image", outcome)
        return outcome

    def match_description(
        self,
        catalog: Catalog,
        detected: DetectedDescription,
        threshold: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> MatchOutcome:
        """Rank the catalog against an already known description."""
        outcome = self._match(catalog, detected, threshold, limit)
        self._record("description", outcome)
        return outcome

    def _match(
        self,
        catalog: Catalog,
        detected: DetectedDescription,
        threshold: Optional[int],
        limit: Optional[int],
    ) -> MatchOutcome:
        threshold = self.threshold if threshold is None else threshold
        limit = self.limit if limit is None else limit
        matches = find_matches(catalog, detected, threshold=threshold, limit=limit)
        return MatchOutcome(
            detected=detected,
            matches=matches,
            threshold=threshold,
            limit=limit,
            catalog_size=len(catalog),
        )

    def _record(self, input_type: str, outcome: MatchOutcome) -> None:
        if outcome.vision_error:
            status = "vision_error"
        elif outcome.matches:
            status = "matched"
        else:
            status = "no_match"
        match_requests_total.labels(input=input_type, status=status).inc()
        match_results.observe(len(outcome.matches))

        top = outcome.matches[0] if outcome.matches else None
        logger.info(
            f"Match ({input_type}): {len(outcome.matches)} of {outcome.catalog_size} products "
            f"cleared threshold {outcome.threshold}"
            + (f", top {top.product.id} score {top.score}" if top else "")
        )
