"""Matching domain: product scoring and ranking.

Both steps are pure functions over in-memory data. Callers pass an immutable
catalog snapshot per request.
"""

from typing import Iterable, List

from domain.catalog.models import DetectedDescription, MatchResult, Product
from .scorer import score, score_catalog
from .ranker import DEFAULT_LIMIT, DEFAULT_THRESHOLD, rank


def find_matches(
    catalog: Iterable[Product],
    detected: DetectedDescription,
    threshold: int = DEFAULT_THRESHOLD,
    limit: int = DEFAULT_LIMIT,
) -> List[MatchResult]:
    """Score every catalog product and return the ranked shortlist."""
    return rank(score_catalog(catalog, detected), threshold=threshold, limit=limit)


__all__ = [
    "score",
    "score_catalog",
    "rank",
    "find_matches",
    "DEFAULT_THRESHOLD",
    "DEFAULT_LIMIT",
]
