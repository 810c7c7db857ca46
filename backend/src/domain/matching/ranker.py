"""Shortlist selection over scored products."""

from typing import Iterable, List

from domain.catalog.models import MatchResult

DEFAULT_THRESHOLD = 15
DEFAULT_LIMIT = 5


def rank(
    scored: Iterable[MatchResult],
    threshold: int = DEFAULT_THRESHOLD,
    limit: int = DEFAULT_LIMIT,
) -> List[MatchResult]:
    """Filter, sort and truncate scored products.

    Results scoring below ``threshold`` are dropped, the rest are sorted by
    descending score (stable, so equal scores keep catalog order) and at most
    ``limit`` are returned. An empty list means "no match found".

    Args:
        scored: Match results in catalog order
        threshold: Minimum score to be considered a match
        limit: Maximum number of results

    Returns:
        Ranked match results
    """
    if limit <= 0:
        return []

    kept = [result for result in scored if result.score >= threshold]
    kept.sort(key=lambda result: result.score, reverse=True)
    return kept[:limit]
