"""Matching application layer: identify, score and rank.

The API router lives in ``matching.router`` and is mounted by ``main``.
"""

from .schemas import DetectedDescriptionSchema, MatchCandidateSchema, MatchResponse
from .service import MatchOutcome, ProductMatchService

__all__ = [
    "DetectedDescriptionSchema",
    "MatchCandidateSchema",
    "MatchResponse",
    "MatchOutcome",
    "ProductMatchService",
]
