"""Text canonicalization shared by catalog ingestion and matching."""

from .normalizer import normalize, tokenize, MIN_TOKEN_LENGTH

__all__ = [
    "normalize",
    "tokenize",
    "MIN_TOKEN_LENGTH",
]
