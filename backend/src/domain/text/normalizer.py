"""Bilingual (Arabic/English) text normalization.

Product names and detected descriptions arrive in mixed case, mixed script and
with arbitrary punctuation ("Pepsi-Cola® 330ml", "بيبسي، 330 مل"). Everything that
is compared by the matching engine goes through ``normalize`` first so that the
comparison only sees lower-case ASCII letters, digits and Arabic characters
separated by single spaces.
"""

import re
from typing import List

# Arabic block (letters, Arabic-Indic digits, harakat)
ARABIC_RANGE = r"\u0600-\u06FF"

# Tokens of this length or shorter are dropped ("ml", "مل", "of")
MIN_TOKEN_LENGTH = 3

_STRIP_PATTERN = re.compile(rf"[^a-z0-9{ARABIC_RANGE}]+")


def normalize(text: str) -> str:
    """Canonicalize free text for comparison.

    Lower-cases the input, replaces every run of characters that are neither
    ASCII alphanumeric nor Arabic with a single space and trims the result.

    Args:
        text: Raw text (``None`` is treated as empty)

    Returns:
        Normalized text, possibly empty

    Examples:
        >>> normalize("  Pepsi-Cola 330ML!! ")
        'pepsi cola 330ml'
        >>> normalize("بيبسي، 330 مل")
        'بيبسي، 330 مل'
    """
    if not text:
        return ""
    return _STRIP_PATTERN.sub(" ", text.lower()).strip()


def tokenize(text: str) -> List[str]:
    """Split text into discriminative tokens.

    The text is normalized first; tokens shorter than ``MIN_TOKEN_LENGTH`` are
    discarded. Order and duplicates are preserved.

    Args:
        text: Raw or already-normalized text

    Returns:
        List of tokens
    """
    return [token for token in normalize(text).split() if len(token) >= MIN_TOKEN_LENGTH]
