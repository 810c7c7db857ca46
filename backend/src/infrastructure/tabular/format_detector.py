"""
Format detection utilities for CSV catalog files.
Auto-detects text encoding and field separator.
"""
from typing import List
import chardet


# Tried in order when chardet is not confident; windows-1256 covers legacy Arabic exports
FALLBACK_ENCODINGS = ['utf-8', 'windows-1256', 'iso-8859-1']


def detect_encoding(raw_bytes: bytes) -> str:
    """
    Detect character encoding of file.
    A UTF-8 byte order mark always wins, then strict UTF-8; otherwise
    chardet is used when confident, then the fallback chain.

    Args:
        raw_bytes: File contents as bytes

    Returns:
        Detected encoding name (e.g., 'utf-8', 'utf-8-sig', 'windows-1256')
    """
    if raw_bytes.startswith(b'\xef\xbb\xbf'):
        return 'utf-8-sig'

    try:
        raw_bytes.decode('utf-8')
        return 'utf-8'
    except UnicodeDecodeError:
        pass

    result = chardet.detect(raw_bytes)
    detected = result.get('encoding')

    if detected and (result.get('confidence') or 0) > 0.7:
        return detected.lower()

    for encoding in FALLBACK_ENCODINGS:
        try:
            raw_bytes.decode(encoding)
            return encoding
        except (UnicodeDecodeError, AttributeError):
            continue

    # Last resort
    return 'utf-8'


def detect_separator(sample_lines: List[str]) -> str:
    """
    Auto-detect CSV separator from sample lines.
    Supports `,`, `;`, `\t` and `|`.

    Args:
        sample_lines: First N lines of file (recommend 5-10 lines)

    Returns:
        Most likely separator character

    Examples:
        >>> detect_separator(["code;name;price", "1001;Pepsi;2,5"])
        ';'
    """
    candidates = {',': 0, ';': 0, '\t': 0, '|': 0}

    for line in sample_lines:
        if not line.strip():
            continue

        # Count occurrences of each separator
        for sep in candidates.keys():
            candidates[sep] += line.count(sep)

    # Return separator with highest count
    if any(candidates.values()):
        return max(candidates, key=candidates.get)

    # Default to comma if ambiguous
    return ','
