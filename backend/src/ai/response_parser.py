"""Parsing of free-form model output into a DetectedDescription."""

import json
import re

from domain.catalog.models import DetectedDescription

from .ports import VisionProviderError

_CODE_FENCE = re.compile(r"```(?:json)?\s*|\s*```", re.IGNORECASE)
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_json_object(raw_output: str) -> dict:
    """Pull the first JSON object out of model output.

    Markdown code fences are removed and everything from the first ``{`` to the
    last ``}`` is parsed.

    Raises:
        VisionProviderError: If no JSON object can be parsed
    """
    cleaned = _CODE_FENCE.sub("", raw_output or "").strip()
    match = _JSON_OBJECT.search(cleaned)
    if not match:
        raise VisionProviderError("Invalid JSON response: no object found")

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise VisionProviderError(f"Invalid JSON response: {e}") from e

    if not isinstance(parsed, dict):
        raise VisionProviderError("Invalid JSON response: not an object")
    return parsed


def parse_detected_description(raw_output: str) -> DetectedDescription:
    """Parse model output into a DetectedDescription."""
    return DetectedDescription.from_dict(extract_json_object(raw_output))
