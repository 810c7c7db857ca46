"""OpenAI vision/translation provider implementation."""

import base64
import logging
import time
from typing import Optional

from openai import OpenAI, APIError, APITimeoutError, RateLimitError

from domain.catalog.models import DetectedDescription
from observability.metrics import vision_calls_total, vision_latency_ms

from ..ports import (
    VisionProviderPort,
    TranslationProviderPort,
    VisionProviderError,
    VisionTimeoutError,
    VisionRateLimitError,
    TranslationProviderError,
)
from ..prompts import build_identify_prompt, build_translation_prompt
from ..response_parser import parse_detected_description

logger = logging.getLogger(__name__)


class OpenAIProvider(VisionProviderPort, TranslationProviderPort):
    """OpenAI provider implementation.

    Identifies products from photos with a vision model and translates product
    descriptions with a text model.
    Default models:
    - Vision: gpt-4o
    - Text: gpt-4o-mini
    """

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model_vision: str = "gpt-4o",
        model_text: str = "gpt-4o-mini",
        timeout_seconds: int = 40,
        client: Optional[OpenAI] = None,
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model_vision: Model for image identification
            model_text: Model for translation
            timeout_seconds: Request timeout
            client: Pre-built client (tests)
        """
        self.client = client or OpenAI(api_key=api_key, timeout=timeout_seconds)
        self.model_vision = model_vision
        self.model_text = model_text
        self.timeout_seconds = timeout_seconds

    def identify(self, image: bytes, mime_type: str = "image/jpeg") -> DetectedDescription:
        """Identify a product from an image using the vision model."""
        start_ms = int(time.time() * 1000)
        system_prompt, user_prompt = build_identify_prompt()

        base64_image = base64.b64encode(image).decode("utf-8")
        user_message_content = [
            {"type": "text", "text": user_prompt},
            {
                "type": "image_url",
                "image_url": {"url": f"data:{mime_type};base64,{base64_image}"},
            },
        ]

        try:
            response = self.client.chat.completions.create(
                model=self.model_vision,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message_content},
                ],
                temperature=0.0,
                response_format={"type": "json_object"},
            )
        except APITimeoutError as e:
            self._record("identify", "timeout", start_ms)
            raise VisionTimeoutError(f"OpenAI request timed out: {e}") from e
        except RateLimitError as e:
            self._record("identify", "rate_limited", start_ms)
            raise VisionRateLimitError(f"OpenAI rate limit exceeded: {e}") from e
        except APIError as e:
            self._record("identify", "error", start_ms)
            raise VisionProviderError(f"OpenAI API error: {e}") from e

        if not response.choices:
            self._record("identify", "invalid_output", start_ms)
            raise VisionProviderError("OpenAI returned no choices")

        raw_output = response.choices[0].message.content or ""
        try:
            detected = parse_detected_description(raw_output)
        except VisionProviderError:
            self._record("identify", "invalid_output", start_ms)
            raise

        latency_ms = self._record("identify", "success", start_ms)
        logger.info(
            f"Vision identification succeeded: model={self.model_vision}, "
            f"keywords={len(detected.keywords)}, latency={latency_ms}ms"
        )
        return detected

    def translate(self, text: str, target_language: str = "ar") -> str:
        """Translate product text using the text model."""
        start_ms = int(time.time() * 1000)

        try:
            response = self.client.chat.completions.create(
                model=self.model_text,
                messages=[
                    {"role": "user", "content": build_translation_prompt(text, target_language)},
                ],
                temperature=0.0,
            )
        except (APITimeoutError, RateLimitError, APIError) as e:
            self._record("translate", "error", start_ms)
            raise TranslationProviderError(f"OpenAI translation failed: {e}") from e

        if not response.choices:
            self._record("translate", "error", start_ms)
            raise TranslationProviderError("OpenAI returned no choices")

        self._record("translate", "success", start_ms)
        return (response.choices[0].message.content or "").strip()

    def _record(self, call_type: str, status: str, start_ms: int) -> int:
        latency_ms = int(time.time() * 1000) - start_ms
        vision_calls_total.labels(call_type=call_type, provider=self.name, status=status).inc()
        vision_latency_ms.labels(call_type=call_type, provider=self.name).observe(latency_ms)
        return latency_ms
