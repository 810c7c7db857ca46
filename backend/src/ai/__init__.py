"""AI capability layer: product identification and translation."""

from .ports import (
    VisionProviderPort,
    TranslationProviderPort,
    UnconfiguredVisionProvider,
    VisionProviderError,
    VisionTimeoutError,
    VisionRateLimitError,
    TranslationProviderError,
)

__all__ = [
    "VisionProviderPort",
    "TranslationProviderPort",
    "UnconfiguredVisionProvider",
    "VisionProviderError",
    "VisionTimeoutError",
    "VisionRateLimitError",
    "TranslationProviderError",
]
