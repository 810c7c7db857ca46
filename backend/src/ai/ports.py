"""Port interfaces for AI providers (Hexagonal Architecture)."""

from abc import ABC, abstractmethod

from domain.catalog.models import DetectedDescription


class VisionProviderPort(ABC):
    """Port interface for product image identification.

    Synchronous interface; the API layer runs it off the event loop.
    Implementations must handle:
    - Timeouts
    - Rate limiting
    - Malformed model output
    """

    name: str = "vision"

    @abstractmethod
    def identify(self, image: bytes, mime_type: str = "image/jpeg") -> DetectedDescription:
        """Describe the product shown in an image.

        Args:
            image: Raw image bytes
            mime_type: Image MIME type

        Returns:
            DetectedDescription read from the packaging

        Raises:
            VisionTimeoutError: If request times out
            VisionRateLimitError: If rate limited
            VisionProviderError: For other provider errors, including unparseable output
        """
        pass

    def is_configured(self) -> bool:
        return True


class TranslationProviderPort(ABC):
    """Port interface for product text translation."""

    @abstractmethod
    def translate(self, text: str, target_language: str = "ar") -> str:
        """Translate product text.

        Args:
            text: Source text
            target_language: ISO 639-1 target language code

        Returns:
            Translated text

        Raises:
            TranslationProviderError: If the provider fails
        """
        pass


class UnconfiguredVisionProvider(VisionProviderPort, TranslationProviderPort):
    """Stand-in used when no API key is configured. Every call fails."""

    name = "unconfigured"

    def identify(self, image: bytes, mime_type: str = "image/jpeg") -> DetectedDescription:
        raise VisionProviderError("Vision provider is not configured (OPENAI_API_KEY missing)")

    def translate(self, text: str, target_language: str = "ar") -> str:
        raise TranslationProviderError("Translation provider is not configured (OPENAI_API_KEY missing)")

    def is_configured(self) -> bool:
        return False


# Custom exceptions
class VisionProviderError(Exception):
    """Base exception for vision provider errors."""
    pass


class VisionTimeoutError(VisionProviderError):
    """Vision request timed out."""
    pass


class VisionRateLimitError(VisionProviderError):
    """Vision rate limit exceeded."""
    pass


class TranslationProviderError(Exception):
    """Base exception for translation provider errors."""
    pass
