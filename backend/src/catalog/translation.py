"""Product description translation with fallback to the original text."""

import logging

from ai.ports import TranslationProviderError, TranslationProviderPort
from domain.catalog.models import Product

from .schemas import TranslationResponse

logger = logging.getLogger(__name__)


def translate_description(
    product: Product,
    provider: TranslationProviderPort,
    target_language: str = "ar",
) -> TranslationResponse:
    """Translate a product description.

    Provider failures and empty provider output return the original text with
    ``translated_by_provider`` False.
    """
    original = product.description
    if not original.strip():
        return TranslationResponse(
            product_id=product.id,
            target_language=target_language,
            original=original,
            translated=original,
            translated_by_provider=False,
        )

    try:
        translated = provider.translate(original, target_language)
    except TranslationProviderError as e:
        logger.warning(f"Translation failed for product {product.id}: {e}")
        translated = ""

    return TranslationResponse(
        product_id=product.id,
        target_language=target_language,
        original=original,
        translated=translated or original,
        translated_by_provider=bool(translated),
    )
