"""LLM prompt templates for product identification and translation."""

IDENTIFY_PRODUCT_V1_SYSTEM = """You identify retail products from photos of their packaging.
Rules:
- Output ONLY JSON. No markdown. No explanations.
- Read text in both Arabic and English exactly as printed.
- If a field cannot be determined, use an empty string (do NOT invent)."""

IDENTIFY_PRODUCT_V1_USER = """Analyze this product image. Identify the brand, product name, category, and text on the packaging (Arabic and English).
Return ONLY a JSON object with this structure:
{
  "detectedName": "Full Product Name",
  "detectedBrand": "Brand Name",
  "category": "Category",
  "keywords": ["keyword1", "keyword2", "arabic_text_on_package", "english_text_on_package"]
}"""

TRANSLATE_DESCRIPTION_V1_USER = """Translate the following product description to {{language_name}}. Keep it professional and concise:

{{text}}"""

LANGUAGE_NAMES = {
    "ar": "Arabic",
    "en": "English",
}


def build_identify_prompt() -> tuple[str, str]:
    """Build system and user prompts for product identification.

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    return IDENTIFY_PRODUCT_V1_SYSTEM, IDENTIFY_PRODUCT_V1_USER


def build_translation_prompt(text: str, target_language: str = "ar") -> str:
    """Build the user prompt for translating a product description."""
    language_name = LANGUAGE_NAMES.get(target_language, target_language)
    return (
        TRANSLATE_DESCRIPTION_V1_USER
        .replace("{{language_name}}", language_name)
        .replace("{{text}}", text)
    )
