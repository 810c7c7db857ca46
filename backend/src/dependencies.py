"""Global FastAPI dependencies for catalog and matching services.

This module wires the process-wide singletons:
- get_catalog_store: Catalog store adapter selected by CATALOG_STORE_BACKEND
- get_catalog_state: In-process catalog snapshot shared by all requests
- get_vision_provider / get_translation_provider: OpenAI provider, or an
  unconfigured stand-in when OPENAI_API_KEY is not set
- get_import_service / get_match_service: Services built from the above

Each getter is cached, so every request sees the same instances. Tests replace
them through ``app.dependency_overrides``.
"""

import logging
from functools import lru_cache
from typing import Optional, Union

from config import get_settings
from ai.ports import UnconfiguredVisionProvider
from ai.providers import OpenAIProvider
from catalog.import_service import CatalogImportService
from catalog.state import CatalogState
from domain.catalog.header_rules import DEFAULT_HEADER_RULES, KeywordHeaderResolver, merge_rules
from domain.catalog.ports import CatalogStorePort
from infrastructure.storage import build_catalog_store
from infrastructure.tabular import RemoteCatalogSource, TabularReaderRegistry, build_default_registry
from matching.service import ProductMatchService

logger = logging.getLogger(__name__)

AIProvider = Union[OpenAIProvider, UnconfiguredVisionProvider]


@lru_cache()
def get_catalog_store() -> CatalogStorePort:
    settings = get_settings()
    store = build_catalog_store(
        settings.CATALOG_STORE_BACKEND,
        settings.REDIS_URL,
        settings.CATALOG_REDIS_KEY,
    )
    logger.info(f"Catalog store backend: {settings.CATALOG_STORE_BACKEND}")
    return store


@lru_cache()
def get_catalog_state() -> CatalogState:
    return CatalogState()


@lru_cache()
def get_ai_provider() -> AIProvider:
    """Build the AI provider from settings.

    Returns:
        OpenAIProvider when OPENAI_API_KEY is set, otherwise a provider whose
        calls always fail (matching then degrades to an empty description)
    """
    settings = get_settings()
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set - image identification and translation disabled")
        return UnconfiguredVisionProvider()

    return OpenAIProvider(
        api_key=settings.OPENAI_API_KEY,
        model_vision=settings.VISION_MODEL,
        model_text=settings.TEXT_MODEL,
        timeout_seconds=settings.AI_TIMEOUT_SECONDS,
    )


def get_vision_provider() -> AIProvider:
    return get_ai_provider()


def get_translation_provider() -> AIProvider:
    return get_ai_provider()


@lru_cache()
def get_reader_registry() -> TabularReaderRegistry:
    return build_default_registry()


@lru_cache()
def get_header_resolver() -> KeywordHeaderResolver:
    """Keyword resolver with CATALOG_EXTRA_HEADERS appended to the default rules."""
    extra = get_settings().CATALOG_EXTRA_HEADERS
    if not extra:
        return KeywordHeaderResolver()
    return KeywordHeaderResolver(rules=merge_rules(DEFAULT_HEADER_RULES, extra))


@lru_cache()
def get_import_service() -> CatalogImportService:
    return CatalogImportService(
        store=get_catalog_store(),
        state=get_catalog_state(),
        registry=get_reader_registry(),
        resolver=get_header_resolver(),
    )


@lru_cache()
def get_match_service() -> ProductMatchService:
    settings = get_settings()
    return ProductMatchService(
        vision=get_vision_provider(),
        threshold=settings.MATCH_THRESHOLD,
        limit=settings.MATCH_LIMIT,
    )


def get_remote_catalog_source() -> Optional[RemoteCatalogSource]:
    """Remote catalog configured through CATALOG_SOURCE_URL, if any."""
    settings = get_settings()
    if not settings.CATALOG_SOURCE_URL:
        return None
    return RemoteCatalogSource(
        settings.CATALOG_SOURCE_URL,
        timeout_seconds=settings.CATALOG_SOURCE_TIMEOUT_SECONDS,
    )
