"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache
from typing import Dict, List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development. Without
    OPENAI_API_KEY the service still runs; image matching then works on an
    empty description and returns no matches.

    Environment Variables:
        OPENAI_API_KEY: OpenAI API key for vision and translation
        VISION_MODEL: Model used to identify products in photos
        TEXT_MODEL: Model used for description translation
        CATALOG_STORE_BACKEND: "memory" or "redis"
        REDIS_URL: Redis connection string (redis backend)
        CATALOG_SOURCE_URL: Spreadsheet fetched into the catalog at startup
        MATCH_THRESHOLD / MATCH_LIMIT: Ranking defaults for match endpoints
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default True)
    """

    # AI Providers
    OPENAI_API_KEY: Optional[str] = None
    VISION_MODEL: str = "gpt-4o"
    TEXT_MODEL: str = "gpt-4o-mini"
    AI_TIMEOUT_SECONDS: int = 40

    # Catalog store
    CATALOG_STORE_BACKEND: str = "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    CATALOG_REDIS_KEY: str = "productlens:catalog"

    # Catalog source
    CATALOG_SOURCE_URL: Optional[str] = None
    CATALOG_SOURCE_TIMEOUT_SECONDS: float = 15.0
    # Extra header candidates per field, e.g. {"name": ["bezeichnung"]}
    CATALOG_EXTRA_HEADERS: Dict[str, List[str]] = {}

    # Matching
    MATCH_THRESHOLD: int = 15
    MATCH_LIMIT: int = 5

    # Uploads
    MAX_UPLOAD_SIZE_BYTES: int = 10_485_760  # 10 MB
    MAX_IMAGE_SIZE_BYTES: int = 8_388_608  # 8 MB

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
