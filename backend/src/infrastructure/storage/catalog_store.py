"""Catalog store adapters.

Two implementations of CatalogStorePort:
- InMemoryCatalogStore: process-local, for development and tests
- RedisCatalogStore: the whole catalog serialized as one JSON document under a
  single key, so replace-all is a single atomic SET
"""

import json
import logging
import threading
from typing import List, Sequence

import redis

from domain.catalog.models import Product
from domain.catalog.ports import CatalogStorePort, CatalogStoreError

logger = logging.getLogger(__name__)


class InMemoryCatalogStore(CatalogStorePort):
    """Catalog store held in process memory."""

    def __init__(self, products: Sequence[Product] = ()):
        self._lock = threading.Lock()
        self._products: List[Product] = list(products)

    def replace_all(self, products: Sequence[Product]) -> None:
        with self._lock:
            self._products = list(products)

    def get_all(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def ping(self) -> bool:
        return True


class RedisCatalogStore(CatalogStorePort):
    """Catalog store backed by a Redis key.

    Args:
        client: Redis client (``decode_responses`` may be on or off)
        key: Key holding the JSON-encoded product list
    """

    def __init__(self, client: redis.Redis, key: str = "productlens:catalog"):
        self.client = client
        self.key = key

    @classmethod
    def from_url(cls, redis_url: str, key: str = "productlens:catalog") -> "RedisCatalogStore":
        return cls(redis.from_url(redis_url, decode_responses=True), key=key)

    def replace_all(self, products: Sequence[Product]) -> None:
        payload = json.dumps([p.to_dict() for p in products], ensure_ascii=False)
        try:
            self.client.set(self.key, payload)
        except redis.RedisError as e:
            raise CatalogStoreError(f"Failed to write catalog to Redis: {e}") from e
        logger.info(f"Stored {len(products)} products under {self.key}")

    def get_all(self) -> List[Product]:
        try:
            payload = self.client.get(self.key)
        except redis.RedisError as e:
            raise CatalogStoreError(f"Failed to read catalog from Redis: {e}") from e

        if not payload:
            return []
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")

        try:
            records = json.loads(payload)
        except json.JSONDecodeError as e:
            raise CatalogStoreError(f"Stored catalog under {self.key} is not valid JSON: {e}") from e

        return [Product.from_dict(record) for record in records if isinstance(record, dict)]

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError as e:
            logger.error(f"Redis ping failed: {e}")
            return False


def build_catalog_store(backend: str, redis_url: str, key: str) -> CatalogStorePort:
    """Create the configured catalog store.

    Raises:
        ValueError: If backend is unknown
    """
    backend = (backend or "memory").lower()
    if backend == "memory":
        return InMemoryCatalogStore()
    if backend == "redis":
        return RedisCatalogStore.from_url(redis_url, key=key)
    raise ValueError(f"Unknown CATALOG_STORE_BACKEND: {backend!r} (expected 'memory' or 'redis')")
