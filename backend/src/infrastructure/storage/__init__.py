"""Catalog store adapters."""

from .catalog_store import InMemoryCatalogStore, RedisCatalogStore, build_catalog_store

__all__ = [
    "InMemoryCatalogStore",
    "RedisCatalogStore",
    "build_catalog_store",
]
