"""Catalog ports (hexagonal architecture).

The domain only knows these interfaces; concrete adapters live in
``infrastructure.storage`` (catalog stores) and ``infrastructure.tabular``
(spreadsheet / CSV readers).
"""

from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from .models import Product


class CatalogStorePort(ABC):
    """Durable key-value area holding the current catalog.

    The catalog is always written as a whole: ``replace_all`` discards every
    previously stored product before storing the new ones.
    """

    @abstractmethod
    def replace_all(self, products: Sequence[Product]) -> None:
        """Replace the stored catalog with ``products``.

        Raises:
            CatalogStoreError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def get_all(self) -> List[Product]:
        """Return every stored product in insertion order.

        Raises:
            CatalogStoreError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def ping(self) -> bool:
        """Return True when the backend is reachable."""
        pass


class TabularReaderPort(ABC):
    """Reads an uploaded or fetched file into a grid of raw cells."""

    name: str = "tabular"

    @abstractmethod
    def supports(self, filename: str, mime_type: str = "") -> bool:
        pass

    @abstractmethod
    def read_grid(self, file_bytes: bytes) -> List[List[Any]]:
        """Parse file bytes into rows of raw cell values, one per sheet row.

        Raises:
            CatalogImportError: If the file cannot be parsed
        """
        pass


class CatalogError(Exception):
    """Base exception for catalog errors."""
    pass


class CatalogImportError(CatalogError):
    """A file could not be turned into a catalog grid."""
    pass


class CatalogStoreError(CatalogError):
    """The catalog store backend failed."""
    pass


class RemoteSourceError(CatalogError):
    """A remote catalog file could not be fetched."""
    pass
