"""Process-wide catalog snapshot.

The active catalog is an immutable tuple. Replacing it swaps the reference
under a lock; readers take one snapshot per request and keep using it even if
a concurrent import swaps in a new catalog.
"""

import threading
from typing import Iterable, Optional

from domain.catalog.models import Catalog, Product
from observability.metrics import catalog_size


class CatalogState:
    """Holder for the active catalog snapshot."""

    def __init__(self, products: Iterable[Product] = ()):
        self._lock = threading.Lock()
        self._catalog: Catalog = tuple(products)
        catalog_size.set(len(self._catalog))

    def snapshot(self) -> Catalog:
        return self._catalog

    def replace(self, products: Iterable[Product]) -> Catalog:
        new_catalog = tuple(products)
        with self._lock:
            self._catalog = new_catalog
        catalog_size.set(len(new_catalog))
        return new_catalog

    def get(self, product_id: str) -> Optional[Product]:
        for product in self._catalog:
            if product.id == product_id:
                return product
        return None

    def __len__(self) -> int:
        return len(self._catalog)
