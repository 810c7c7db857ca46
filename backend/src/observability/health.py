"""Health check utilities for ProductLens.

Provides health and readiness checks for the catalog store, the catalog
snapshot and the vision provider.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from ai.ports import VisionProviderPort
from domain.catalog.ports import CatalogStoreError, CatalogStorePort

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Health check status enum."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class ComponentHealth:
    """Health status for a single component."""
    status: HealthStatus
    message: Optional[str] = None
    latency_ms: Optional[float] = None


def check_catalog_store_health(store: CatalogStorePort) -> ComponentHealth:
    """Check catalog store connectivity.

    Args:
        store: Catalog store adapter

    Returns:
        ComponentHealth: Store health status
    """
    start = time.perf_counter()
    try:
        reachable = store.ping()
    except CatalogStoreError as e:
        logger.error(f"Catalog store health check failed: {e}")
        reachable = False
    latency_ms = (time.perf_counter() - start) * 1000

    if not reachable:
        return ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            message="Catalog store unreachable",
            latency_ms=round(latency_ms, 2)
        )
    return ComponentHealth(
        status=HealthStatus.HEALTHY,
        message="Catalog store OK",
        latency_ms=round(latency_ms, 2)
    )


def check_catalog_health(catalog_size: int) -> ComponentHealth:
    """An empty catalog can be served but never matches anything."""
    if catalog_size == 0:
        return ComponentHealth(
            status=HealthStatus.DEGRADED,
            message="Catalog is empty; import a catalog file"
        )
    return ComponentHealth(
        status=HealthStatus.HEALTHY,
        message=f"{catalog_size} products loaded"
    )


def check_vision_health(provider: VisionProviderPort) -> ComponentHealth:
    """Report whether image identification is configured.

    No provider call is made; an unconfigured provider degrades matching to
    empty descriptions rather than failing requests.
    """
    if not provider.is_configured():
        return ComponentHealth(
            status=HealthStatus.DEGRADED,
            message="Vision provider not configured"
        )
    return ComponentHealth(
        status=HealthStatus.HEALTHY,
        message=f"Vision provider '{provider.name}' configured"
    )


def get_overall_health(components: Dict[str, ComponentHealth]) -> HealthStatus:
    """Determine overall health from component statuses.

    Args:
        components: Dictionary of component health statuses

    Returns:
        HealthStatus: Overall system health
    """
    if all(c.status == HealthStatus.HEALTHY for c in components.values()):
        return HealthStatus.HEALTHY

    if any(c.status == HealthStatus.UNHEALTHY for c in components.values()):
        return HealthStatus.UNHEALTHY

    return HealthStatus.DEGRADED
