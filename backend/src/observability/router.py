"""Observability API endpoints.

Provides metrics, health checks, and readiness probes for monitoring.
"""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from ai.ports import VisionProviderPort
from catalog.state import CatalogState
from dependencies import get_catalog_state, get_catalog_store, get_vision_provider
from domain.catalog.ports import CatalogStorePort
from .health import (
    check_catalog_health,
    check_catalog_store_health,
    check_vision_health,
    get_overall_health,
    HealthStatus,
)

router = APIRouter(tags=["Observability"])


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    include_in_schema=False,
)
def metrics():
    """Expose Prometheus metrics in text exposition format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


@router.get(
    "/health",
    summary="Health check endpoint",
    description="Returns health status of the catalog store, the catalog and the vision provider",
)
def health_check(
    store: CatalogStorePort = Depends(get_catalog_store),
    state: CatalogState = Depends(get_catalog_state),
    vision: VisionProviderPort = Depends(get_vision_provider),
):
    """Check health of all system components.

    Returns 200 OK unless a component is unhealthy, 503 otherwise. An empty
    catalog or a missing API key only degrades the service.
    """
    components = {
        "catalog_store": check_catalog_store_health(store),
        "catalog": check_catalog_health(len(state)),
        "vision": check_vision_health(vision),
    }

    overall_status = get_overall_health(components)

    response_data = {
        "status": overall_status.value,
        "components": {
            name: {
                "status": comp.status.value,
                "message": comp.message,
                "latency_ms": comp.latency_ms,
            }
            for name, comp in components.items()
        }
    }

    status_code = 200 if overall_status != HealthStatus.UNHEALTHY else 503

    return JSONResponse(
        content=response_data,
        status_code=status_code
    )


@router.get(
    "/ready",
    summary="Readiness check endpoint",
    description="Returns readiness status (for Kubernetes readiness probes)",
)
def readiness_check(store: CatalogStorePort = Depends(get_catalog_store)):
    """Ready when the catalog store answers."""
    store_health = check_catalog_store_health(store)

    if store_health.status == HealthStatus.HEALTHY:
        return {
            "status": "ready",
            "message": "Application is ready to serve traffic"
        }
    return JSONResponse(
        content={
            "status": "not_ready",
            "message": store_health.message
        },
        status_code=503
    )
