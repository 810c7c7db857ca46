"""Observability module for ProductLens.

Provides structured logging, metrics, request IDs and health checks. The HTTP
endpoints live in ``observability.router`` and are mounted by ``main``.
"""

from .logging_config import configure_logging, JSONFormatter, RequestIDFilter
from .metrics import (
    catalog_imports_total,
    catalog_size,
    match_requests_total,
    match_results,
    vision_calls_total,
    vision_latency_ms,
)
from .request_id import request_id_var, get_request_id, set_request_id, generate_request_id
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "JSONFormatter",
    "RequestIDFilter",
    # Metrics
    "catalog_imports_total",
    "catalog_size",
    "match_requests_total",
    "match_results",
    "vision_calls_total",
    "vision_latency_ms",
    # Request ID
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
    # Middleware
    "RequestIDMiddleware",
]
