"""FastAPI middleware for observability.

Assigns a request ID to every HTTP request and logs its outcome.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .request_id import REQUEST_ID_HEADER, resolve_request_id, set_request_id

logger = logging.getLogger(__name__)

# Probe and scrape endpoints are not logged
QUIET_PATHS = {"/health", "/ready", "/metrics"}


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware to generate and inject request IDs."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request with request ID.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response: HTTP response with X-Request-ID header
        """
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        set_request_id(request_id)

        path = request.url.path
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"{request.method} {path} failed after {duration_ms:.1f}ms",
                exc_info=True
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        if path not in QUIET_PATHS:
            logger.info(f"{request.method} {path} -> {response.status_code} ({duration_ms:.1f}ms)")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
