"""ProductLens Backend - Main FastAPI Application

Product photo to catalog matching service.

This module creates and configures the main FastAPI application, including:
- API routers (products, matching, observability)
- Middleware (request ID correlation, CORS)
- Exception handlers
- Startup catalog bootstrap
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import get_settings
from dependencies import get_import_service, get_remote_catalog_source
from domain.catalog.ports import CatalogStoreError

# Observability
from observability.logging_config import configure_logging
from observability.middleware import RequestIDMiddleware
from observability.router import router as observability_router

# Domain Routers
from catalog.router import router as products_router
from matching.router import router as matching_router

settings = get_settings()

configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    - Startup: load the catalog (remote file first, then the catalog store)
    - Shutdown: nothing to release; the snapshot lives in process memory
    """
    logger.info("ProductLens API starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    # Honour overrides so tests can start the app against fakes
    import_service = app.dependency_overrides.get(get_import_service, get_import_service)()
    remote = app.dependency_overrides.get(get_remote_catalog_source, get_remote_catalog_source)()

    origin = await run_in_threadpool(import_service.load_initial_catalog, remote)
    logger.info(f"Catalog ready: {len(import_service.state)} products (source: {origin})")

    yield

    logger.info("ProductLens API shutting down...")


is_production = settings.ENVIRONMENT == "production"

app = FastAPI(
    title="ProductLens API",
    description="Identify a photographed product and find it in the imported catalog",
    version=APP_VERSION,
    docs_url=None if is_production else "/docs",
    redoc_url=None if is_production else "/redoc",
    openapi_url=None if is_production else "/openapi.json",
    lifespan=lifespan,
)


# =============================================================================
# MIDDLEWARE CONFIGURATION
# =============================================================================

app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors.

    Returns a structured error response with field-level details.
    """
    logger.warning(f"Validation error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "message": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(CatalogStoreError)
async def catalog_store_exception_handler(
    request: Request,
    exc: CatalogStoreError
) -> JSONResponse:
    """Handle catalog store failures.

    The in-process catalog is left unchanged when a write fails, so the
    request can be retried.
    """
    logger.error(
        f"Catalog store error on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "error": "catalog_store_unavailable",
            "message": "The catalog store is unavailable. Please try again later.",
        },
    )


@app.exception_handler(Exception)
async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle uncaught exceptions.

    Full details are logged but not exposed to the client.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred. Please try again later.",
        },
    )


# =============================================================================
# ROUTER REGISTRATION
# =============================================================================

# Observability (health, metrics, ready)
app.include_router(observability_router)

# Product Catalog
app.include_router(products_router, prefix="/api/v1")

# Matching
app.include_router(matching_router, prefix="/api/v1")


# =============================================================================
# ROOT ENDPOINTS
# =============================================================================

@app.get("/", include_in_schema=False)
async def root() -> dict[str, Any]:
    """Root endpoint - API information."""
    return {
        "name": "ProductLens API",
        "version": APP_VERSION,
        "status": "running",
        "docs": None if is_production else "/docs",
    }


@app.get("/api/v1", include_in_schema=False)
async def api_root() -> dict[str, Any]:
    """API v1 root endpoint."""
    return {
        "version": "v1",
        "status": "active",
        "endpoints": {
            "products": "/api/v1/products",
            "match": "/api/v1/match",
        }
    }


def create_app() -> FastAPI:
    """Return the configured application (tests, ASGI servers)."""
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
