"""Product catalog API endpoints"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from ai.ports import TranslationProviderPort
from config import get_settings
from dependencies import get_catalog_state, get_import_service, get_translation_provider
from domain.catalog.ports import CatalogImportError
from domain.text.normalizer import normalize
from .import_service import CatalogImportService
from .schemas import (
    CatalogImportResult,
    ProductListResponse,
    ProductResponse,
    TranslationResponse,
)
from .state import CatalogState
from .template import TEMPLATE_FILENAME, build_template_workbook
from .translation import translate_description

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# ============================================================================
# Catalog Browse Endpoints
# ============================================================================

@router.get("", response_model=ProductListResponse)
def list_products(
    search: Optional[str] = Query(None, description="Filter by code, name or brand"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    state: CatalogState = Depends(get_catalog_state),
):
    """
    List products of the active catalog in import order.

    Args:
        search: Optional search term, compared after text normalization
        limit: Max results
        offset: Pagination offset
        state: Catalog snapshot holder

    Returns:
        Paginated product list
    """
    products = state.snapshot()

    term = normalize(search) if search else ""
    if term:
        products = tuple(
            p for p in products
            if term in normalize(p.name) or term in normalize(p.code) or term in normalize(p.brand)
        )

    page = products[offset:offset + limit]
    return ProductListResponse(
        items=[ProductResponse.from_product(p) for p in page],
        total=len(products),
        limit=limit,
        offset=offset,
    )


@router.get("/template")
def download_template():
    """
    Download the catalog template workbook.

    Returns:
        .xlsx file with the expected Arabic headers and one sample row
    """
    return Response(
        content=build_template_workbook(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={TEMPLATE_FILENAME}"},
    )


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: str,
    state: CatalogState = Depends(get_catalog_state),
):
    """
    Get product by ID.

    Raises:
        HTTPException 404: If product not found
    """
    product = state.get(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    return ProductResponse.from_product(product)


# ============================================================================
# Catalog Import Endpoints
# ============================================================================

@router.post("/import", response_model=CatalogImportResult)
async def import_products(
    file: UploadFile = File(..., description="Catalog file (.xlsx, .xlsm, .xls or .csv)"),
    service: CatalogImportService = Depends(get_import_service),
):
    """
    Replace the catalog with the products in an uploaded spreadsheet.

    Columns are recognised by keyword (Arabic or English) in the header row.
    Rows without a product name are skipped. A file that yields no products
    leaves the current catalog untouched.

    Args:
        file: Uploaded catalog file
        service: Catalog import service

    Returns:
        Import result with counts and the resolved columns

    Raises:
        HTTPException 400: Unsupported or unreadable file
        HTTPException 413: File larger than MAX_UPLOAD_SIZE_BYTES
        HTTPException 422: File has no data rows or no valid products
    """
    file_bytes = await file.read()

    max_size = get_settings().MAX_UPLOAD_SIZE_BYTES
    if len(file_bytes) > max_size:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds maximum size of {max_size} bytes"
        )

    filename = file.filename or "upload"
    try:
        result = await run_in_threadpool(
            service.import_file, file_bytes, filename, file.content_type or ""
        )
    except CatalogImportError as e:
        logger.warning(f"Catalog import rejected for {filename!r}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    if result.data_rows == 0:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "code": "file_empty",
                "message": "The file has no data rows below the header row",
            }
        )

    if not result.replaced:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "code": "no_valid_products",
                "message": "No row has a product name; the current catalog was kept",
                "columns": result.columns,
                "skipped_rows": result.skipped_rows,
            }
        )

    return result


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_catalog(
    service: CatalogImportService = Depends(get_import_service),
):
    """
    Remove every product from the catalog.
    """
    service.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Translation Endpoints
# ============================================================================

@router.post("/{product_id}/translate", response_model=TranslationResponse)
async def translate_product_description(
    product_id: str,
    target_language: str = Query("ar", min_length=2, max_length=5, description="ISO 639-1 code"),
    state: CatalogState = Depends(get_catalog_state),
    provider: TranslationProviderPort = Depends(get_translation_provider),
):
    """
    Translate a product description.

    Provider failures are not errors: the original description is returned
    with ``translated_by_provider`` false.

    Raises:
        HTTPException 404: If product not found
    """
    product = state.get(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )

    return await run_in_threadpool(translate_description, product, provider, target_language)
