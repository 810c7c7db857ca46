"""Matching API endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from catalog.schemas import ProductResponse
from catalog.state import CatalogState
from config import get_settings
from dependencies import get_catalog_state, get_match_service
from .schemas import DetectedDescriptionSchema, MatchCandidateSchema, MatchResponse
from .service import MatchOutcome, ProductMatchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/match", tags=["matching"])

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}


def _to_response(outcome: MatchOutcome) -> MatchResponse:
    return MatchResponse(
        detected=DetectedDescriptionSchema.from_domain(outcome.detected),
        vision_error=outcome.vision_error,
        catalog_size=outcome.catalog_size,
        threshold=outcome.threshold,
        limit=outcome.limit,
        matches=[
            MatchCandidateSchema(product=ProductResponse.from_product(m.product), score=m.score)
            for m in outcome.matches
        ],
    )


@router.post("", response_model=MatchResponse)
async def match_image(
    file: UploadFile = File(..., description="Product photo (JPEG, PNG, WebP or GIF)"),
    threshold: Optional[int] = Query(None, ge=0, description="Minimum score (default from settings)"),
    limit: Optional[int] = Query(None, ge=0, le=100, description="Maximum results (default from settings)"),
    state: CatalogState = Depends(get_catalog_state),
    service: ProductMatchService = Depends(get_match_service),
):
    """
    Identify the product in a photo and return the best catalog matches.

    A failed identification is not an error: matching runs on an empty
    description and ``vision_error`` carries the reason.

    Args:
        file: Uploaded image
        threshold: Minimum score override
        limit: Result count override
        state: Catalog snapshot holder
        service: Match service

    Returns:
        MatchResponse with the detected description and ranked matches

    Raises:
        HTTPException 400: Empty file or unsupported image type
        HTTPException 413: Image larger than MAX_IMAGE_SIZE_BYTES
    """
    mime_type = (file.content_type or "").lower()
    if mime_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported image type '{mime_type}'. Allowed: {', '.join(sorted(ALLOWED_IMAGE_TYPES))}"
        )

    image = await file.read()
    if not image:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Image is empty")

    max_size = get_settings().MAX_IMAGE_SIZE_BYTES
    if len(image) > max_size:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Image exceeds maximum size of {max_size} bytes"
        )

    # Snapshot before the vision call; a concurrent import does not affect this request
    catalog = state.snapshot()
    outcome = await run_in_threadpool(
        service.match_image, catalog, image, mime_type, threshold, limit
    )
    return _to_response(outcome)


@router.post("/description", response_model=MatchResponse)
def match_description(
    detected: DetectedDescriptionSchema,
    threshold: Optional[int] = Query(None, ge=0, description="Minimum score (default from settings)"),
    limit: Optional[int] = Query(None, ge=0, le=100, description="Maximum results (default from settings)"),
    state: CatalogState = Depends(get_catalog_state),
    service: ProductMatchService = Depends(get_match_service),
):
    """
    Rank the catalog against a description supplied by the client.

    Args:
        detected: Detected description
        threshold: Minimum score override
        limit: Result count override

    Returns:
        MatchResponse with ranked matches
    """
    outcome = service.match_description(
        state.snapshot(), detected.to_domain(), threshold=threshold, limit=limit
    )
    return _to_response(outcome)
