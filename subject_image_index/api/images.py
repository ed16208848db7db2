"""Image lookup API endpoints."""

import time
from typing import Any, List

from fastapi import APIRouter, HTTPException, Query

from ..config import get_settings
from ..core.errors import SubjectIndexError
from ..models.request import ImageLookupRequest
from ..models.response import ImageLookupResponse, ImageRef
from .errors import to_http_exception

router = APIRouter(prefix="/api/v1", tags=["images"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine


def _lookup(ids: List[Any]) -> ImageLookupResponse:
    if len(ids) > settings.max_lookup_ids:
        raise HTTPException(
            status_code=400,
            detail=f"Too many ids. Maximum is {settings.max_lookup_ids}"
        )

    start_time = time.time()
    try:
        matches = search_engine.get_images_by_subject_ids(ids)
    except SubjectIndexError as e:
        raise to_http_exception(e) from e
    execution_time = (time.time() - start_time) * 1000

    return ImageLookupResponse(
        requested=len(ids),
        total_results=len(matches),
        results=[ImageRef(**match) for match in matches],
        execution_time_ms=execution_time
    )


@router.get(
    "/images",
    response_model=ImageLookupResponse,
    summary="Get images by subject ids",
    description="Look up image references for a comma-separated list of subject ids"
)
async def get_images(
    ids: str = Query("", description="Comma-separated subject ids, e.g. 1,101,103")
) -> ImageLookupResponse:
    """
    Get image references for the given subject ids.

    Results follow dataset order; unknown ids are omitted.
    """
    subject_ids = [subject_id.strip() for subject_id in ids.split(",") if subject_id.strip()]
    return _lookup(subject_ids)


@router.post(
    "/images",
    response_model=ImageLookupResponse,
    summary="Get images with request body",
    description="Look up image references for subject ids given in a JSON body"
)
async def get_images_with_body(request: ImageLookupRequest) -> ImageLookupResponse:
    """Get image references for subject ids given in a request body."""
    return _lookup(request.ids)
