"""Name search API endpoints."""

import time
from typing import Optional

from fastapi import APIRouter, HTTPException, Path, Query

from ..config import get_settings
from ..core.errors import SubjectIndexError
from ..models.response import SearchResponse
from .errors import to_http_exception

router = APIRouter(prefix="/api/v1", tags=["search"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine


@router.get(
    "/search/{query}",
    response_model=SearchResponse,
    summary="Search subjects by name",
    description="Prefix completion over name tokens, with a one-typo fallback when prefixes underfill the limit"
)
async def search_by_name(
    query: str = Path(..., description="Name or name prefix to search for", min_length=1),
    limit: Optional[int] = Query(
        None,
        ge=0,
        description="Maximum number of results to return (0 means the configured maximum)"
    )
) -> SearchResponse:
    """
    Search subjects by name.

    Prefix matches are returned first; fuzzy matches within edit distance
    one are added only when prefix matches do not fill the limit.
    """
    if len(query) > settings.max_query_length:
        raise HTTPException(
            status_code=400,
            detail=f"Query too long. Maximum length is {settings.max_query_length} characters"
        )
    if limit is None:
        limit = settings.default_limit
    if limit > settings.max_limit:
        raise HTTPException(
            status_code=400,
            detail=f"Limit too large. Maximum is {settings.max_limit}"
        )
    if limit == 0:
        limit = settings.max_limit

    start_time = time.time()
    try:
        hits = search_engine.search_by_name_detailed(query, limit=limit)
    except SubjectIndexError as e:
        raise to_http_exception(e) from e
    execution_time = (time.time() - start_time) * 1000

    prefix_matches = sum(1 for hit in hits if hit.match_type == "prefix")
    return SearchResponse(
        query=query,
        limit=limit,
        execution_time_ms=execution_time,
        total_results=len(hits),
        prefix_matches=prefix_matches,
        fuzzy_matches=len(hits) - prefix_matches,
        results=hits
    )
