"""Response models for the search engine and API endpoints."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .record import SubjectRecord


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SearchHit(BaseModel):
    """Individual name search result."""

    record: SubjectRecord = Field(..., description="The matched subject record")
    match_type: str = Field(..., description="How the record was admitted (prefix or fuzzy)")
    matched_token: Optional[str] = Field(None, description="Token that matched a fuzzy query")
    edit_distance: Optional[int] = Field(None, description="Edit distance for fuzzy matches")


class SearchResponse(BaseModel):
    """Response for name search queries."""

    query: str = Field(..., description="Original search query")
    limit: int = Field(..., description="Applied result limit")
    execution_time_ms: float = Field(..., description="Query execution time in milliseconds")
    total_results: int = Field(..., description="Total number of results")
    prefix_matches: int = Field(..., description="Results admitted by prefix match")
    fuzzy_matches: int = Field(..., description="Results admitted by the edit-distance fallback")
    results: List[SearchHit] = Field(..., description="Search results in admission order")
    timestamp: datetime = Field(default_factory=_utcnow, description="Response timestamp")


class ImageRef(BaseModel):
    """Subject id with its image reference."""

    id: int = Field(..., description="Subject identifier")
    image_id: Optional[str] = Field(None, description="Associated image reference")


class ImageLookupResponse(BaseModel):
    """Response for image lookups by subject id."""

    requested: int = Field(..., description="Number of ids requested")
    total_results: int = Field(..., description="Number of subjects found")
    results: List[ImageRef] = Field(..., description="Matches in load order")
    execution_time_ms: float = Field(..., description="Lookup execution time in milliseconds")
    timestamp: datetime = Field(default_factory=_utcnow, description="Response timestamp")


class LoadResponse(BaseModel):
    """Response for dataset loads."""

    message: str = Field(..., description="Outcome summary")
    total_records: int = Field(..., description="Records stored")
    indexed_records: int = Field(..., description="Records reachable by name search")
    total_tokens: int = Field(..., description="Distinct name tokens indexed")
    execution_time_ms: float = Field(..., description="Load execution time in milliseconds")
    timestamp: datetime = Field(default_factory=_utcnow, description="Response timestamp")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    loaded: bool = Field(..., description="Whether a dataset is loaded")
    timestamp: datetime = Field(default_factory=_utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Dependency status")
