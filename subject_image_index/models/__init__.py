"""Data models for the subject image index."""

from .record import SubjectRecord
from .response import (
    SearchHit,
    SearchResponse,
    ImageRef,
    ImageLookupResponse,
    LoadResponse,
    ErrorResponse,
    HealthResponse,
)
from .request import ImageLookupRequest, LoadRecordsRequest

__all__ = [
    "SubjectRecord",
    "SearchHit",
    "SearchResponse",
    "ImageRef",
    "ImageLookupResponse",
    "LoadResponse",
    "ErrorResponse",
    "HealthResponse",
    "ImageLookupRequest",
    "LoadRecordsRequest",
]
