"""Translation of engine errors into HTTP errors."""

from fastapi import HTTPException

from ..core.errors import (
    EmptyDatasetError,
    MalformedRecordError,
    NotLoadedError,
    SubjectIndexError,
)


def to_http_exception(exc: SubjectIndexError) -> HTTPException:
    """Map a subject index error to the matching HTTP status."""
    if isinstance(exc, NotLoadedError):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, (EmptyDatasetError, MalformedRecordError)):
        return HTTPException(status_code=422, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
