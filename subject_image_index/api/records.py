"""Dataset loading API endpoints."""

import os
import time

from fastapi import APIRouter, HTTPException

from ..config import get_settings
from ..core.errors import SubjectIndexError
from ..models.request import LoadRecordsRequest
from ..models.response import LoadResponse
from .errors import to_http_exception

router = APIRouter(prefix="/api/v1", tags=["records"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine


def _load_response(message: str, start_time: float) -> LoadResponse:
    snapshot = search_engine.snapshot
    return LoadResponse(
        message=message,
        total_records=len(snapshot.store),
        indexed_records=len(snapshot.trie),
        total_tokens=len(snapshot.token_index),
        execution_time_ms=(time.time() - start_time) * 1000
    )


@router.post(
    "/records",
    response_model=LoadResponse,
    summary="Load subject records",
    description="Replace the loaded dataset with the given records and rebuild the name indexes"
)
def load_records(request: LoadRecordsRequest) -> LoadResponse:
    """
    Replace the dataset with records from the request body.

    A rejected load leaves the previously loaded dataset in place.
    """
    start_time = time.time()
    try:
        search_engine.load(request.records)
    except SubjectIndexError as e:
        raise to_http_exception(e) from e
    return _load_response("Records loaded successfully", start_time)


@router.post(
    "/records/reload",
    response_model=LoadResponse,
    summary="Reload the data file",
    description="Reload the configured subject file from disk"
)
def reload_records() -> LoadResponse:
    """Reload the configured data file and rebuild the name indexes."""
    if not os.path.isfile(settings.data_file):
        raise HTTPException(
            status_code=404,
            detail=f"Data file '{settings.data_file}' not found"
        )

    start_time = time.time()
    try:
        search_engine.load_csv(
            settings.data_file,
            encoding=settings.csv_encoding,
            delimiter=settings.csv_delimiter
        )
    except SubjectIndexError as e:
        raise to_http_exception(e) from e
    except UnicodeDecodeError as e:
        raise HTTPException(
            status_code=422,
            detail=f"Data file is not valid {settings.csv_encoding}: {e.reason}"
        ) from e
    return _load_response("Data file reloaded successfully", start_time)
