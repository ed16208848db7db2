"""Main FastAPI application for the Subject Image Index."""

import os
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import structlog

from .api import (
    search_router,
    images_router,
    records_router,
    health_router,
)
from .config import get_settings
from .core.errors import SubjectIndexError
from .engine_instance import search_engine
from .logging_config import configure_logging
from .models.response import ErrorResponse

settings = get_settings()
configure_logging(settings.log_level, settings.log_format)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Subject Image Index service", version=settings.app_version)

    if os.path.isfile(settings.data_file):
        try:
            records = search_engine.load_csv(
                settings.data_file,
                encoding=settings.csv_encoding,
                delimiter=settings.csv_delimiter
            )
            logger.info("Data file loaded", data_file=settings.data_file, total_records=len(records))
        except SubjectIndexError as e:
            logger.error("Failed to load data file", data_file=settings.data_file, error=str(e))
            raise
    else:
        logger.warning(
            "Data file not found, starting without a dataset",
            data_file=settings.data_file
        )

    yield

    logger.info("Shutting down Subject Image Index service")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Lookup of subject images by id and by typo-tolerant name search",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log all HTTP requests."""
    start_time = time.time()

    logger.info(
        "Request started",
        method=request.method,
        url=str(request.url),
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent")
    )

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
        process_time_ms=round(process_time * 1000, 2)
    )

    return response


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle global exceptions."""
    logger.error(
        "Unhandled exception",
        method=request.method,
        url=str(request.url),
        error=str(exc),
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An unexpected error occurred",
            details={"exception": str(exc)} if settings.debug else None
        ).model_dump(mode="json")
    )


# Include API routers
app.include_router(search_router)
app.include_router(images_router)
app.include_router(records_router)
app.include_router(health_router)


@app.get("/", summary="Root endpoint", description="Get basic information about the API")
async def root() -> dict:
    """Root endpoint with basic API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Lookup of subject images by id and by typo-tolerant name search",
        "docs_url": "/docs",
        "health_url": "/api/v1/health",
        "status": "running"
    }


@app.get("/api", summary="API information", description="Get detailed API information")
async def api_info() -> dict:
    """Get detailed API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "endpoints": {
            "search": "/api/v1/search/{query}?limit=10",
            "images": "/api/v1/images?ids=1,2,3",
            "load": "/api/v1/records",
            "reload": "/api/v1/records/reload",
            "health": "/api/v1/health",
            "status": "/api/v1/status"
        },
        "features": [
            "Image lookup by subject id",
            "Prefix completion over name tokens",
            "Typo-tolerant fallback within one edit",
            "Case-insensitive name search",
            "Atomic dataset reloads"
        ],
        "limits": {
            "default_limit": settings.default_limit,
            "max_limit": settings.max_limit,
            "max_query_length": settings.max_query_length,
            "max_edit_distance": settings.max_edit_distance
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "subject_image_index.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower()
    )
