"""Health check and monitoring API endpoints."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from ..config import get_settings
from ..models.response import HealthResponse

router = APIRouter(prefix="/api/v1", tags=["health"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine

# Track application start time
app_start_time = time.time()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the subject index service"
)
async def health_check() -> HealthResponse:
    """
    Perform a health check on the subject index service.

    The service is healthy once a dataset is loaded and degraded before that.
    """
    uptime = time.time() - app_start_time

    dependencies = {
        "record_store": "healthy" if search_engine.is_loaded else "empty",
        "name_index": "healthy" if search_engine.is_loaded else "empty",
    }
    if search_engine.is_loaded:
        try:
            search_engine.search_by_name("", limit=1)
        except Exception:
            dependencies["name_index"] = "unhealthy"

    if all(status == "healthy" for status in dependencies.values()):
        status = "healthy"
    elif any(status == "unhealthy" for status in dependencies.values()):
        status = "unhealthy"
    else:
        status = "degraded"

    return HealthResponse(
        status=status,
        version=settings.app_version,
        uptime=uptime,
        loaded=search_engine.is_loaded,
        dependencies=dependencies
    )


@router.get(
    "/health/ready",
    summary="Readiness check",
    description="Check if the service has a dataset loaded and can answer queries"
)
async def readiness_check() -> JSONResponse:
    """
    Check if the service is ready to accept requests.

    Ready means a dataset has been loaded.
    """
    stats = search_engine.get_stats()
    if not stats["loaded"]:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "error": "No dataset loaded",
                "timestamp": _now()
            }
        )

    return JSONResponse(
        status_code=200,
        content={
            "status": "ready",
            "timestamp": _now(),
            "index_stats": stats["index_stats"]
        }
    )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Check if the service is alive and responding"
)
async def liveness_check() -> JSONResponse:
    """Check if the service process is alive."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "alive",
            "timestamp": _now(),
            "uptime": time.time() - app_start_time
        }
    )


@router.get(
    "/status",
    summary="Service status",
    description="Get detailed status information about the service"
)
async def service_status() -> JSONResponse:
    """
    Get detailed status information about the service.

    Includes query statistics, index statistics and the active configuration.
    """
    try:
        stats = search_engine.get_stats()

        config_info = {
            "data_file": settings.data_file,
            "csv_encoding": settings.csv_encoding,
            "default_limit": settings.default_limit,
            "max_limit": settings.max_limit,
            "max_query_length": settings.max_query_length,
            "max_edit_distance": settings.max_edit_distance,
            "debug": settings.debug
        }

        return JSONResponse(
            status_code=200,
            content={
                "service": {
                    "name": settings.app_name,
                    "version": settings.app_version,
                    "status": "running",
                    "uptime": time.time() - app_start_time,
                    "start_time": datetime.fromtimestamp(app_start_time, timezone.utc).isoformat()
                },
                "configuration": config_info,
                "statistics": stats,
                "timestamp": _now()
            }
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get service status: {str(e)}"
        ) from e
