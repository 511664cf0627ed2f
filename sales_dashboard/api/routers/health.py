"""
API router for health checks

Provides endpoints for monitoring the API and the availability of its dataset.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from datetime import datetime, timezone
import logging
import platform
import psutil

from sales_dashboard.api.dependencies import record_store
from sales_dashboard.config.settings import get_settings
from sales_dashboard.core.exceptions import DataUnavailable
from sales_dashboard.core.record_store import RecordStore

# Create router
router = APIRouter()
logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get(
    "/health",
    summary="Health check",
    description="Check API and dataset health status"
)
def health_check(store: RecordStore = Depends(record_store)):
    """
    Check API and dataset health status

    Args:
        store: Record store to probe

    Returns:
        Dict: Health status of API components
    """
    health_data = {
        "status": "ok",
        "timestamp": _now(),
        "version": get_settings().APP_VERSION,
        "components": {}
    }

    # Check the dataset can be loaded
    try:
        records = store.load()
        health_data["components"]["dataset"] = {
            "status": "ok",
            "message": "Loaded",
            "path": store.file_path,
            "record_count": len(records)
        }
    except DataUnavailable as e:
        logger.warning(f"Health check could not load dataset: {str(e)}")
        health_data["components"]["dataset"] = {
            "status": "error",
            "message": str(e),
            "path": store.file_path
        }
        health_data["status"] = "degraded"

    # System metrics
    health_data["system"] = {
        "cpu_usage": psutil.cpu_percent(interval=None),
        "memory_usage_percent": psutil.virtual_memory().percent,
        "python_version": platform.python_version(),
        "platform": platform.platform(),
    }

    return health_data


@router.get(
    "/readiness",
    summary="Readiness probe",
    description="Check if the API is ready to receive traffic"
)
def readiness_check(store: RecordStore = Depends(record_store)):
    """
    Check if the API is ready to receive traffic

    Args:
        store: Record store to probe

    Returns:
        Dict: API readiness status
    """
    try:
        store.fingerprint()
    except DataUnavailable as e:
        logger.error(f"Readiness check failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Service not ready: {str(e)}"
        )

    return {
        "status": "ready",
        "timestamp": _now(),
        "dataset": store.file_path
    }


@router.get(
    "/liveness",
    summary="Liveness probe",
    description="Check if the API is running properly"
)
def liveness_check():
    """
    Check if the API is running properly

    Returns:
        Dict: API liveness status
    """
    return {
        "status": "alive",
        "timestamp": _now()
    }
