"""
Error handling for the API

Provides centralized error handling and consistent error responses. Every
failure is reported as a JSON object carrying a human-readable message.
"""

from fastapi import Request, status, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from datetime import datetime, timezone
import logging
import uuid

from sales_dashboard.core.exceptions import SalesDashboardError

# Configure logging
logger = logging.getLogger(__name__)


def error_body(request: Request, status_code: int, error_type: str, message: str, error_id: str) -> dict:
    """Build the error envelope shared by every handler"""
    return {
        "error_id": error_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status_code,
        "type": error_type,
        "error": message,
        "message": message,
        "path": str(request.url)
    }


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle validation errors in a user-friendly way
    """
    error_id = str(uuid.uuid4())

    errors = []
    for error in exc.errors():
        errors.append({
            "location": list(error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        })

    logger.warning(f"Validation error {error_id}: URL: {request.url} - Errors: {errors}")

    content = error_body(request, 422, "validation_error", "Request validation failed", error_id)
    content["errors"] = errors
    return JSONResponse(status_code=422, content=content)


async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Handle HTTP exceptions with consistent response format
    """
    error_id = str(uuid.uuid4())

    if exc.status_code >= 500:
        logger.error(f"HTTP error {error_id}: {exc.status_code} {exc.detail} - URL: {request.url}")
    elif exc.status_code >= 400:
        logger.warning(f"HTTP error {error_id}: {exc.status_code} {exc.detail} - URL: {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.status_code, "http_error", str(exc.detail), error_id),
        headers=getattr(exc, "headers", None)
    )


async def sales_dashboard_exception_handler(request: Request, exc: SalesDashboardError):
    """
    Handle data and result errors that were not converted by a router
    """
    error_id = str(uuid.uuid4())
    logger.error(f"{type(exc).__name__} {error_id}: {str(exc)} - URL: {request.url}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(request, 500, "server_error", "Failed to process sales data", error_id)
    )


async def general_exception_handler(request: Request, exc: Exception):
    """
    Catch-all exception handler for unhandled exceptions
    """
    error_id = str(uuid.uuid4())
    logger.exception(f"Unhandled exception {error_id}: {str(exc)} - URL: {request.url}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(request, 500, "server_error", "An unexpected error occurred", error_id)
    )


def add_exception_handlers(app: FastAPI):
    """
    Add all exception handlers to the FastAPI app

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(SalesDashboardError, sales_dashboard_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
