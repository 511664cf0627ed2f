"""
Sales Analytics Dashboard API - Main Application

This module serves as the entry point for the API, configuring the
FastAPI application with all routes, middleware, and exception handlers.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from sales_dashboard.api.routers import analytics, catalog, health, sales
from sales_dashboard.api.middlewares.logging_middleware import RequestLoggingMiddleware
from sales_dashboard.api.middlewares.error_handler import add_exception_handlers
from sales_dashboard.api.utils.documentation import install_openapi
from sales_dashboard.config.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("api")

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Read-only analytics over a static sales dataset",
    version=settings.APP_VERSION,
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Add exception handlers
add_exception_handlers(app)

# Include routers
app.include_router(health.router, prefix=settings.API_PREFIX, tags=["Health"])
app.include_router(sales.router, prefix=f"{settings.API_PREFIX}/sales", tags=["Sales"])
app.include_router(analytics.router, prefix=f"{settings.API_PREFIX}/analytics", tags=["Analytics"])
app.include_router(catalog.router, prefix=settings.API_PREFIX, tags=["Catalog"])

install_openapi(app)


@app.get(settings.API_PREFIX, tags=["Root"])
def root():
    """API root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "dataset": settings.DATA_FILE,
        "docs_url": f"{settings.API_PREFIX}/docs"
    }


def run():
    """Serve the API with uvicorn"""
    import uvicorn
    uvicorn.run(
        "sales_dashboard.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    run()
