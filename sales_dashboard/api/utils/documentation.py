"""
Utilities for enhancing API documentation
"""

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

API_DESCRIPTION = """
# Sales Analytics Dashboard API

Read-only analytics over a static dataset of sales transactions.

## Features

- **Sales**: Query and export the filtered transaction list
- **Analytics**: Overview, revenue trend, region, product, sales rep,
  category, customer type and monthly growth analyses
- **Catalog**: Filter option lists and per-product drill-down
- **Health**: Liveness, readiness and dataset availability

## Filtering

Every query endpoint accepts `start_date` and `end_date` (inclusive,
`YYYY-MM-DD`) plus exact-match `region`, `product`, `sales_rep`, `category`
and `customer_type` parameters. Omitted parameters do not constrain.
"""

TAGS = [
    {"name": "Sales", "description": "Access and export filtered sales records"},
    {"name": "Analytics", "description": "Grouped sales analyses and their exports"},
    {"name": "Catalog", "description": "Filter options and product drill-down"},
    {"name": "Health", "description": "Health check endpoints for monitoring"},
]


def install_openapi(app: FastAPI):
    """
    Customize the OpenAPI documentation of the app

    Args:
        app: FastAPI application
    """
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=API_DESCRIPTION,
            routes=app.routes,
        )
        openapi_schema["tags"] = TAGS

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi
