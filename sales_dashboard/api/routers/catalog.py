"""
API router for filter options and product drill-down

Provides the lookups the dashboard uses to populate its filters and
product pages.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from datetime import date
from typing import Optional
import logging

from sales_dashboard.api.dependencies import record_store
from sales_dashboard.api.models.sales import FilterOptions, ProductDetail
from sales_dashboard.api.services.analytics_service import get_filter_options, get_product_detail
from sales_dashboard.core.exceptions import SalesDashboardError
from sales_dashboard.core.models import FilterCriteria
from sales_dashboard.core.record_store import RecordStore

# Create router
router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/filters",
    response_model=FilterOptions,
    summary="Get filter options",
    description="Distinct regions, products, sales reps, categories and customer types"
)
def filter_options(
    search: Optional[str] = Query(None, description="Case-insensitive search over products and sales reps"),
    store: RecordStore = Depends(record_store)
):
    """
    Get the values offered by each dashboard filter

    Args:
        search: Optional text narrowing the product and sales rep lists
        store: Record store to read from

    Returns:
        FilterOptions: Option lists in first-seen order
    """
    try:
        return get_filter_options(store, search=search)

    except SalesDashboardError as e:
        logger.error(f"Error loading filter options: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load filter options"
        )


@router.get(
    "/products/{product}",
    response_model=ProductDetail,
    summary="Get product details",
    description="Summary and monthly, region and customer type breakdowns for one product"
)
def product_detail(
    product: str,
    start_date: Optional[date] = Query(None, description="Include records on or after this date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Include records on or before this date (YYYY-MM-DD)"),
    region: Optional[str] = Query(None, description="Exact region"),
    sales_rep: Optional[str] = Query(None, description="Exact sales representative"),
    customer_type: Optional[str] = Query(None, description="Exact customer type"),
    store: RecordStore = Depends(record_store)
):
    """
    Get the drill-down for one product

    Args:
        product: Exact product name
        start_date: Lower date bound
        end_date: Upper date bound
        region: Region filter
        sales_rep: Sales representative filter
        customer_type: Customer type filter
        store: Record store to read from

    Returns:
        ProductDetail: Product summary and breakdowns
    """
    criteria = FilterCriteria(
        start_date=start_date,
        end_date=end_date,
        region=region,
        sales_rep=sales_rep,
        customer_type=customer_type,
    )

    try:
        detail = get_product_detail(product, criteria, store)

    except SalesDashboardError as e:
        logger.error(f"Error loading product {product!r}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load product data"
        )

    if detail is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product {product} not found"
        )

    return detail
