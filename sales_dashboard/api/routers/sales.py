"""
API router for raw sales records

Provides endpoints for querying and exporting the filtered transaction list.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from typing import List
import logging

from sales_dashboard.api.dependencies import filter_criteria, record_store
from sales_dashboard.api.models.sales import SalesRecordResponse
from sales_dashboard.api.services.analytics_service import get_sales_records
from sales_dashboard.api.services.export_service import build_export, is_supported_format, records_frame
from sales_dashboard.core.exceptions import SalesDashboardError
from sales_dashboard.core.models import FilterCriteria
from sales_dashboard.core.record_store import RecordStore

# Create router
router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[SalesRecordResponse],
    summary="Query sales records",
    description="Return the sales records matching the filter parameters"
)
def query_sales(
    criteria: FilterCriteria = Depends(filter_criteria),
    store: RecordStore = Depends(record_store)
):
    """
    Return the sales records matching the filter parameters

    Args:
        criteria: Filter criteria built from the query string
        store: Record store to read from

    Returns:
        List[SalesRecordResponse]: Matching records in dataset order
    """
    try:
        return get_sales_records(criteria, store)

    except SalesDashboardError as e:
        logger.error(f"Error processing sales data: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process sales data"
        )


@router.get(
    "/export",
    summary="Export sales records",
    description="Export the filtered sales records as CSV or Excel"
)
def export_sales(
    format: str = "csv",
    criteria: FilterCriteria = Depends(filter_criteria),
    store: RecordStore = Depends(record_store)
):
    """
    Export the filtered sales records

    Args:
        format: Export format (csv or excel)
        criteria: Filter criteria built from the query string
        store: Record store to read from

    Returns:
        StreamingResponse: File download response
    """
    if not is_supported_format(format):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unsupported export format. Use 'csv' or 'excel'"
        )

    try:
        records = get_sales_records(criteria, store)
        output, media_type, filename = build_export(records_frame(records), "sales_data", format)

    except SalesDashboardError as e:
        logger.error(f"Error exporting sales data: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to export sales data"
        )

    return StreamingResponse(
        output,
        media_type=media_type,
        headers={
            "Content-Disposition": f"attachment; filename={filename}"
        }
    )
