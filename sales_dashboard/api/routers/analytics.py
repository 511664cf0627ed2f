"""
API router for sales analytics

Provides the aggregation endpoint and its export.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from typing import Optional
import logging

from sales_dashboard.api.dependencies import filter_criteria, record_store
from sales_dashboard.api.services.analytics_service import get_analytics
from sales_dashboard.api.services.export_service import analytics_frame, build_export, is_supported_format
from sales_dashboard.core.exceptions import SalesDashboardError
from sales_dashboard.core.models import AnalysisType, FilterCriteria
from sales_dashboard.core.record_store import RecordStore

# Create router
router = APIRouter()
logger = logging.getLogger(__name__)

ANALYSIS_TYPE_DESCRIPTION = (
    "Analysis to run: " + ", ".join(t.value for t in AnalysisType)
    + ". Unknown values fall back to overview."
)


@router.get(
    "",
    summary="Run a sales analysis",
    description="Group the filtered sales records and return the requested analysis"
)
def run_analysis(
    analysis_type: Optional[str] = Query(None, alias="type", description=ANALYSIS_TYPE_DESCRIPTION),
    criteria: FilterCriteria = Depends(filter_criteria),
    store: RecordStore = Depends(record_store)
):
    """
    Group the filtered sales records and return the requested analysis

    Args:
        analysis_type: Analysis selector (defaults to overview)
        criteria: Filter criteria built from the query string
        store: Record store to read from

    Returns:
        Dict or List[Dict]: The overview object or the grouped rows
    """
    try:
        return get_analytics(criteria, analysis_type, store)

    except SalesDashboardError as e:
        logger.error(f"Error processing analytics data: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process analytics data"
        )


@router.get(
    "/export",
    summary="Export a sales analysis",
    description="Export the requested analysis as CSV or Excel"
)
def export_analysis(
    analysis_type: Optional[str] = Query(None, alias="type", description=ANALYSIS_TYPE_DESCRIPTION),
    format: str = "csv",
    criteria: FilterCriteria = Depends(filter_criteria),
    store: RecordStore = Depends(record_store)
):
    """
    Export the requested analysis

    Args:
        analysis_type: Analysis selector (defaults to overview)
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

    mode = AnalysisType.parse(analysis_type)

    try:
        result = get_analytics(criteria, mode, store)
        base_name = f"{mode.value.replace('-', '_')}_data"
        output, media_type, filename = build_export(analytics_frame(mode, result), base_name, format)

    except SalesDashboardError as e:
        logger.error(f"Error exporting analytics data: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to export analytics data"
        )

    return StreamingResponse(
        output,
        media_type=media_type,
        headers={
            "Content-Disposition": f"attachment; filename={filename}"
        }
    )
