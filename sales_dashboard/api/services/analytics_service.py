"""
Service layer for sales analytics

Wraps the query dispatcher and shapes its results for JSON responses.
"""

from typing import Any, Dict, List, Optional, Union
import logging

from sales_dashboard.core import dispatcher
from sales_dashboard.core.models import AnalysisType, FilterCriteria
from sales_dashboard.core.record_store import RecordStore
from sales_dashboard.api.utils.serialization import to_json_safe

# Configure logging
logger = logging.getLogger(__name__)


def get_sales_records(criteria: FilterCriteria, store: RecordStore) -> List[Dict[str, Any]]:
    """
    Get the filtered sales records

    Args:
        criteria: Filter criteria
        store: Record store to read from

    Returns:
        List[Dict]: Records with numeric fields as numbers (null if unparseable)
    """
    records = dispatcher.query_records(criteria, store=store)
    return [to_json_safe(record.to_dict()) for record in records]


def get_analytics(
    criteria: FilterCriteria,
    analysis_type: Union[AnalysisType, str, None],
    store: RecordStore
) -> Any:
    """
    Get the aggregation result for one analysis

    Args:
        criteria: Filter criteria
        analysis_type: Analysis selector, falls back to overview
        store: Record store to read from

    Returns:
        Dict or List[Dict]: JSON-safe aggregation result
    """
    mode = AnalysisType.parse(analysis_type)
    result = dispatcher.handle(criteria, mode, store=store)
    return to_json_safe(result)


def get_filter_options(store: RecordStore, search: Optional[str] = None) -> Dict[str, List[str]]:
    """
    Get the values offered by each dashboard filter

    Args:
        store: Record store to read from
        search: Optional case-insensitive narrowing of products and sales reps

    Returns:
        Dict[str, List[str]]: Option lists
    """
    return dispatcher.filter_options(search=search, store=store)


def get_product_detail(product: str, criteria: FilterCriteria, store: RecordStore) -> Optional[Dict[str, Any]]:
    """
    Get the drill-down for one product

    Args:
        product: Exact product name
        criteria: Filter criteria applied before the drill-down
        store: Record store to read from

    Returns:
        Optional[Dict]: Product detail, or None if the product has no records
    """
    detail = dispatcher.product_details(product, criteria=criteria, store=store)
    if detail is None:
        logger.info(f"No records found for product {product!r}")
        return None
    return to_json_safe(detail)
