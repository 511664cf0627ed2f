"""
Query dispatcher

Composes load -> filter -> aggregate for one request. Nothing is kept between
calls apart from whatever the record store chooses to cache.
"""

import logging
from functools import lru_cache
from typing import Dict, List, Optional, Union

from sales_dashboard.config.settings import get_settings
from sales_dashboard.core.aggregation import AggregationResult, aggregate, product_detail
from sales_dashboard.core.exceptions import InvalidResult
from sales_dashboard.core.filters import apply_filters, get_filter_options
from sales_dashboard.core.models import AnalysisType, FilterCriteria, SalesRecord
from sales_dashboard.core.record_store import RecordStore

logger = logging.getLogger(__name__)


@lru_cache()
def get_record_store() -> RecordStore:
    """Record store configured from settings, shared so its cache survives requests"""
    settings = get_settings()
    return RecordStore(
        settings.DATA_FILE,
        cache_enabled=settings.DATA_CACHE_ENABLED,
        read_timeout=settings.DATA_READ_TIMEOUT,
    )


def handle(
    criteria: Optional[FilterCriteria],
    mode: Union[AnalysisType, str, None],
    store: Optional[RecordStore] = None
) -> AggregationResult:
    """
    Run one analytics query

    Args:
        criteria: Filter criteria applied before grouping
        mode: Analysis selector; unknown selectors fall back to overview
        store: Record store to read from (defaults to the configured one)

    Returns:
        Dict or List[Dict]: Aggregation result

    Raises:
        DataUnavailable: If the dataset cannot be loaded
        InvalidResult: If a recognised mode produced no result
    """
    store = store or get_record_store()
    analysis_type = AnalysisType.parse(mode)

    records = store.load()
    filtered = apply_filters(records, criteria)
    result = aggregate(filtered, analysis_type)

    if result is None:
        raise InvalidResult(f"Aggregation {analysis_type.value} returned no result")

    logger.debug(f"Analysis {analysis_type.value} over {len(filtered)} of {len(records)} records")
    return result


def query_records(criteria: Optional[FilterCriteria], store: Optional[RecordStore] = None) -> List[SalesRecord]:
    """Load the dataset and return the records matching the criteria"""
    store = store or get_record_store()
    return apply_filters(store.load(), criteria)


def filter_options(search: Optional[str] = None, store: Optional[RecordStore] = None) -> Dict[str, List[str]]:
    """Distinct values for every dashboard filter, taken from the whole dataset"""
    store = store or get_record_store()
    return get_filter_options(store.load(), search=search)


def product_details(
    product: str,
    criteria: Optional[FilterCriteria] = None,
    store: Optional[RecordStore] = None
) -> Optional[Dict]:
    """Drill-down for one product, or None when it has no matching records"""
    store = store or get_record_store()
    filtered = apply_filters(store.load(), criteria)
    return product_detail(filtered, product)
