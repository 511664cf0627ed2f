"""
Shared request dependencies

Filter criteria are built per request from query parameters and passed
explicitly into every query; nothing is stored on the application.
"""

from datetime import date
from typing import Optional

from fastapi import Query

from sales_dashboard.core.dispatcher import get_record_store
from sales_dashboard.core.models import FilterCriteria
from sales_dashboard.core.record_store import RecordStore


def record_store() -> RecordStore:
    """Record store dependency, overridable in tests"""
    return get_record_store()


def filter_criteria(
    start_date: Optional[date] = Query(None, description="Include records on or after this date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Include records on or before this date (YYYY-MM-DD)"),
    region: Optional[str] = Query(None, description="Exact region"),
    product: Optional[str] = Query(None, description="Exact product"),
    sales_rep: Optional[str] = Query(None, description="Exact sales representative"),
    category: Optional[str] = Query(None, description="Exact category"),
    customer_type: Optional[str] = Query(None, description="Exact customer type"),
) -> FilterCriteria:
    return FilterCriteria(
        start_date=start_date,
        end_date=end_date,
        region=region,
        product=product,
        sales_rep=sales_rep,
        category=category,
        customer_type=customer_type,
    )
