"""
Filter predicates over sales records

Turns FilterCriteria into a single predicate and derives the option lists
the dashboard offers for each filter.
"""

import logging
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional

from sales_dashboard.core.models import FilterCriteria, SalesRecord

logger = logging.getLogger(__name__)

Predicate = Callable[[SalesRecord], bool]

# Criteria fields matched by exact equality, in the order they are applied
EQUALITY_FIELDS = ("region", "product", "sales_rep", "category", "customer_type")

# Option list name -> record field
OPTION_FIELDS = {
    "regions": "region",
    "products": "product",
    "sales_reps": "sales_rep",
    "categories": "category",
    "customer_types": "customer_type",
}
SEARCHABLE_OPTIONS = ("products", "sales_reps")


def _accept_all(record: SalesRecord) -> bool:
    return True


def _on_or_after(start: date) -> Predicate:
    return lambda record: record.date >= start


def _on_or_before(end: date) -> Predicate:
    return lambda record: record.date <= end


def _equals(field_name: str, value: str) -> Predicate:
    return lambda record: getattr(record, field_name) == value


def build_predicate(criteria: Optional[FilterCriteria]) -> Predicate:
    """
    Build a predicate accepting the records that satisfy every active constraint

    Args:
        criteria: Filter criteria; None or empty criteria accept everything

    Returns:
        Callable: Predicate over a single SalesRecord
    """
    if criteria is None:
        return _accept_all

    conditions: List[Predicate] = []

    if criteria.start_date is not None:
        conditions.append(_on_or_after(criteria.start_date))

    if criteria.end_date is not None:
        conditions.append(_on_or_before(criteria.end_date))

    for field_name in EQUALITY_FIELDS:
        value = getattr(criteria, field_name)
        if value:
            conditions.append(_equals(field_name, value))

    if not conditions:
        return _accept_all

    def predicate(record: SalesRecord) -> bool:
        return all(condition(record) for condition in conditions)

    return predicate


def apply_filters(records: Iterable[SalesRecord], criteria: Optional[FilterCriteria]) -> List[SalesRecord]:
    """
    Keep the records matching the criteria, preserving their order

    Args:
        records: Records to filter
        criteria: Filter criteria

    Returns:
        List[SalesRecord]: Matching records
    """
    predicate = build_predicate(criteria)
    filtered = [record for record in records if predicate(record)]

    if criteria is not None and criteria.active():
        logger.debug(f"Filter {criteria.active()} kept {len(filtered)} records")

    return filtered


def get_filter_options(records: Iterable[SalesRecord], search: Optional[str] = None) -> Dict[str, List[str]]:
    """
    Collect the distinct values offered by each dashboard filter

    Args:
        records: Records to collect values from
        search: Case-insensitive substring narrowing products and sales reps

    Returns:
        Dict[str, List[str]]: Distinct values per option list, in first-seen order
    """
    options: Dict[str, Dict[str, None]] = {name: {} for name in OPTION_FIELDS}

    for record in records:
        for name, field_name in OPTION_FIELDS.items():
            options[name].setdefault(getattr(record, field_name), None)

    result = {name: list(values) for name, values in options.items()}

    if search:
        query = search.lower()
        for name in SEARCHABLE_OPTIONS:
            result[name] = [value for value in result[name] if query in value.lower()]

    return result
