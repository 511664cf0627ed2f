"""
Aggregation engine for sales analytics

Every routine is a pure function of its input records. Groups are accumulated
in first-encountered order, so the revenue rankings are stable on ties.
"""

import math
import logging
import operator
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from sales_dashboard.core.models import AnalysisType, SalesRecord

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
AggregationResult = Union[Row, List[Row]]


@dataclass
class GroupTotals:
    """Running totals for one group of records"""
    revenue: float = 0.0
    units: Union[int, float] = 0
    deals: int = 0

    def add(self, record: SalesRecord) -> None:
        self.revenue += record.total_price
        self.units += record.quantity
        self.deals += 1


def month_key(record: SalesRecord) -> str:
    """YYYY-MM label of the record's calendar month"""
    return f"{record.date.year:04d}-{record.date.month:02d}"


def _group_by(records: Iterable[SalesRecord], key: Callable[[SalesRecord], str]) -> Dict[str, GroupTotals]:
    groups: Dict[str, GroupTotals] = {}
    for record in records:
        group = key(record)
        totals = groups.get(group)
        if totals is None:
            totals = groups[group] = GroupTotals()
        totals.add(record)
    return groups


def _by_revenue_desc(row: Row):
    # NaN revenue sorts last and compares equal to other NaNs
    revenue = row["revenue"]
    if math.isnan(revenue):
        return (1, 0.0)
    return (0, -revenue)


def _rank_by_revenue(records: Iterable[SalesRecord], field_name: str, with_deals: bool = False) -> List[Row]:
    groups = _group_by(records, operator.attrgetter(field_name))

    rows = []
    for value, totals in groups.items():
        row = {field_name: value, "revenue": totals.revenue, "units": totals.units}
        if with_deals:
            row["deals"] = totals.deals
        rows.append(row)

    rows.sort(key=_by_revenue_desc)
    return rows


def overview(records: Sequence[SalesRecord]) -> Row:
    """Headline totals and distinct counts for the whole record set"""
    totals = GroupTotals()
    for record in records:
        totals.add(record)

    return {
        "total_revenue": totals.revenue,
        "total_units": totals.units,
        "unique_products": len({record.product for record in records}),
        "unique_categories": len({record.category for record in records}),
        "unique_regions": len({record.region for record in records}),
        "unique_sales_reps": len({record.sales_rep for record in records}),
        "unique_customers": len({record.customer_name for record in records}),
        "data_points": totals.deals,
    }


def revenue_trend(records: Iterable[SalesRecord]) -> List[Row]:
    """Revenue and units per month, oldest month first"""
    groups = _group_by(records, month_key)
    return [
        {"month": month, "revenue": totals.revenue, "units": totals.units}
        for month, totals in sorted(groups.items(), key=operator.itemgetter(0))
    ]


def region_sales(records: Iterable[SalesRecord]) -> List[Row]:
    return _rank_by_revenue(records, "region")


def product_performance(records: Iterable[SalesRecord]) -> List[Row]:
    return _rank_by_revenue(records, "product")


def sales_rep_performance(records: Iterable[SalesRecord]) -> List[Row]:
    return _rank_by_revenue(records, "sales_rep", with_deals=True)


def category_analysis(records: Iterable[SalesRecord]) -> List[Row]:
    return _rank_by_revenue(records, "category")


def customer_type_analysis(records: Iterable[SalesRecord]) -> List[Row]:
    return _rank_by_revenue(records, "customer_type", with_deals=True)


def monthly_growth(records: Iterable[SalesRecord]) -> List[Row]:
    """
    Revenue per month with the percentage change from the previous month

    The first month carries no growth value. A month following a zero (or
    NaN) revenue month reports 0% growth, including a zero to positive jump.
    """
    groups = _group_by(records, month_key)
    months = [
        {"month": month, "revenue": totals.revenue}
        for month, totals in sorted(groups.items(), key=operator.itemgetter(0))
    ]

    for previous, current in zip(months, months[1:]):
        previous_revenue = previous["revenue"]
        if previous_revenue and not math.isnan(previous_revenue):
            current["growth"] = (current["revenue"] - previous_revenue) / previous_revenue * 100
        else:
            current["growth"] = 0.0

    return months


AGGREGATIONS: Dict[AnalysisType, Callable[[Sequence[SalesRecord]], AggregationResult]] = {
    AnalysisType.OVERVIEW: overview,
    AnalysisType.REVENUE_TREND: revenue_trend,
    AnalysisType.REGION_SALES: region_sales,
    AnalysisType.PRODUCT_PERFORMANCE: product_performance,
    AnalysisType.SALES_REP_PERFORMANCE: sales_rep_performance,
    AnalysisType.CATEGORY_ANALYSIS: category_analysis,
    AnalysisType.CUSTOMER_TYPE_ANALYSIS: customer_type_analysis,
    AnalysisType.MONTHLY_GROWTH: monthly_growth,
}


def aggregate(records: Sequence[SalesRecord], mode: Union[AnalysisType, str, None]) -> AggregationResult:
    """
    Group and reduce records for the requested analysis

    Args:
        records: Already filtered records
        mode: Analysis selector; unknown selectors fall back to overview

    Returns:
        Dict or List[Dict]: The overview object or the list of grouped rows
    """
    analysis_type = AnalysisType.parse(mode)
    if mode is not None and analysis_type.value != mode:
        logger.info(f"Unknown analysis type {mode!r}, falling back to {analysis_type.value}")

    return AGGREGATIONS[analysis_type](records)


def product_detail(records: Sequence[SalesRecord], product: str) -> Optional[Row]:
    """
    Drill-down for a single product

    Args:
        records: Records to draw from (usually already filtered)
        product: Exact product name

    Returns:
        Optional[Dict]: Summary plus monthly, region and customer type
            breakdowns, or None when the product has no records
    """
    product_records = [record for record in records if record.product == product]
    if not product_records:
        return None

    totals = GroupTotals()
    for record in product_records:
        totals.add(record)

    average_price = totals.revenue / totals.units if totals.units else 0.0

    return {
        "product": product,
        "category": product_records[0].category,
        "summary": {
            "revenue": totals.revenue,
            "units": totals.units,
            "deals": totals.deals,
            "average_price": average_price,
        },
        "monthly_sales": revenue_trend(product_records),
        "region_sales": region_sales(product_records),
        "customer_types": customer_type_analysis(product_records),
    }
