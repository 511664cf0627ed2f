"""
Core data models for sales analytics

Records are loaded once per request (or once per dataset version when
caching is enabled) and never mutated afterwards.
"""

from dataclasses import dataclass, fields
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class SalesRecord:
    """One parsed sales transaction row"""
    date: date
    sales_rep: str
    region: str
    category: str
    product: str
    quantity: Union[int, float]  # float only for the NaN sentinel
    unit_price: float
    total_price: float
    customer_type: str
    customer_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "sales_rep": self.sales_rep,
            "region": self.region,
            "category": self.category,
            "product": self.product,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total_price": self.total_price,
            "customer_type": self.customer_type,
            "customer_name": self.customer_name,
        }


@dataclass(frozen=True)
class FilterCriteria:
    """
    Optional constraints narrowing the record set before aggregation.

    Date bounds are inclusive calendar dates. The string fields are exact,
    case-sensitive matches. A field left as None (or empty) does not constrain.
    """
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    region: Optional[str] = None
    product: Optional[str] = None
    sales_rep: Optional[str] = None
    category: Optional[str] = None
    customer_type: Optional[str] = None

    def __post_init__(self):
        # Time of day never takes part in the comparison
        for name in ("start_date", "end_date"):
            value = getattr(self, name)
            if isinstance(value, datetime):
                object.__setattr__(self, name, value.date())

    def active(self) -> Dict[str, Any]:
        """Return only the constraints that are set."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) not in (None, "")
        }


class AnalysisType(str, Enum):
    """Aggregation modes served by the analytics endpoint"""
    OVERVIEW = "overview"
    REVENUE_TREND = "revenue-trend"
    REGION_SALES = "region-sales"
    PRODUCT_PERFORMANCE = "product-performance"
    SALES_REP_PERFORMANCE = "sales-rep-performance"
    CATEGORY_ANALYSIS = "category-analysis"
    CUSTOMER_TYPE_ANALYSIS = "customer-type-analysis"
    MONTHLY_GROWTH = "monthly-growth"

    @classmethod
    def parse(cls, value: Optional[str]) -> "AnalysisType":
        """Map a selector to a mode. Unknown or missing selectors mean overview."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.OVERVIEW
