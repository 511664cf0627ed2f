"""
API data models for analytics results

The analytics endpoint returns the bare result, so these models document
the row shape of each analysis rather than validating responses.
"""

from pydantic import BaseModel, Field
from typing import Optional

from sales_dashboard.core.models import AnalysisType


class OverviewResponse(BaseModel):
    """Headline totals for the filtered data"""
    total_revenue: Optional[float] = Field(None, description="Sum of total_price")
    total_units: Optional[float] = Field(None, description="Sum of quantity")
    unique_products: int = Field(..., description="Distinct products")
    unique_categories: int = Field(..., description="Distinct categories")
    unique_regions: int = Field(..., description="Distinct regions")
    unique_sales_reps: int = Field(..., description="Distinct sales representatives")
    unique_customers: int = Field(..., description="Distinct customer names")
    data_points: int = Field(..., description="Number of records")


class RevenueTrendPoint(BaseModel):
    """Revenue and units for one month"""
    month: str = Field(..., description="Month (YYYY-MM)")
    revenue: Optional[float] = Field(None, description="Revenue in the month")
    units: Optional[float] = Field(None, description="Units sold in the month")


class RegionSales(BaseModel):
    region: str
    revenue: Optional[float] = None
    units: Optional[float] = None


class ProductPerformance(BaseModel):
    product: str
    revenue: Optional[float] = None
    units: Optional[float] = None


class SalesRepPerformance(BaseModel):
    sales_rep: str
    revenue: Optional[float] = None
    units: Optional[float] = None
    deals: int


class CategoryAnalysis(BaseModel):
    category: str
    revenue: Optional[float] = None
    units: Optional[float] = None


class CustomerTypeAnalysis(BaseModel):
    customer_type: str
    revenue: Optional[float] = None
    units: Optional[float] = None
    deals: int


class MonthlyGrowthPoint(BaseModel):
    """Revenue for one month and its change from the previous month"""
    month: str = Field(..., description="Month (YYYY-MM)")
    revenue: Optional[float] = Field(None, description="Revenue in the month")
    growth: Optional[float] = Field(None, description="Percent change from the previous month, absent for the first month")


# Row model of each analysis, used for documentation and export column order
ANALYSIS_MODELS = {
    AnalysisType.OVERVIEW: OverviewResponse,
    AnalysisType.REVENUE_TREND: RevenueTrendPoint,
    AnalysisType.REGION_SALES: RegionSales,
    AnalysisType.PRODUCT_PERFORMANCE: ProductPerformance,
    AnalysisType.SALES_REP_PERFORMANCE: SalesRepPerformance,
    AnalysisType.CATEGORY_ANALYSIS: CategoryAnalysis,
    AnalysisType.CUSTOMER_TYPE_ANALYSIS: CustomerTypeAnalysis,
    AnalysisType.MONTHLY_GROWTH: MonthlyGrowthPoint,
}
