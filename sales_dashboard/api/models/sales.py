"""
API data models for sales records
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class SalesRecordResponse(BaseModel):
    """Model for a single sales transaction"""
    date: str = Field(..., description="Transaction date (YYYY-MM-DD)")
    sales_rep: str = Field(..., description="Sales representative")
    region: str = Field(..., description="Sales region")
    category: str = Field(..., description="Product category")
    product: str = Field(..., description="Product name")
    quantity: Optional[int] = Field(None, description="Units sold, null if unparseable")
    unit_price: Optional[float] = Field(None, description="Price per unit, null if unparseable")
    total_price: Optional[float] = Field(None, description="Stored transaction total, null if unparseable")
    customer_type: str = Field(..., description="Customer segment")
    customer_name: str = Field(..., description="Customer name")


class FilterOptions(BaseModel):
    """Model for the values offered by each dashboard filter"""
    regions: List[str] = Field(..., description="Distinct regions")
    products: List[str] = Field(..., description="Distinct products")
    sales_reps: List[str] = Field(..., description="Distinct sales representatives")
    categories: List[str] = Field(..., description="Distinct categories")
    customer_types: List[str] = Field(..., description="Distinct customer types")


class ProductSummary(BaseModel):
    """Model for a product's headline figures"""
    revenue: Optional[float] = Field(None, description="Total revenue")
    units: Optional[float] = Field(None, description="Total units sold")
    deals: int = Field(..., description="Number of transactions")
    average_price: Optional[float] = Field(None, description="Revenue per unit")


class ProductDetail(BaseModel):
    """Model for the product drill-down"""
    product: str = Field(..., description="Product name")
    category: str = Field(..., description="Product category")
    summary: ProductSummary = Field(..., description="Headline figures")
    monthly_sales: List[Dict] = Field(..., description="Revenue and units per month")
    region_sales: List[Dict] = Field(..., description="Revenue and units per region")
    customer_types: List[Dict] = Field(..., description="Revenue, units and deals per customer type")
