"""
Tests for analytics API endpoints
"""

import io

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from sales_dashboard.api.dependencies import record_store
from sales_dashboard.api.main import app
from sales_dashboard.core.models import AnalysisType
from sales_dashboard.core.record_store import REQUIRED_COLUMNS, RecordStore

client = TestClient(app)


@pytest.fixture
def sample_dataset(tmp_path):
    """Serve a small dataset through the record store dependency"""
    path = tmp_path / "sales.csv"
    path.write_text("\n".join([
        ",".join(REQUIRED_COLUMNS),
        "2024-01-15,Alice,East,Electronics,Laptop,2,50,100,Enterprise,Acme",
        "2024-02-10,Alice,East,Electronics,Laptop,1,50,50,Enterprise,Acme",
        "2024-02-12,Bob,West,Accessories,Mouse,3,10,30,SMB,Globex",
        "2024-03-03,Carol,North,Furniture,Chair,1,abc,abc,Individual,Jane",
    ]) + "\n", encoding="utf-8")

    app.dependency_overrides[record_store] = lambda: RecordStore(path)
    yield path
    app.dependency_overrides.clear()


def test_overview_is_default(sample_dataset):
    """Test the overview is returned when no type is given"""
    response = client.get("/api/analytics")
    assert response.status_code == 200

    overview = response.json()
    assert overview["data_points"] == 4
    assert overview["total_units"] == 7
    assert overview["unique_products"] == 3
    assert overview["unique_customers"] == 3
    # a single unparseable price makes the revenue total unknown
    assert overview["total_revenue"] is None


def test_unknown_type_matches_overview(sample_dataset):
    """Test an unrecognised type returns exactly the overview"""
    unknown = client.get("/api/analytics", params={"type": "not-a-type"})
    overview = client.get("/api/analytics", params={"type": "overview"})
    assert unknown.status_code == 200
    assert unknown.json() == overview.json()


@pytest.mark.parametrize("analysis_type", [t.value for t in AnalysisType if t is not AnalysisType.OVERVIEW])
def test_every_analysis_returns_rows(sample_dataset, analysis_type):
    """Test each grouped analysis returns a list of rows"""
    response = client.get("/api/analytics", params={"type": analysis_type})
    assert response.status_code == 200
    assert isinstance(response.json(), list)
    assert response.json()


def test_monthly_growth_for_region(sample_dataset):
    """Test the East-only monthly growth scenario"""
    response = client.get("/api/analytics", params={"type": "monthly-growth", "region": "East"})
    assert response.status_code == 200
    assert response.json() == [
        {"month": "2024-01", "revenue": 100.0},
        {"month": "2024-02", "revenue": 50.0, "growth": -50.0},
    ]


def test_sales_rep_performance(sample_dataset):
    """Test sales rep rows with deal counts"""
    response = client.get(
        "/api/analytics",
        params={"type": "sales-rep-performance", "end_date": "2024-02-28"}
    )
    assert response.json() == [
        {"sales_rep": "Alice", "revenue": 150.0, "units": 3, "deals": 2},
        {"sales_rep": "Bob", "revenue": 30.0, "units": 3, "deals": 1},
    ]


def test_region_sales_nan_group_last(sample_dataset):
    """Test a group with unknown revenue is ranked last and serialized as null"""
    rows = client.get("/api/analytics", params={"type": "region-sales"}).json()
    assert [row["region"] for row in rows] == ["East", "West", "North"]
    assert rows[-1]["revenue"] is None


def test_analytics_invalid_date(sample_dataset):
    """Test an invalid date parameter is rejected"""
    response = client.get("/api/analytics", params={"end_date": "2024-13-45"})
    assert response.status_code == 422


def test_analytics_missing_dataset(tmp_path):
    """Test a missing dataset yields a JSON error"""
    app.dependency_overrides[record_store] = lambda: RecordStore(tmp_path / "missing.csv")
    try:
        response = client.get("/api/analytics", params={"type": "region-sales"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to process analytics data"


def test_export_analytics_csv(sample_dataset):
    """Test exporting an analysis as CSV"""
    response = client.get(
        "/api/analytics/export",
        params={"type": "category-analysis", "format": "csv", "end_date": "2024-02-28"}
    )
    assert response.status_code == 200
    assert "filename=category_analysis_data-" in response.headers["content-disposition"]

    df = pd.read_csv(io.StringIO(response.text))
    assert list(df.columns) == ["category", "revenue", "units"]
    assert list(df["category"]) == ["Electronics", "Accessories"]


def test_export_overview_single_row(sample_dataset):
    """Test the overview export is one row"""
    response = client.get("/api/analytics/export", params={"format": "csv"})
    assert response.status_code == 200
    assert "filename=overview_data-" in response.headers["content-disposition"]

    df = pd.read_csv(io.StringIO(response.text))
    assert len(df) == 1
    assert df.loc[0, "data_points"] == 4


def test_export_analytics_excel(sample_dataset):
    """Test exporting an analysis as Excel"""
    response = client.get("/api/analytics/export", params={"type": "revenue-trend", "format": "excel"})
    assert response.status_code == 200
    assert response.headers["content-disposition"].endswith(".xlsx")

    df = pd.read_excel(io.BytesIO(response.content))
    assert list(df["month"]) == ["2024-01", "2024-02", "2024-03"]


def test_export_analytics_invalid_format(sample_dataset):
    """Test exporting with an unsupported format"""
    response = client.get("/api/analytics/export", params={"format": "pdf"})
    assert response.status_code == 400
