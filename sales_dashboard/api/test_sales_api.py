"""
Tests for sales records API endpoints
"""

import io

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from sales_dashboard.api.dependencies import record_store
from sales_dashboard.api.main import app
from sales_dashboard.core.record_store import REQUIRED_COLUMNS, RecordStore

client = TestClient(app)


@pytest.fixture
def sample_dataset(tmp_path):
    """Serve a small dataset through the record store dependency"""
    data = {
        "date": ["2024-01-15", "2024-02-10", "2024-02-12", "2024-03-01"],
        "sales_rep": ["Alice", "Alice", "Bob", "Bob"],
        "region": ["East", "East", "West", "West"],
        "category": ["Electronics", "Electronics", "Accessories", "Accessories"],
        "product": ["Laptop", "Laptop", "Mouse", "Mouse"],
        "quantity": ["2", "1", "3", "oops"],
        "unit_price": ["50", "50", "10", "10"],
        "total_price": ["100", "50", "30", "20"],
        "customer_type": ["Enterprise", "Enterprise", "SMB", "SMB"],
        "customer_name": ["Acme", "Acme", "Globex", "Initech"],
    }
    path = tmp_path / "sales.csv"
    pd.DataFrame(data, columns=REQUIRED_COLUMNS).to_csv(path, index=False)

    app.dependency_overrides[record_store] = lambda: RecordStore(path)
    yield path
    app.dependency_overrides.clear()


@pytest.fixture
def missing_dataset(tmp_path):
    """Point the record store dependency at a file that does not exist"""
    app.dependency_overrides[record_store] = lambda: RecordStore(tmp_path / "missing.csv")
    yield
    app.dependency_overrides.clear()


def test_query_sales(sample_dataset):
    """Test querying every record"""
    response = client.get("/api/sales")
    assert response.status_code == 200

    records = response.json()
    assert len(records) == 4
    assert records[0] == {
        "date": "2024-01-15",
        "sales_rep": "Alice",
        "region": "East",
        "category": "Electronics",
        "product": "Laptop",
        "quantity": 2,
        "unit_price": 50.0,
        "total_price": 100.0,
        "customer_type": "Enterprise",
        "customer_name": "Acme",
    }


def test_query_sales_unparseable_number_is_null(sample_dataset):
    """Test a bad numeric field is returned as null"""
    records = client.get("/api/sales").json()
    assert records[3]["quantity"] is None
    assert records[3]["total_price"] == 20.0


def test_query_sales_with_filters(sample_dataset):
    """Test filtering records by region and date range"""
    response = client.get("/api/sales", params={"region": "East"})
    assert response.status_code == 200
    assert [record["date"] for record in response.json()] == ["2024-01-15", "2024-02-10"]

    response = client.get("/api/sales", params={"start_date": "2024-02-10", "end_date": "2024-02-12"})
    assert [record["date"] for record in response.json()] == ["2024-02-10", "2024-02-12"]


def test_query_sales_no_match(sample_dataset):
    """Test a filter matching nothing returns an empty list"""
    response = client.get("/api/sales", params={"region": "Nowhere"})
    assert response.status_code == 200
    assert response.json() == []


def test_query_sales_invalid_date(sample_dataset):
    """Test an invalid date parameter is rejected"""
    response = client.get("/api/sales", params={"start_date": "yesterday"})
    assert response.status_code == 422

    body = response.json()
    assert body["type"] == "validation_error"
    assert body["errors"][0]["location"] == ["query", "start_date"]


def test_query_sales_missing_dataset(missing_dataset):
    """Test a missing dataset yields a JSON error"""
    response = client.get("/api/sales")
    assert response.status_code == 500

    body = response.json()
    assert body["error"] == "Failed to process sales data"
    assert body["status"] == 500
    assert "error_id" in body


def test_export_sales_csv(sample_dataset):
    """Test exporting filtered records as CSV"""
    response = client.get("/api/sales/export", params={"format": "csv", "region": "West"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment; filename=sales_data-" in response.headers["content-disposition"]
    assert response.headers["content-disposition"].endswith(".csv")

    df = pd.read_csv(io.StringIO(response.text))
    assert list(df.columns) == REQUIRED_COLUMNS
    assert len(df) == 2
    assert set(df["region"]) == {"West"}


def test_export_sales_excel(sample_dataset):
    """Test exporting records as Excel"""
    response = client.get("/api/sales/export", params={"format": "excel"})
    assert response.status_code == 200
    assert response.headers["content-type"] == (
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert response.headers["content-disposition"].endswith(".xlsx")

    df = pd.read_excel(io.BytesIO(response.content))
    assert len(df) == 4


def test_export_sales_invalid_format(sample_dataset):
    """Test exporting with an unsupported format"""
    response = client.get("/api/sales/export", params={"format": "pdf"})
    assert response.status_code == 400
    assert response.json()["error"] == "Unsupported export format. Use 'csv' or 'excel'"


def test_response_carries_request_headers(sample_dataset):
    """Test the logging middleware tags every response"""
    response = client.get("/api/sales")
    assert "x-request-id" in response.headers
    assert "x-process-time" in response.headers
