"""
Tests for filter predicates and filter options
"""

from datetime import date, datetime

import pytest

from sales_dashboard.core.filters import apply_filters, build_predicate, get_filter_options
from sales_dashboard.core.models import FilterCriteria, SalesRecord


def make_record(day, region="East", total_price=100.0, quantity=1, **fields):
    """Helper to build a record with sensible defaults"""
    values = {
        "sales_rep": "Alice",
        "category": "Electronics",
        "product": "Laptop",
        "unit_price": 100.0,
        "customer_type": "Enterprise",
        "customer_name": "Acme",
    }
    values.update(fields)
    return SalesRecord(
        date=date.fromisoformat(day),
        region=region,
        total_price=total_price,
        quantity=quantity,
        **values
    )


@pytest.fixture
def records():
    """A small mixed set of records"""
    return [
        make_record("2024-01-15", "East", 100.0, 2),
        make_record("2024-01-31", "West", 75.0, 1, product="Mouse", sales_rep="Bob"),
        make_record("2024-02-01", "East", 50.0, 1, product="Mouse", category="Accessories"),
        make_record("2024-02-20", "West", 20.0, 4, customer_type="SMB", sales_rep="Bob"),
        make_record("2024-03-05", "east", 10.0, 1),
    ]


def test_region_filter_keeps_only_matching_records(records):
    """Test filtering by region keeps exactly the East records"""
    filtered = apply_filters(records, FilterCriteria(region="East"))

    east = [record for record in records if record.region == "East"]
    assert filtered == east
    assert len(filtered) == 2
    assert sum(record.total_price for record in filtered) == 150.0


def test_region_filter_is_case_sensitive(records):
    """Test 'east' and 'East' are different regions"""
    filtered = apply_filters(records, FilterCriteria(region="east"))
    assert [record.date for record in filtered] == [date(2024, 3, 5)]


def test_no_criteria_accepts_everything(records):
    """Test empty criteria and None both keep every record"""
    assert apply_filters(records, FilterCriteria()) == records
    assert apply_filters(records, None) == records
    assert build_predicate(FilterCriteria())(records[0]) is True


def test_empty_strings_do_not_constrain(records):
    """Test blank filter values are treated as absent"""
    criteria = FilterCriteria(region="", product="", sales_rep="")
    assert apply_filters(records, criteria) == records


def test_date_bounds_are_inclusive(records):
    """Test records on the boundary dates are kept"""
    criteria = FilterCriteria(start_date=date(2024, 1, 31), end_date=date(2024, 2, 20))
    filtered = apply_filters(records, criteria)
    assert [record.date.isoformat() for record in filtered] == ["2024-01-31", "2024-02-01", "2024-02-20"]


def test_datetime_bounds_ignore_time_of_day(records):
    """Test a bound carrying a time still includes the whole day"""
    criteria = FilterCriteria(end_date=datetime(2024, 1, 15, 23, 59))
    assert criteria.end_date == date(2024, 1, 15)
    assert [record.date for record in apply_filters(records, criteria)] == [date(2024, 1, 15)]


def test_constraints_are_combined_with_and(records):
    """Test every active constraint must hold"""
    criteria = FilterCriteria(region="West", sales_rep="Bob", customer_type="SMB")
    filtered = apply_filters(records, criteria)
    assert filtered == [records[3]]


def test_product_and_category_filters(records):
    """Test product and category equality filters"""
    assert apply_filters(records, FilterCriteria(product="Mouse")) == [records[1], records[2]]
    assert apply_filters(records, FilterCriteria(category="Accessories")) == [records[2]]


@pytest.mark.parametrize("criteria", [
    FilterCriteria(),
    FilterCriteria(region="East"),
    FilterCriteria(start_date=date(2024, 2, 1)),
    FilterCriteria(end_date=date(2024, 1, 31), sales_rep="Bob"),
    FilterCriteria(region="Nowhere"),
])
def test_filter_is_an_idempotent_subset(records, criteria):
    """Test filtering returns a subset and filtering again changes nothing"""
    once = apply_filters(records, criteria)
    twice = apply_filters(once, criteria)

    assert all(record in records for record in once)
    assert twice == once


def test_filtering_does_not_mutate_input(records):
    """Test the source list is left untouched"""
    original = list(records)
    apply_filters(records, FilterCriteria(region="West"))
    assert records == original


def test_active_criteria():
    """Test only set constraints are reported as active"""
    criteria = FilterCriteria(region="East", product="", start_date=date(2024, 1, 1))
    assert criteria.active() == {"start_date": date(2024, 1, 1), "region": "East"}


def test_filter_options_in_first_seen_order(records):
    """Test distinct option values keep their first-seen order"""
    options = get_filter_options(records)
    assert options == {
        "regions": ["East", "West", "east"],
        "products": ["Laptop", "Mouse"],
        "sales_reps": ["Alice", "Bob"],
        "categories": ["Electronics", "Accessories"],
        "customer_types": ["Enterprise", "SMB"],
    }


def test_filter_options_search_narrows_products_and_reps(records):
    """Test the search text narrows products and sales reps only"""
    options = get_filter_options(records, search="MOU")
    assert options["products"] == ["Mouse"]
    assert options["sales_reps"] == []
    assert options["regions"] == ["East", "West", "east"]
