"""
Exceptions raised by the sales analytics core

Both are converted to a generic server error at the API boundary.
"""

from typing import Optional


class SalesDashboardError(Exception):
    """Base class for errors raised while serving sales analytics."""
    pass


class DataUnavailable(SalesDashboardError):
    """Raised when the sales dataset is missing, unreadable or malformed."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class InvalidResult(SalesDashboardError):
    """Raised when an aggregation produced no result for a recognised mode."""
    pass
