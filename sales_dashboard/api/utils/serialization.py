"""
JSON helpers for analytics payloads
"""

import math
from typing import Any


def to_json_safe(value: Any) -> Any:
    """
    Replace NaN and infinite floats with None, recursively

    A numeric field that failed to parse is carried as NaN through the
    aggregations; JSON has no NaN, so it is reported as null.
    """
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {key: to_json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_safe(item) for item in value]
    return value
