"""
Service layer for file exports

Builds CSV and Excel downloads from record lists and analytics results.
"""

from typing import Any, Dict, List, Tuple, Union
import io
import logging
from datetime import datetime, timezone

import pandas as pd

from sales_dashboard.core.models import AnalysisType
from sales_dashboard.core.record_store import REQUIRED_COLUMNS
from sales_dashboard.api.models.analytics import ANALYSIS_MODELS

# Configure logging
logger = logging.getLogger(__name__)

EXPORT_FORMATS = {
    "csv": ("text/csv", "csv"),
    "excel": ("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", "xlsx"),
}


def is_supported_format(file_format: str) -> bool:
    return file_format.lower() in EXPORT_FORMATS


def analytics_frame(analysis_type: AnalysisType, result: Union[Dict[str, Any], List[Dict[str, Any]]]) -> pd.DataFrame:
    """
    Tabulate an analytics result

    Args:
        analysis_type: Analysis the result belongs to
        result: Overview object or list of grouped rows

    Returns:
        pd.DataFrame: One row per group (a single row for the overview)
    """
    rows = [result] if isinstance(result, dict) else result
    columns = list(ANALYSIS_MODELS[analysis_type].model_fields)
    return pd.DataFrame(rows, columns=columns)


def records_frame(records: List[Dict[str, Any]]) -> pd.DataFrame:
    """Tabulate serialized sales records in dataset column order"""
    return pd.DataFrame(records, columns=REQUIRED_COLUMNS)


def build_export(df: pd.DataFrame, base_name: str, file_format: str = "csv") -> Tuple[io.BytesIO, str, str]:
    """
    Write a DataFrame into an in-memory file

    Args:
        df: Data to export
        base_name: File name without timestamp or extension
        file_format: Export format ('csv' or 'excel')

    Returns:
        Tuple[io.BytesIO, str, str]: File buffer, media type and file name

    Raises:
        ValueError: For unsupported formats
    """
    file_format = file_format.lower()
    if file_format not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {file_format}")

    media_type, extension = EXPORT_FORMATS[file_format]
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    filename = f"{base_name}-{timestamp}.{extension}"

    # Create in-memory file
    output = io.BytesIO()

    if file_format == "csv":
        df.to_csv(output, index=False)
    else:
        df.to_excel(output, index=False)

    # Reset buffer position
    output.seek(0)

    logger.info(f"Built {file_format} export {filename} with {len(df)} rows")
    return output, media_type, filename
