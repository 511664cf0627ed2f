import os
import math
import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from typing import List, Optional, Tuple, Union

import pandas as pd

from sales_dashboard.core.exceptions import DataUnavailable
from sales_dashboard.core.models import SalesRecord

# Set up logging
logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [
    "date", "sales_rep", "region", "category", "product",
    "quantity", "unit_price", "total_price", "customer_type", "customer_name",
]
TEXT_COLUMNS = ["sales_rep", "region", "category", "product", "customer_type", "customer_name"]


class RecordStore:
    """
    File-backed source of sales transactions.

    This class is responsible for:
    - Reading the delimited sales dataset with pandas
    - Parsing numeric fields leniently (a bad value becomes NaN, the row stays)
    - Optionally caching parsed records until the file changes
    - Surfacing every structural failure as DataUnavailable
    """

    def __init__(
        self,
        file_path: str,
        cache_enabled: bool = False,
        read_timeout: Optional[float] = None
    ):
        """
        Initialize the record store.

        Args:
            file_path: Path to the CSV dataset
            cache_enabled: Keep parsed records until the file fingerprint changes
            read_timeout: Seconds to wait for the file read before giving up
        """
        self.file_path = str(file_path)
        self.cache_enabled = cache_enabled
        self.read_timeout = read_timeout
        self._cache: Optional[Tuple[Tuple[int, int], Tuple[SalesRecord, ...]]] = None

    def load(self) -> List[SalesRecord]:
        """
        Load every transaction in the dataset.

        Returns:
            List[SalesRecord]: Parsed records in file order

        Raises:
            DataUnavailable: If the dataset is missing, unreadable or malformed
        """
        fingerprint = self.fingerprint()

        cached = self._cache
        if self.cache_enabled and cached is not None and cached[0] == fingerprint:
            logger.debug(f"Serving {len(cached[1])} cached records from {self.file_path}")
            return list(cached[1])

        df = self._read_frame()
        records = tuple(self._to_records(df))
        logger.info(f"Loaded {len(records)} sales records from {self.file_path}")

        if self.cache_enabled:
            self._cache = (fingerprint, records)

        return list(records)

    def fingerprint(self) -> Tuple[int, int]:
        """Modification time and size of the dataset, used to invalidate the cache."""
        try:
            stat = os.stat(self.file_path)
        except FileNotFoundError as e:
            raise DataUnavailable(f"Sales dataset not found: {self.file_path}", source=self.file_path) from e
        except OSError as e:
            raise DataUnavailable(f"Cannot access sales dataset {self.file_path}: {str(e)}", source=self.file_path) from e
        return stat.st_mtime_ns, stat.st_size

    def _read_frame(self) -> pd.DataFrame:
        if not self.read_timeout:
            return self._read_csv()

        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(self._read_csv)
        try:
            return future.result(timeout=self.read_timeout)
        except FuturesTimeoutError:
            logger.error(f"Timed out after {self.read_timeout}s reading {self.file_path}")
            raise DataUnavailable(
                f"Timed out after {self.read_timeout}s reading sales dataset {self.file_path}",
                source=self.file_path
            )
        finally:
            executor.shutdown(wait=False)

    def _read_csv(self) -> pd.DataFrame:
        try:
            df = pd.read_csv(self.file_path, dtype=str, keep_default_na=False)
        except FileNotFoundError as e:
            raise DataUnavailable(f"Sales dataset not found: {self.file_path}", source=self.file_path) from e
        except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error(f"Error reading sales dataset {self.file_path}: {str(e)}")
            raise DataUnavailable(
                f"Failed to read sales dataset {self.file_path}: {str(e)}",
                source=self.file_path
            ) from e

        df.columns = [str(column).strip() for column in df.columns]

        missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
        if missing:
            raise DataUnavailable(
                f"Sales dataset is missing required columns: {', '.join(missing)}",
                source=self.file_path
            )

        return df

    def _to_records(self, df: pd.DataFrame) -> List[SalesRecord]:
        try:
            dates = pd.to_datetime(df["date"].str.strip(), errors="coerce", format="mixed")
        except (ValueError, TypeError) as e:
            raise DataUnavailable(
                f"Unable to parse the date column of {self.file_path}: {str(e)}",
                source=self.file_path
            ) from e

        quantities = pd.to_numeric(df["quantity"].str.strip(), errors="coerce")
        unit_prices = pd.to_numeric(df["unit_price"].str.strip(), errors="coerce")
        total_prices = pd.to_numeric(df["total_price"].str.strip(), errors="coerce")

        skipped = int(dates.isna().sum())
        if skipped:
            logger.warning(f"Skipped {skipped} rows with unparseable dates in {self.file_path}")

        records = []
        columns = zip(
            dates, quantities, unit_prices, total_prices,
            *(df[column] for column in TEXT_COLUMNS)
        )
        for (
            row_date, quantity, unit_price, total_price,
            sales_rep, region, category, product, customer_type, customer_name
        ) in columns:
            if pd.isna(row_date):
                continue

            records.append(SalesRecord(
                date=row_date.date(),
                sales_rep=sales_rep,
                region=region,
                category=category,
                product=product,
                quantity=_parse_quantity(quantity),
                unit_price=float(unit_price),
                total_price=float(total_price),
                customer_type=customer_type,
                customer_name=customer_name,
            ))

        return records


def _parse_quantity(value) -> Union[int, float]:
    """Truncate to an integer; NaN and infinities are kept as the float sentinel."""
    value = float(value)
    if not math.isfinite(value):
        return value
    return int(value)
