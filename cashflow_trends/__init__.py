"""Public interface for the ``cashflow_trends`` package.

Re-exports the aggregators, the date parser, the categorizer and the public
models as the stable import surface. No runtime logic lives here.
"""

from .aggregate import build_trends, category_series, overall_series
from .categorize import CATEGORY_RULES, Category, CategoryRule, categorize
from .config import DEFAULT_CONFIG, AggregationConfig, ConfigError, load_config
from .dates import DATE_FORMATS, DateFormat, DateFormatError, parse_date
from .ingest import IngestError, load_transactions_csv
from .models import (
    NO_DATA,
    CategorySeriesSet,
    EmptyInputSignal,
    MonthKey,
    MonthlySeries,
    MonthPoint,
    NoData,
    ParsedTransaction,
    Transaction,
    TrendReport,
    month_key,
)

__all__ = [
    # Aggregation
    "overall_series",
    "category_series",
    "build_trends",
    # Parsing / classification
    "parse_date",
    "DATE_FORMATS",
    "DateFormat",
    "DateFormatError",
    "categorize",
    "Category",
    "CategoryRule",
    "CATEGORY_RULES",
    # Configuration / ingest
    "AggregationConfig",
    "DEFAULT_CONFIG",
    "ConfigError",
    "load_config",
    "IngestError",
    "load_transactions_csv",
    # Models / types
    "Transaction",
    "ParsedTransaction",
    "MonthKey",
    "MonthPoint",
    "MonthlySeries",
    "CategorySeriesSet",
    "TrendReport",
    "NoData",
    "NO_DATA",
    "EmptyInputSignal",
    "month_key",
]
