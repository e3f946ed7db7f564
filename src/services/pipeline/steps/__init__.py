"""Report pipeline step implementations."""

from .aggregate_records_step import AggregateRecordsStep
from .build_series_step import BuildSeriesStep
from .build_tables_step import BuildTablesStep
from .compare_periods_step import ComparePeriodsStep
from .fetch_records_step import FetchRecordsStep
from .resolve_period_step import ResolvePeriodStep

__all__ = [
    "AggregateRecordsStep",
    "BuildSeriesStep",
    "BuildTablesStep",
    "ComparePeriodsStep",
    "FetchRecordsStep",
    "ResolvePeriodStep",
]
