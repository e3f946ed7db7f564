"""Booking reports and analytics computations."""

from src.analytics.breakdown_tables import BreakdownTables
from src.analytics.category_labeler import CategoryLabeler
from src.analytics.comparative_calculator import ComparativeCalculator
from src.analytics.period_resolver import InvalidPeriodError, PeriodResolver
from src.analytics.record_aggregator import MalformedRecordWarning, RecordAggregator
from src.analytics.series_bucketer import SeriesBucketer
from src.analytics.tabular_exporter import TabularExporter

__all__ = [
    "BreakdownTables",
    "CategoryLabeler",
    "ComparativeCalculator",
    "InvalidPeriodError",
    "PeriodResolver",
    "MalformedRecordWarning",
    "RecordAggregator",
    "SeriesBucketer",
    "TabularExporter",
]
