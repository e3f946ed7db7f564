"""Reporting data models."""

from src.models.aggregate import Aggregate, DimensionStats
from src.models.booking import TransactionRecord
from src.models.booking_status import (
    OCCUPYING_STATUSES,
    BookingStatus,
    BookingStatusMapper,
)
from src.models.period import DateRange, PeriodName, PeriodSelector
from src.models.report import (
    BreakdownRow,
    CategoryKind,
    CategoryLabel,
    ChartSeries,
    ComparativeKPI,
    ExportTable,
    Granularity,
    ReportRequest,
    ReportResult,
    ReportScope,
)

__all__ = [
    "Aggregate",
    "DimensionStats",
    "TransactionRecord",
    "BookingStatus",
    "BookingStatusMapper",
    "OCCUPYING_STATUSES",
    "DateRange",
    "PeriodName",
    "PeriodSelector",
    "BreakdownRow",
    "CategoryKind",
    "CategoryLabel",
    "ChartSeries",
    "ComparativeKPI",
    "ExportTable",
    "Granularity",
    "ReportRequest",
    "ReportResult",
    "ReportScope",
]
