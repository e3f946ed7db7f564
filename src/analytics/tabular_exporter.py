"""Conversion of report outputs into header + rows matrices."""

from typing import Any, Iterable, Optional

from structlog import get_logger

from src.analytics.category_labeler import CategoryLabeler
from src.analytics.record_aggregator import RecordAggregator
from src.config import settings
from src.models.aggregate import Aggregate
from src.models.booking import TransactionRecord
from src.models.booking_status import BookingStatus
from src.models.report import (
    BreakdownRow,
    ChartSeries,
    ComparativeKPI,
    ExportTable,
    ReportResult,
)

logger = get_logger(__name__)

# Selectable columns of the custom record export
RECORD_FIELDS: dict[str, str] = {
    "booking_id": "Booking ID",
    "guest_info": "Guest Name",
    "dates": "Booking Date",
    "property": "Property",
    "room_type": "Room Type",
    "amount": "Amount",
    "status": "Status",
    "source": "Source",
}

NOT_AVAILABLE = "N/A"


def _format_change(value: Optional[float]) -> str:
    return f"{value:.1f}" if value is not None else NOT_AVAILABLE


def _format_previous(value: Optional[float]) -> Any:
    return value if value is not None else NOT_AVAILABLE


class TabularExporter:
    """Builds ExportTables for a downstream CSV/JSON serializer.

    Cells are strings or numbers only. Missing comparison values are
    exported as "N/A", never as zero.
    """

    def __init__(self, labeler: Optional[CategoryLabeler] = None):
        self.labeler = labeler or CategoryLabeler()

    def to_table(self, obj: Any) -> ExportTable:
        """Dispatch on the type of report output.

        Supports Aggregate, ReportResult, ChartSeries, and lists of
        ComparativeKPI or BreakdownRow.

        Raises:
            TypeError: For unsupported objects
        """
        if isinstance(obj, ReportResult):
            return self.kpi_table(obj.kpis)
        if isinstance(obj, Aggregate):
            return self.aggregate_table(obj)
        if isinstance(obj, ChartSeries):
            return self.series_table(obj)
        if isinstance(obj, list):
            if all(isinstance(item, ComparativeKPI) for item in obj):
                return self.kpi_table(obj)
            if all(isinstance(item, BreakdownRow) for item in obj):
                return self.breakdown_table(obj)
        raise TypeError(f"Cannot export object of type {type(obj).__name__}")

    @staticmethod
    def kpi_table(kpis: list[ComparativeKPI]) -> ExportTable:
        """Financial summary: one row per KPI with its comparison."""
        return ExportTable(
            headers=["Metric", "Value", "Previous Period", "Change (%)", "Change"],
            rows=[
                [
                    kpi.label,
                    kpi.current_value,
                    _format_previous(kpi.previous_value),
                    _format_change(kpi.display_percent_change),
                    _format_previous(kpi.absolute_change),
                ]
                for kpi in kpis
            ],
        )

    @staticmethod
    def aggregate_table(aggregate: Aggregate) -> ExportTable:
        """Headline figures and status counts of one aggregate."""
        rows: list[list[Any]] = [
            ["Total Revenue", aggregate.total_revenue],
            ["Total Bookings", aggregate.total_record_count],
            ["Average Occupancy (%)", round(aggregate.avg_occupancy, 1)],
            ["Average Daily Rate", aggregate.avg_daily_rate],
            ["Average Booking Value", aggregate.avg_record_value],
        ]
        for status, count in sorted(aggregate.status_counts.items()):
            rows.append([f"Status: {status}", count])
        return ExportTable(headers=["Metric", "Value"], rows=rows)

    @staticmethod
    def breakdown_table(rows: list[BreakdownRow]) -> ExportTable:
        return ExportTable(
            headers=["Name", "Bookings", "Revenue", "Average Value", "Share (%)"],
            rows=[
                [row.name, row.count, row.revenue, row.average_value, round(row.share, 1)]
                for row in rows
            ],
        )

    @staticmethod
    def series_table(series: ChartSeries) -> ExportTable:
        header = "Revenue" if series.metric == "revenue" else "Bookings"
        return ExportTable(
            headers=["Period", header],
            rows=[[label, value] for label, value in zip(series.labels, series.values)],
        )

    @staticmethod
    def daily_table(aggregate: Aggregate) -> ExportTable:
        """Per-day revenue and bookings, chronological with unknown last."""
        unknown = settings.reports.unknown_key
        days = sorted(key for key in aggregate.by_day if key != unknown)
        if unknown in aggregate.by_day:
            days.append(unknown)
        return ExportTable(
            headers=["Date", "Revenue", "Bookings"],
            rows=[
                [day, aggregate.by_day[day].revenue, aggregate.by_day[day].count]
                for day in days
            ],
        )

    def _record_cell(self, record: TransactionRecord, field: str) -> Any:
        if field == "booking_id":
            return record.booking_id or record.id or NOT_AVAILABLE
        if field == "guest_info":
            return record.guest_name() or NOT_AVAILABLE
        if field == "dates":
            return RecordAggregator.day_key(record.created_at) or NOT_AVAILABLE
        if field == "property":
            return self.labeler.display_name(record.property) if record.property else NOT_AVAILABLE
        if field == "room_type":
            return record.room_category or NOT_AVAILABLE
        if field == "amount":
            return record.amount
        if field == "status":
            return record.status.value
        if field == "source":
            return record.source or NOT_AVAILABLE
        return ""

    def records_table(
        self,
        records: Iterable[TransactionRecord],
        fields: Optional[list[str]] = None,
    ) -> ExportTable:
        """Record-level export with a selectable set of columns.

        Args:
            records: Booking records to export, in the given order
            fields: Keys of RECORD_FIELDS; all fields when None. Unknown
                keys produce an empty column headed by the key itself.

        Raises:
            ValueError: When an empty field list is given
        """
        if fields is None:
            fields = list(RECORD_FIELDS)
        if not fields:
            raise ValueError("At least one field must be selected for export")

        unknown_fields = [field for field in fields if field not in RECORD_FIELDS]
        if unknown_fields:
            logger.warning("Exporting unknown record fields as empty", fields=unknown_fields)

        return ExportTable(
            headers=[RECORD_FIELDS.get(field, field) for field in fields],
            rows=[[self._record_cell(record, field) for field in fields] for record in records],
        )

    @staticmethod
    def guest_table(records: Iterable[TransactionRecord]) -> ExportTable:
        """Guest summary grouped by email, in first-seen order.

        Bookings without an email are grouped under "N/A". Total spent
        follows the revenue rule and leaves out cancelled bookings.
        """
        guests: dict[str, dict[str, Any]] = {}
        for record in records:
            key = record.email or NOT_AVAILABLE
            guest = guests.get(key)
            if guest is None:
                guest = guests[key] = {
                    "name": record.guest_name() or NOT_AVAILABLE,
                    "email": key,
                    "phone": record.phone or NOT_AVAILABLE,
                    "bookings": 0,
                    "nights": 0,
                    "spent": 0.0,
                    "last_booking": None,
                }
            guest["bookings"] += 1
            guest["nights"] += record.nights
            if record.status != BookingStatus.CANCELLED:
                guest["spent"] += record.amount
            if record.created_at and (
                guest["last_booking"] is None
                or record.created_at.timestamp() > guest["last_booking"].timestamp()
            ):
                guest["last_booking"] = record.created_at

        return ExportTable(
            headers=[
                "Guest Name",
                "Email",
                "Phone",
                "Total Bookings",
                "Total Nights",
                "Total Spent",
                "Last Booking",
            ],
            rows=[
                [
                    guest["name"],
                    guest["email"],
                    guest["phone"],
                    guest["bookings"],
                    guest["nights"],
                    guest["spent"],
                    RecordAggregator.day_key(guest["last_booking"]) or NOT_AVAILABLE,
                ]
                for guest in guests.values()
            ],
        )

