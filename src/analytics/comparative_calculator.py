"""Period-over-period comparison of aggregate metrics."""

from typing import Callable, Optional

from structlog import get_logger

from src.models.aggregate import Aggregate
from src.models.report import ComparativeKPI

logger = get_logger(__name__)

# (metric name, label, extractor), in presentation order
TRACKED_METRICS: list[tuple[str, str, Callable[[Aggregate], float]]] = [
    ("total_revenue", "Total Revenue", lambda agg: agg.total_revenue),
    ("avg_occupancy", "Average Occupancy", lambda agg: agg.avg_occupancy),
    ("total_bookings", "Total Bookings", lambda agg: agg.total_record_count),
    ("avg_daily_rate", "Average Daily Rate", lambda agg: agg.avg_daily_rate),
    ("avg_booking_value", "Average Booking Value", lambda agg: agg.avg_record_value),
    ("confirmed", "Confirmed", lambda agg: agg.status_count("confirmed")),
    ("checked_in", "Checked In", lambda agg: agg.status_count("checked-in")),
    ("pending", "Pending", lambda agg: agg.status_count("pending")),
    ("cancelled", "Cancelled", lambda agg: agg.status_count("cancelled")),
]


class ComparativeCalculator:
    """Builds ComparativeKPIs from a current and an optional previous aggregate."""

    @staticmethod
    def percent_change(current_value: float, previous_value: float) -> float:
        """Percent change from previous to current, at full precision.

        When the previous value is 0 the change is reported as 100 if the
        current value is positive and 0 otherwise, instead of dividing by
        zero.
        """
        if previous_value == 0:
            return 100.0 if current_value > 0 else 0.0
        return (current_value - previous_value) / previous_value * 100

    @staticmethod
    def compare_metric(
        metric_name: str,
        label: str,
        current_value: float,
        previous_value: Optional[float],
    ) -> ComparativeKPI:
        """Compare one metric; a None previous value leaves the comparison empty."""
        if previous_value is None:
            return ComparativeKPI(
                metric_name=metric_name,
                label=label,
                current_value=current_value,
            )
        return ComparativeKPI(
            metric_name=metric_name,
            label=label,
            current_value=current_value,
            previous_value=previous_value,
            percent_change=ComparativeCalculator.percent_change(current_value, previous_value),
            absolute_change=current_value - previous_value,
        )

    @staticmethod
    def compare(
        current: Aggregate,
        previous: Optional[Aggregate],
    ) -> list[ComparativeKPI]:
        """Compare every tracked metric between two aggregates.

        Args:
            current: Aggregate of the requested period
            previous: Aggregate of the comparison period, or None when it
                could not be fetched

        Returns:
            One ComparativeKPI per tracked metric; with no previous aggregate
            every previous/percent/absolute field is None
        """
        kpis = [
            ComparativeCalculator.compare_metric(
                metric_name,
                label,
                extract(current),
                extract(previous) if previous is not None else None,
            )
            for metric_name, label, extract in TRACKED_METRICS
        ]

        logger.debug(
            "Computed comparative KPIs",
            kpi_count=len(kpis),
            comparison_available=previous is not None,
        )
        return kpis
