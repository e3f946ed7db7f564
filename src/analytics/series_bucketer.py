"""Re-bucketing of per-day aggregates into chart series."""

import math
from datetime import date
from typing import Literal, Optional

from structlog import get_logger

from src.config import settings
from src.models.aggregate import DimensionStats
from src.models.report import ChartSeries, Granularity

logger = get_logger(__name__)

Metric = Literal["revenue", "count"]


class SeriesBucketer:
    """Groups the ``by_day`` map of an Aggregate into daily, weekly or monthly buckets."""

    @staticmethod
    def legacy_week_number(day: date) -> int:
        """Dashboard week number: ceil((day_of_year + weekday_of_jan_1) / 7).

        ``day_of_year`` is 1-based and ``weekday_of_jan_1`` counts from
        Sunday = 0, so weeks run Sunday to Saturday and week 1 is the
        partial week holding 1 January. This is not ISO-8601 numbering.
        """
        jan_1 = date(day.year, 1, 1)
        day_of_year = day.timetuple().tm_yday
        jan_1_weekday = (jan_1.weekday() + 1) % 7
        return math.ceil((day_of_year + jan_1_weekday) / 7)

    @staticmethod
    def daily_label(day: date) -> str:
        """Short weekday and day of month, e.g. "Wed 15"."""
        return f"{day.strftime('%a')} {day.day}"

    @staticmethod
    def _calendar_days(by_day: dict[str, DimensionStats]) -> list[tuple[date, DimensionStats]]:
        """Chronologically sorted (day, stats) pairs, skipping non-date keys."""
        days = []
        for key, stats in by_day.items():
            try:
                days.append((date.fromisoformat(key), stats))
            except ValueError:
                logger.debug("Skipping non-calendar day bucket", day_key=key)
        days.sort(key=lambda item: item[0])
        return days

    @staticmethod
    def bucket(
        by_day: dict[str, DimensionStats],
        granularity: Granularity,
        metric: Metric = "revenue",
        week_numbering: Optional[str] = None,
        month_order: Optional[str] = None,
    ) -> ChartSeries:
        """Build one chart series for a metric.

        - daily: one bucket per day present, chronological
        - weekly: "Week {n}" buckets in ascending week order
        - monthly: month short name buckets, in the order first met while
          walking the days chronologically; equally named months of
          different years share a bucket

        ``week_numbering="iso"`` and ``month_order="calendar"`` switch to
        ISO weeks and year-qualified months in calendar order. Both default
        to the configured series settings. The unknown day bucket is never
        charted.

        Args:
            by_day: Per-day stats keyed by ISO date
            granularity: Bucket size
            metric: "revenue" or "count"
            week_numbering: "legacy" or "iso"
            month_order: "first_seen" or "calendar"

        Returns:
            ChartSeries with aligned labels and values
        """
        granularity = Granularity(granularity)
        week_numbering = week_numbering or settings.series.week_numbering
        month_order = month_order or settings.series.month_order

        buckets: dict[object, float] = {}
        labels: dict[object, str] = {}

        for day, stats in SeriesBucketer._calendar_days(by_day):
            value = stats.revenue if metric == "revenue" else stats.count

            if granularity == Granularity.DAILY:
                key: object = day
                label = SeriesBucketer.daily_label(day)
            elif granularity == Granularity.WEEKLY:
                if week_numbering == "iso":
                    iso_year, iso_week, _ = day.isocalendar()
                    key = (iso_year, iso_week)
                    label = f"Week {iso_week}"
                else:
                    key = SeriesBucketer.legacy_week_number(day)
                    label = f"Week {key}"
            else:
                if month_order == "calendar":
                    key = (day.year, day.month)
                    label = day.strftime("%b %Y")
                else:
                    key = day.strftime("%b")
                    label = key

            if key not in buckets:
                buckets[key] = 0
                labels[key] = label
            buckets[key] += value

        keys = list(buckets)
        if granularity == Granularity.WEEKLY:
            keys.sort()

        return ChartSeries(
            metric=metric,
            granularity=granularity,
            labels=[labels[key] for key in keys],
            values=[buckets[key] for key in keys],
        )

    @staticmethod
    def bucket_all(
        by_day: dict[str, DimensionStats],
        granularity: Granularity,
    ) -> list[ChartSeries]:
        """Revenue and booking count series for the same granularity."""
        return [
            SeriesBucketer.bucket(by_day, granularity, metric="revenue"),
            SeriesBucketer.bucket(by_day, granularity, metric="count"),
        ]
