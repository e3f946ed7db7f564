"""Resolution of named report periods into concrete date ranges."""

import calendar
from datetime import date, datetime, timedelta
from typing import Any, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from structlog import get_logger

from src.config import settings
from src.models.period import DateRange, PeriodName, PeriodSelector

logger = get_logger(__name__)


class InvalidPeriodError(ValueError):
    """Raised when a period selector cannot be turned into a date range."""

    pass


def reference_timezone() -> ZoneInfo:
    """Timezone used system-wide for "today" and creation-day buckets."""
    try:
        return ZoneInfo(settings.reports.timezone)
    except ZoneInfoNotFoundError as e:
        raise InvalidPeriodError(
            f"Unknown reference timezone: {settings.reports.timezone}"
        ) from e


def today_in_reference_timezone() -> date:
    """Return the current calendar date in the reference timezone."""
    return datetime.now(reference_timezone()).date()


class PeriodResolver:
    """Turns period selectors into inclusive date ranges and their predecessors."""

    @staticmethod
    def _parse_bound(value: Any, name: str) -> date:
        """Parse a custom range bound given as date, datetime or ISO string."""
        if value is None or value == "":
            raise InvalidPeriodError(f"Custom period requires '{name}'")
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value.strip()[:10])
            except ValueError as e:
                raise InvalidPeriodError(
                    f"Custom period '{name}' is not an ISO date: {value!r}"
                ) from e
        raise InvalidPeriodError(f"Custom period '{name}' has unsupported type {type(value).__name__}")

    @staticmethod
    def _normalise_period(period: Union[PeriodName, str]) -> PeriodName:
        if isinstance(period, PeriodName):
            return period
        try:
            return PeriodName(period)
        except ValueError as e:
            raise InvalidPeriodError(f"Unknown period: {period!r}") from e

    @staticmethod
    def resolve(
        selector: Union[PeriodSelector, PeriodName, str],
        today: Optional[date] = None,
    ) -> DateRange:
        """Resolve a period selector into an inclusive date range.

        Named periods are computed relative to ``today`` (defaults to the
        current date in the reference timezone):
        - today / yesterday: single day
        - last7days / last30days: 7 or 30 days ending today
        - thisMonth / thisYear: first day of the month or year up to today
        - lastMonth: the full previous calendar month
        - custom: the explicit bounds of the selector

        Args:
            selector: Period selector, or a bare period name
            today: Reference date, for callers that already fixed "now"

        Returns:
            Resolved DateRange

        Raises:
            InvalidPeriodError: Unknown period, or custom range with a missing,
                malformed or inverted bound
        """
        if not isinstance(selector, PeriodSelector):
            selector = PeriodSelector(period=selector)

        period = PeriodResolver._normalise_period(selector.period)
        today = today or today_in_reference_timezone()

        if period == PeriodName.CUSTOM:
            date_from = PeriodResolver._parse_bound(selector.date_from, "from")
            date_to = PeriodResolver._parse_bound(selector.date_to, "to")
            if date_from > date_to:
                raise InvalidPeriodError(
                    f"Custom period starts after it ends: {date_from} > {date_to}"
                )
        elif period == PeriodName.TODAY:
            date_from = date_to = today
        elif period == PeriodName.YESTERDAY:
            date_from = date_to = today - timedelta(days=1)
        elif period == PeriodName.LAST_7_DAYS:
            date_from, date_to = today - timedelta(days=6), today
        elif period == PeriodName.LAST_30_DAYS:
            date_from, date_to = today - timedelta(days=29), today
        elif period == PeriodName.THIS_MONTH:
            date_from, date_to = today.replace(day=1), today
        elif period == PeriodName.LAST_MONTH:
            in_previous_month = today.replace(day=1) - timedelta(days=1)
            bounds = PeriodResolver.month_bounds(in_previous_month.year, in_previous_month.month)
            date_from, date_to = bounds.date_from, bounds.date_to
        elif period == PeriodName.THIS_YEAR:
            date_from, date_to = today.replace(month=1, day=1), today
        else:  # pragma: no cover - every PeriodName is handled above
            raise InvalidPeriodError(f"Unsupported period: {period}")

        resolved = DateRange(date_from=date_from, date_to=date_to)
        logger.debug(
            "Resolved report period",
            period=period.value,
            date_from=resolved.date_from.isoformat(),
            date_to=resolved.date_to.isoformat(),
            days=resolved.days,
        )
        return resolved

    @staticmethod
    def previous_range(current: DateRange) -> DateRange:
        """Comparison range: same day count, ending the day before ``current``.

        The two ranges are disjoint, adjacent and of equal length. A full
        calendar month is compared with the same number of days before it,
        not with the previous calendar month.
        """
        return current.previous()

    @staticmethod
    def resolve_with_previous(
        selector: Union[PeriodSelector, PeriodName, str],
        today: Optional[date] = None,
    ) -> tuple[DateRange, DateRange]:
        """Resolve a selector into (current_range, previous_range)."""
        current = PeriodResolver.resolve(selector, today=today)
        return current, PeriodResolver.previous_range(current)

    @staticmethod
    def month_bounds(year: int, month: int) -> DateRange:
        """Full calendar month as a date range."""
        last_day = calendar.monthrange(year, month)[1]
        return DateRange(date_from=date(year, month, 1), date_to=date(year, month, last_day))
