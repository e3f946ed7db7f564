"""Unit tests for period resolution."""

from datetime import date

import pytest

from src.analytics import InvalidPeriodError, PeriodResolver
from src.analytics.period_resolver import today_in_reference_timezone
from src.models.period import PeriodName, PeriodSelector

TODAY = date(2025, 3, 15)


class TestNamedPeriods:
    """Tests for named periods relative to a fixed today."""

    def test_today(self):
        date_range = PeriodResolver.resolve("today", today=TODAY)

        assert date_range.date_from == date_range.date_to == TODAY
        assert date_range.days == 1

    def test_yesterday(self):
        date_range = PeriodResolver.resolve(PeriodName.YESTERDAY, today=TODAY)

        assert date_range.date_from == date_range.date_to == date(2025, 3, 14)

    def test_last7days_spans_seven_days_ending_today(self):
        date_range = PeriodResolver.resolve("last7days", today=TODAY)

        assert date_range.date_from == date(2025, 3, 9)
        assert date_range.date_to == TODAY
        assert date_range.days == 7

    def test_last30days(self):
        date_range = PeriodResolver.resolve("last30days", today=TODAY)

        assert date_range.date_from == date(2025, 2, 14)
        assert date_range.days == 30

    def test_this_month(self):
        date_range = PeriodResolver.resolve("thisMonth", today=TODAY)

        assert date_range.date_from == date(2025, 3, 1)
        assert date_range.date_to == TODAY

    def test_last_month_is_full_calendar_month(self):
        date_range = PeriodResolver.resolve("lastMonth", today=TODAY)

        assert date_range.date_from == date(2025, 2, 1)
        assert date_range.date_to == date(2025, 2, 28)

    def test_last_month_across_year_boundary(self):
        date_range = PeriodResolver.resolve("lastMonth", today=date(2025, 1, 10))

        assert date_range.date_from == date(2024, 12, 1)
        assert date_range.date_to == date(2024, 12, 31)

    def test_this_year(self):
        date_range = PeriodResolver.resolve("thisYear", today=TODAY)

        assert date_range.date_from == date(2025, 1, 1)
        assert date_range.date_to == TODAY

    def test_default_today_uses_reference_timezone(self):
        date_range = PeriodResolver.resolve("today")

        assert date_range.date_from == today_in_reference_timezone()

    def test_unknown_period_raises(self):
        with pytest.raises(InvalidPeriodError):
            PeriodResolver.resolve("fortnight", today=TODAY)


class TestCustomPeriod:
    """Tests for custom date ranges."""

    def test_custom_with_iso_strings(self):
        selector = PeriodSelector.model_validate(
            {"period": "custom", "from": "2025-01-05", "to": "2025-01-18"}
        )

        date_range = PeriodResolver.resolve(selector, today=TODAY)

        assert date_range.date_from == date(2025, 1, 5)
        assert date_range.date_to == date(2025, 1, 18)
        assert date_range.days == 14

    def test_custom_accepts_datetime_strings(self):
        selector = PeriodSelector(
            period="custom", date_from="2025-01-05T00:00:00Z", date_to=date(2025, 1, 6)
        )

        assert PeriodResolver.resolve(selector, today=TODAY).days == 2

    def test_custom_missing_from_raises(self):
        selector = PeriodSelector(period="custom", date_from=None, date_to="2025-01-18")

        with pytest.raises(InvalidPeriodError):
            PeriodResolver.resolve(selector, today=TODAY)

    def test_custom_inverted_range_raises(self):
        selector = PeriodSelector(period="custom", date_from="2025-01-18", date_to="2025-01-05")

        with pytest.raises(InvalidPeriodError):
            PeriodResolver.resolve(selector, today=TODAY)

    def test_custom_malformed_bound_raises(self):
        selector = PeriodSelector(period="custom", date_from="yesterday", date_to="2025-01-05")

        with pytest.raises(InvalidPeriodError):
            PeriodResolver.resolve(selector, today=TODAY)

    def test_invalid_period_error_is_value_error(self):
        with pytest.raises(ValueError):
            PeriodResolver.resolve(PeriodSelector(period="custom"), today=TODAY)


class TestPreviousRange:
    """Tests for the comparison range."""

    def test_previous_of_last7days(self):
        current, previous = PeriodResolver.resolve_with_previous("last7days", today=TODAY)

        assert previous.date_from == date(2025, 3, 2)
        assert previous.date_to == date(2025, 3, 8)
        assert previous.days == current.days

    def test_previous_of_today_is_yesterday(self):
        _, previous = PeriodResolver.resolve_with_previous("today", today=TODAY)

        assert previous.date_from == previous.date_to == date(2025, 3, 14)

    def test_previous_of_full_month_is_same_length(self):
        """A 28-day February is compared with the 28 days before it."""
        current = PeriodResolver.month_bounds(2025, 2)

        previous = PeriodResolver.previous_range(current)

        assert previous.date_from == date(2025, 1, 4)
        assert previous.date_to == date(2025, 1, 31)

    @pytest.mark.parametrize("period", [name.value for name in PeriodName if name != PeriodName.CUSTOM])
    def test_previous_is_adjacent_and_disjoint(self, period):
        current, previous = PeriodResolver.resolve_with_previous(period, today=TODAY)

        assert previous.days == current.days
        assert (current.date_from - previous.date_to).days == 1
