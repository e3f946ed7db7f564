"""Unit tests for TabularExporter."""

from datetime import date

import pytest

from src.analytics import (
    BreakdownTables,
    ComparativeCalculator,
    RecordAggregator,
    SeriesBucketer,
    TabularExporter,
)
from src.clients import StaticRecordSource
from src.config import settings
from src.models.booking import TransactionRecord
from src.models.report import Granularity, ReportResult
from src.models.period import DateRange


@pytest.fixture
def exporter():
    return TabularExporter()


class TestKPITable:
    """Tests for the financial summary export."""

    def test_missing_comparison_exported_as_na(self, exporter, scenario_a_records):
        kpis = ComparativeCalculator.compare(RecordAggregator.aggregate(scenario_a_records), None)

        table = exporter.to_table(kpis)

        assert table.headers == ["Metric", "Value", "Previous Period", "Change (%)", "Change"]
        assert table.rows[0] == ["Total Revenue", 3000, "N/A", "N/A", "N/A"]

    def test_change_formatted_to_one_decimal(self, exporter, scenario_a_records):
        current = RecordAggregator.aggregate(scenario_a_records)
        previous = RecordAggregator.aggregate(scenario_a_records[2:])

        table = exporter.kpi_table(ComparativeCalculator.compare(current, previous))

        assert table.rows[0] == ["Total Revenue", 3000, 2000, "50.0", 1000]

    def test_report_result_dispatches_to_kpis(self, exporter, scenario_a_records):
        current = RecordAggregator.aggregate(scenario_a_records)
        date_range = DateRange(date_from=date(2025, 1, 10), date_to=date(2025, 1, 11))
        result = ReportResult(
            current_range=date_range,
            previous_range=date_range.previous(),
            property_filter="all",
            comparison_available=False,
            current=current,
            kpis=ComparativeCalculator.compare(current, None),
        )

        table = exporter.to_table(result)

        assert len(table.rows) == len(result.kpis)


class TestAggregateTables:
    """Tests for aggregate, daily, series and breakdown exports."""

    def test_aggregate_table(self, exporter, scenario_a_records):
        table = exporter.to_table(RecordAggregator.aggregate(scenario_a_records))

        assert table.headers == ["Metric", "Value"]
        assert table.rows[0] == ["Total Revenue", 3000]
        assert table.rows[1] == ["Total Bookings", 3]
        assert ["Status: cancelled", 1] in table.rows

    def test_daily_table_chronological_with_unknown_last(self, exporter):
        records = [
            {"amount": 10, "createdAt": "2025-01-11"},
            {"amount": 20, "createdAt": None},
            {"amount": 30, "createdAt": "2025-01-10"},
        ]
        with pytest.warns(UserWarning):
            aggregate = RecordAggregator.aggregate(records)

        table = exporter.daily_table(aggregate)

        assert [row[0] for row in table.rows] == ["2025-01-10", "2025-01-11", "unknown"]
        assert table.rows[0][1:] == [30, 1]

    def test_series_table(self, exporter, fourteen_days):
        series = SeriesBucketer.bucket(fourteen_days, Granularity.WEEKLY, week_numbering="legacy")

        table = exporter.to_table(series)

        assert table.headers == ["Period", "Revenue"]
        assert table.rows == [["Week 2", 700], ["Week 3", 700]]

    def test_breakdown_table(self, exporter, scenario_a_records):
        rows = BreakdownTables.build(RecordAggregator.aggregate(scenario_a_records))["property"]

        table = exporter.to_table(rows)

        assert table.headers == ["Name", "Bookings", "Revenue", "Average Value", "Share (%)"]
        assert table.rows[0] == ["B", 1, 2000, 2000, 33.3]

    def test_unsupported_object_raises(self, exporter):
        with pytest.raises(TypeError):
            exporter.to_table({"total": 1})


class TestRecordTables:
    """Tests for record-level and guest exports."""

    def test_selected_fields(self, exporter, bookings):
        table = exporter.records_table(bookings[:2], fields=["booking_id", "guest_info", "amount"])

        assert table.headers == ["Booking ID", "Guest Name", "Amount"]
        assert table.rows == [
            ["B001", "Amina Otieno", 12000],
            ["B002", "Brian Kamau", 8000],
        ]

    def test_all_fields_by_default(self, exporter, bookings):
        table = exporter.records_table(bookings[:1])

        assert len(table.headers) == 8
        assert table.to_dicts()[0]["Property"] == "Limuru Country Home"
        assert table.to_dicts()[0]["Booking Date"] == "2025-01-12"

    def test_missing_values_exported_as_na(self, exporter, bookings):
        table = exporter.records_table([bookings[5]], fields=["dates", "booking_id"])

        assert table.rows == [["N/A", "B006"]]

    def test_unknown_field_is_empty(self, exporter, bookings):
        table = exporter.records_table(bookings[:1], fields=["booking_id", "loyalty_tier"])

        assert table.headers == ["Booking ID", "loyalty_tier"]
        assert table.rows == [["B001", ""]]

    def test_empty_field_list_raises(self, exporter, bookings):
        with pytest.raises(ValueError):
            exporter.records_table(bookings, fields=[])

    def test_guest_table_groups_by_email(self, exporter, bookings):
        table = exporter.guest_table(bookings)
        guests = {row["Email"]: row for row in table.to_dicts()}

        amina = guests["amina@example.com"]
        assert amina["Total Bookings"] == 2
        assert amina["Total Nights"] == 5
        assert amina["Total Spent"] == 37000
        assert amina["Last Booking"] == "2025-01-14"

        brian = guests["brian@example.com"]
        assert brian["Total Bookings"] == 2
        assert brian["Total Spent"] == 10000  # cancelled booking excluded
        assert brian["Phone"] == "N/A"


class TestReferenceTimezoneDays:
    """Creation days follow the reference timezone across aggregate, source and exports."""

    @pytest.fixture
    def late_utc_booking(self, monkeypatch):
        monkeypatch.setattr(settings.reports, "timezone", "Africa/Nairobi")
        # 22:30 UTC is 01:30 the next day in Nairobi (UTC+3)
        return TransactionRecord(
            booking_id="B100",
            property="kisumu",
            email="guest@example.com",
            amount=100,
            created_at="2025-01-11T22:30:00Z",
        )

    @pytest.mark.asyncio
    async def test_days_agree(self, exporter, late_utc_booking):
        aggregate = RecordAggregator.aggregate([late_utc_booking])
        source = StaticRecordSource([late_utc_booking])

        assert list(aggregate.by_day) == ["2025-01-12"]
        assert await source.query("all", date(2025, 1, 12), date(2025, 1, 12)) == [late_utc_booking]
        assert await source.query("all", date(2025, 1, 11), date(2025, 1, 11)) == []
        assert exporter.records_table([late_utc_booking], fields=["dates"]).rows == [["2025-01-12"]]
        assert exporter.guest_table([late_utc_booking]).to_dicts()[0]["Last Booking"] == "2025-01-12"
