"""Tests for the command-line entry point."""

import json
from datetime import date
from unittest.mock import AsyncMock, patch

import pytest

from src.analytics import InvalidPeriodError
from src.clients import StaticRecordSource
from src.main import build_parser, build_request, main, render
from src.models.report import Granularity
from src.services import ReportService


class TestBuildRequest:
    """Tests for argument parsing."""

    def test_custom_period(self):
        args = build_parser().parse_args(
            ["--period", "custom", "--from", "2025-01-05", "--to", "2025-01-18",
             "--property", "kanamai", "--granularity", "daily"]
        )

        request = build_request(args)

        assert request.period.period == "custom"
        assert request.period.date_from == "2025-01-05"
        assert request.scope.property_filter == "kanamai"
        assert request.granularity == Granularity.DAILY

    def test_defaults(self):
        request = build_request(build_parser().parse_args([]))

        assert request.scope.property_filter == "all"
        assert request.granularity == Granularity.WEEKLY


class TestRender:
    """Tests for output rendering."""

    @pytest.mark.asyncio
    async def test_bundle_and_exports(self, booking_dicts):
        service = ReportService(record_source=StaticRecordSource(booking_dicts))
        args = build_parser().parse_args(["--period", "last7days"])

        result = await service.generate(build_request(args), today=date(2025, 1, 18))

        bundle = render(result, None)
        assert bundle["period"]["current"] == "2025-01-12..2025-01-18"
        assert bundle["comparison_available"] is True

        daily = render(result, "daily")
        assert daily["headers"] == ["Date", "Revenue", "Bookings"]
        assert len(daily["rows"]) == 5

        source = render(result, "source")
        assert source["headers"][0] == "Name"


class TestMain:
    """Tests for main() exit codes."""

    @pytest.mark.asyncio
    async def test_invalid_period_exit_code(self, capsys):
        with patch("src.main.ReportService") as mock_service_class:
            mock_service_class.return_value.generate = AsyncMock(
                side_effect=InvalidPeriodError("Custom period requires 'from'")
            )

            exit_code = await main(["--period", "custom"])

        assert exit_code == 2
        assert json.loads(capsys.readouterr().out)["success"] is False

    @pytest.mark.asyncio
    async def test_success_prints_json(self, capsys, booking_dicts):
        with patch("src.main.ReportService") as mock_service_class:
            mock_service_class.return_value = ReportService(
                record_source=StaticRecordSource(booking_dicts)
            )

            exit_code = await main(["--period", "thisYear", "--export", "kpis"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["headers"][0] == "Metric"
