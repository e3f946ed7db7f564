"""Command-line entry point: compute a booking report and print it as JSON."""

import argparse
import asyncio
import json
import sys
from typing import Any, Optional

from src.analytics import InvalidPeriodError, TabularExporter
from src.clients import SourceUnavailableError
from src.config import configure_logging, get_logger, settings
from src.models.period import PeriodSelector
from src.models.report import Granularity, ReportRequest, ReportResult, ReportScope
from src.services import ReportService

logger = get_logger(__name__)

EXPORT_CHOICES = ["kpis", "summary", "daily", "property", "source", "roomCategory"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute a booking report")
    parser.add_argument("--period", default=settings.reports.default_period)
    parser.add_argument("--from", dest="date_from", default=None, help="Custom start (YYYY-MM-DD)")
    parser.add_argument("--to", dest="date_to", default=None, help="Custom end (YYYY-MM-DD)")
    parser.add_argument("--property", default="all")
    parser.add_argument(
        "--granularity",
        choices=[granularity.value for granularity in Granularity],
        default=Granularity.WEEKLY.value,
    )
    parser.add_argument(
        "--export",
        choices=EXPORT_CHOICES,
        default=None,
        help="Print one table as headers + rows instead of the full bundle",
    )
    return parser


def build_request(args: argparse.Namespace) -> ReportRequest:
    return ReportRequest(
        scope=ReportScope(property_filter=args.property),
        period=PeriodSelector(period=args.period, date_from=args.date_from, date_to=args.date_to),
        granularity=Granularity(args.granularity),
    )


def render(result: ReportResult, export: Optional[str]) -> dict[str, Any]:
    """Full presentation bundle, or a single exported table."""
    if export is None:
        return {
            "period": {
                "current": str(result.current_range),
                "previous": str(result.previous_range),
            },
            "property_filter": result.property_filter,
            "comparison_available": result.comparison_available,
            **result.to_bundle(),
        }

    exporter = TabularExporter()
    if export == "kpis":
        table = exporter.to_table(result.kpis)
    elif export == "summary":
        table = exporter.to_table(result.current)
    elif export == "daily":
        table = exporter.daily_table(result.current)
    else:
        table = exporter.to_table(result.tables.get(export, []))
    return table.model_dump()


async def main(argv: Optional[list[str]] = None) -> int:
    """Run one report and print it.

    Returns:
        Exit code: 0 on success, 2 for an invalid period, 1 otherwise
    """
    args = build_parser().parse_args(argv)

    logger.info(
        "Starting booking report",
        environment=settings.environment,
        period=args.period,
        property_filter=args.property,
    )

    try:
        result = await ReportService().generate(build_request(args))
    except InvalidPeriodError as e:
        logger.error("Invalid report period", error=str(e))
        print(json.dumps({"success": False, "error": str(e)}))
        return 2
    except SourceUnavailableError as e:
        logger.error("Booking source unavailable", error=str(e))
        print(json.dumps({"success": False, "error": str(e)}))
        return 1
    except Exception as e:
        logger.error("Fatal error in report generation", error=str(e), exc_info=True)
        return 1

    print(json.dumps(render(result, args.export), indent=2, default=str))
    return 0


def run_sync() -> int:
    """Run the async main function synchronously.

    Returns:
        Exit code from main()
    """
    configure_logging()
    return asyncio.run(main())


if __name__ == "__main__":
    sys.exit(run_sync())
