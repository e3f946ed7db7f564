"""Report service: turns a report request into a report result."""

from datetime import date
from typing import Optional

from structlog import get_logger

from src.analytics import CategoryLabeler, InvalidPeriodError
from src.clients import BookingAPIClient, RecordSource, SourceUnavailableError
from src.models.report import ReportRequest, ReportResult
from src.services.pipeline import Pipeline, ReportContext
from src.services.pipeline.steps import (
    AggregateRecordsStep,
    BuildSeriesStep,
    BuildTablesStep,
    ComparePeriodsStep,
    FetchRecordsStep,
    ResolvePeriodStep,
)

logger = get_logger(__name__)


class ReportGenerationError(Exception):
    """Raised when a report fails for a reason other than a bad period or source."""

    pass


class ReportService:
    """Computes booking reports.

    Holds no per-report state: every call to ``generate`` builds its own
    context, so one service can serve concurrent requests.
    """

    def __init__(
        self,
        record_source: Optional[RecordSource] = None,
        labeler: Optional[CategoryLabeler] = None,
        previous_timeout: Optional[float] = None,
    ):
        """Initialize the service.

        Args:
            record_source: Booking source, defaults to the bookings API client
            labeler: Category labeler, defaults to the configured labels
            previous_timeout: Seconds to wait for the comparison period
        """
        self.record_source = record_source or BookingAPIClient()
        self.labeler = labeler or CategoryLabeler()
        self.pipeline = Pipeline(
            name="report",
            steps=[
                ResolvePeriodStep(),
                FetchRecordsStep(self.record_source, previous_timeout=previous_timeout),
                AggregateRecordsStep(),
                ComparePeriodsStep(),
                BuildSeriesStep(),
                BuildTablesStep(self.labeler),
            ],
        )

    async def generate(
        self,
        request: ReportRequest,
        today: Optional[date] = None,
    ) -> ReportResult:
        """Compute a report for a scope and period.

        Args:
            request: Scope, period and chart granularity
            today: Fixed reference date, None for the current date

        Returns:
            ReportResult; comparison fields are empty when the previous
            period could not be fetched

        Raises:
            InvalidPeriodError: The period cannot be resolved
            SourceUnavailableError: The current period cannot be fetched
            ReportGenerationError: Any other required step failed
        """
        context = ReportContext(request, today=today)
        await self.pipeline.execute(context)

        if not context.success:
            error = context.first_exception()
            logger.error("Report generation failed", **context.get_results())
            if isinstance(error, (InvalidPeriodError, SourceUnavailableError)):
                raise error
            raise ReportGenerationError(
                f"Report failed at {context.stats['pipeline']['stopped_at']}: {error}"
            ) from error

        result = ReportResult(
            current_range=context.current_range,
            previous_range=context.previous_range,
            property_filter=context.property_filter,
            comparison_available=context.previous is not None,
            current=context.current,
            previous=context.previous,
            kpis=context.kpis,
            tables=context.tables,
            series=context.series,
        )

        logger.info(
            "Report generated",
            property_filter=context.property_filter,
            current_range=str(context.current_range),
            comparison_available=result.comparison_available,
            optional_failures=len(context.errors),
        )
        return result
