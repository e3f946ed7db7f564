"""Pipeline context for sharing data between report steps."""

from datetime import date, datetime, timezone
from typing import Any, Optional

from src.models.aggregate import Aggregate
from src.models.booking import TransactionRecord
from src.models.period import DateRange
from src.models.report import BreakdownRow, ChartSeries, ComparativeKPI, ReportRequest


class ReportContext:
    """Context object for passing data between report pipeline steps.

    One context is created per report request and discarded with it.
    """

    def __init__(self, request: ReportRequest, today: Optional[date] = None):
        """Initialize report context.

        Args:
            request: Report request being computed
            today: Fixed reference date, None for the current date
        """
        self.request = request
        self.today = today
        self.start_time = datetime.now(timezone.utc)

        # Resolved scope and periods
        self.property_filter: str = request.scope.property_filter
        self.current_range: Optional[DateRange] = None
        self.previous_range: Optional[DateRange] = None

        # Fetched records; previous stays None when its fetch failed
        self.current_records: list[TransactionRecord] = []
        self.previous_records: Optional[list[TransactionRecord]] = None

        # Computed results
        self.current: Optional[Aggregate] = None
        self.previous: Optional[Aggregate] = None
        self.kpis: list[ComparativeKPI] = []
        self.tables: dict[str, list[BreakdownRow]] = {}
        self.series: list[ChartSeries] = []

        # Processing statistics
        self.stats: dict[str, Any] = {}

        # Errors encountered during processing, with the exceptions behind them
        self.errors: list[dict[str, str]] = []
        self.exceptions: list[Exception] = []

        # Success flag
        self.success: bool = False

    def add_error(self, step_name: str, error: Exception) -> None:
        """Record a step failure.

        Args:
            step_name: Name of the step where the error occurred
            error: Exception raised by the step
        """
        self.errors.append({
            "step": step_name,
            "type": type(error).__name__,
            "message": str(error),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })
        self.exceptions.append(error)

    def add_warning(self, step_name: str, message: str) -> None:
        """Record a non-fatal degradation, e.g. a missing comparison period."""
        self.stats.setdefault("warnings", []).append({"step": step_name, "message": message})

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def first_exception(self) -> Optional[Exception]:
        return self.exceptions[0] if self.exceptions else None

    def get_results(self) -> dict[str, Any]:
        """Get run summary for logging."""
        end_time = datetime.now(timezone.utc)
        return {
            "property_filter": self.property_filter,
            "current_range": str(self.current_range) if self.current_range else None,
            "previous_range": str(self.previous_range) if self.previous_range else None,
            "success": self.success,
            "duration_seconds": (end_time - self.start_time).total_seconds(),
            "errors": self.errors,
            "stats": self.stats,
        }
