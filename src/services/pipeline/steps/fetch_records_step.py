"""Step to fetch booking records for the current and previous periods."""

import asyncio
from typing import Optional

from src.clients import RecordSource, SourceUnavailableError
from src.config import settings
from src.models.booking import TransactionRecord
from src.models.period import DateRange
from src.services.pipeline import PipelineStep, ReportContext


class FetchRecordsStep(PipelineStep):
    """Fetch both periods concurrently from the record source.

    A failed current-period fetch fails the step. A failed or timed-out
    previous-period fetch only drops the comparison.
    """

    def __init__(self, record_source: RecordSource, previous_timeout: Optional[float] = None):
        """Initialize the step.

        Args:
            record_source: Source of booking records
            previous_timeout: Seconds to wait for the previous period,
                defaults to configuration
        """
        super().__init__("FetchRecords")
        self.record_source = record_source
        self.previous_timeout = (
            previous_timeout
            if previous_timeout is not None
            else settings.reports.previous_fetch_timeout
        )

    async def _fetch(self, property_filter: str, date_range: DateRange) -> list[TransactionRecord]:
        return await self.record_source.query(
            property_filter, date_range.date_from, date_range.date_to
        )

    async def execute(self, context: ReportContext) -> bool:
        """Fetch current and previous period records.

        Args:
            context: Report context with resolved ranges

        Returns:
            True when the current period was fetched
        """
        current_result, previous_result = await asyncio.gather(
            self._fetch(context.property_filter, context.current_range),
            asyncio.wait_for(
                self._fetch(context.property_filter, context.previous_range),
                timeout=self.previous_timeout,
            ),
            return_exceptions=True,
        )

        if isinstance(current_result, BaseException):
            if isinstance(current_result, SourceUnavailableError):
                raise current_result
            raise SourceUnavailableError(
                f"Current period fetch failed: {current_result}"
            ) from current_result
        context.current_records = current_result

        if isinstance(previous_result, BaseException):
            reason = (
                "timed out"
                if isinstance(previous_result, asyncio.TimeoutError)
                else str(previous_result)
            )
            self.logger.warning(
                "Previous period unavailable, comparison omitted",
                property_filter=context.property_filter,
                previous_range=str(context.previous_range),
                reason=reason,
            )
            context.add_warning(self.name, f"Previous period unavailable: {reason}")
            context.previous_records = None
        else:
            context.previous_records = previous_result

        context.stats["fetch"] = {
            "current_records": len(context.current_records),
            "previous_records": (
                len(context.previous_records) if context.previous_records is not None else None
            ),
        }
        return True
