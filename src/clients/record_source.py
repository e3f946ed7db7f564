"""Record source interface consumed by the report service."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Iterable, Union

from structlog import get_logger

from src.analytics.record_aggregator import RecordAggregator
from src.models.booking import TransactionRecord

logger = get_logger(__name__)


class SourceUnavailableError(Exception):
    """Raised when booking records cannot be fetched."""

    pass


class RecordSource(ABC):
    """Abstract provider of booking records for a property and date range."""

    @abstractmethod
    async def query(
        self,
        property_filter: str,
        date_from: date,
        date_to: date,
    ) -> list[TransactionRecord]:
        """Fetch bookings created between two dates (inclusive).

        Args:
            property_filter: Property key, or "all"
            date_from: First creation day
            date_to: Last creation day

        Returns:
            Booking records

        Raises:
            SourceUnavailableError: If the records cannot be fetched
        """
        pass


class StaticRecordSource(RecordSource):
    """In-memory record source, filtering a fixed list of bookings.

    Bookings without a creation date only match when ``include_undated``
    is set, mirroring stores that cannot range-filter them.
    """

    def __init__(
        self,
        records: Iterable[Union[TransactionRecord, dict[str, Any]]],
        include_undated: bool = False,
    ):
        self.records = [
            record if isinstance(record, TransactionRecord) else TransactionRecord.model_validate(record)
            for record in records
        ]
        self.include_undated = include_undated

    def _matches(self, record: TransactionRecord, property_filter: str, date_from: date, date_to: date) -> bool:
        if property_filter != "all" and record.property != property_filter:
            return False
        day = RecordAggregator.day_key(record.created_at)
        if day is None:
            return self.include_undated
        return date_from.isoformat() <= day <= date_to.isoformat()

    async def query(
        self,
        property_filter: str,
        date_from: date,
        date_to: date,
    ) -> list[TransactionRecord]:
        matched = [
            record
            for record in self.records
            if self._matches(record, property_filter, date_from, date_to)
        ]
        logger.debug(
            "Queried static record source",
            property_filter=property_filter,
            date_from=date_from.isoformat(),
            date_to=date_to.isoformat(),
            matched=len(matched),
        )
        return matched
