"""Reduction of booking records into per-period aggregate statistics."""

import warnings
from datetime import datetime
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError
from structlog import get_logger

from src.analytics.period_resolver import reference_timezone
from src.config import settings
from src.models.aggregate import Aggregate, DimensionStats
from src.models.booking import TransactionRecord
from src.models.booking_status import OCCUPYING_STATUSES, BookingStatus
from src.models.report import ReportScope

logger = get_logger(__name__)


class MalformedRecordWarning(UserWarning):
    """Issued when records had to be bucketed under the unknown day.

    Malformed dates degrade the granularity of the report; they never abort
    the aggregation.
    """

    pass


class RecordAggregator:
    """Aggregates booking records by property, source, room category, day and status."""

    @staticmethod
    def _parse_records(
        records: Iterable[Union[TransactionRecord, dict[str, Any]]],
    ) -> list[TransactionRecord]:
        """Validate raw dict records, skipping the ones that cannot be parsed."""
        parsed: list[TransactionRecord] = []
        for record in records:
            if isinstance(record, dict):
                try:
                    record = TransactionRecord.model_validate(record)
                except ValidationError as e:
                    logger.warning(
                        "Failed to parse booking record",
                        record_id=record.get("id") or record.get("_id"),
                        error=str(e),
                    )
                    continue
            parsed.append(record)
        return parsed

    @staticmethod
    def day_key(created_at: Optional[datetime]) -> Optional[str]:
        """ISO calendar day of a creation timestamp in the reference timezone.

        Naive timestamps are taken as already expressed in the reference
        timezone.

        Returns:
            "YYYY-MM-DD", or None when there is no timestamp
        """
        if created_at is None:
            return None
        if created_at.tzinfo is not None:
            created_at = created_at.astimezone(reference_timezone())
        return created_at.date().isoformat()

    @staticmethod
    def _add(bucket_map: dict[str, DimensionStats], key: str, revenue: float) -> None:
        stats = bucket_map.get(key)
        if stats is None:
            stats = bucket_map[key] = DimensionStats()
        stats.revenue += revenue
        stats.count += 1

    @staticmethod
    def occupancy(occupied_rooms: int, room_capacity: int) -> float:
        """Approximate occupancy percentage, capped at 100.

        This divides booked room units by a single configured capacity; it
        ignores stay dates and per-property inventory, so it is only a
        coarse indicator.
        """
        if room_capacity <= 0:
            return 0.0
        return min(100.0, occupied_rooms / room_capacity * 100)

    @staticmethod
    def aggregate(
        records: Iterable[Union[TransactionRecord, dict[str, Any]]],
        scope: Optional[ReportScope] = None,
        room_capacity: Optional[int] = None,
    ) -> Aggregate:
        """Reduce booking records into an Aggregate in a single pass.

        Revenue sums skip cancelled bookings; counts include every status.
        Missing property, source or room category keys, and missing or
        unparseable creation dates, are bucketed under the unknown sentinel.

        Args:
            records: Booking records (models or raw store dicts)
            scope: Optional scope; records of other properties are skipped
                when a single property is selected
            room_capacity: Occupancy denominator, defaults to configuration

        Returns:
            Aggregate for the given records (all zeros when empty)
        """
        unknown = settings.reports.unknown_key
        capacity = room_capacity if room_capacity is not None else settings.reports.room_capacity
        property_filter = scope.property_filter if scope else None
        filter_active = bool(property_filter) and property_filter != "all"

        result = Aggregate(property_filter=property_filter)
        skipped_out_of_scope = 0

        for record in RecordAggregator._parse_records(records):
            if filter_active and record.property != property_filter:
                skipped_out_of_scope += 1
                continue

            revenue = 0.0 if record.status == BookingStatus.CANCELLED else record.amount

            result.total_revenue += revenue
            result.total_record_count += 1

            RecordAggregator._add(result.by_property, record.property or unknown, revenue)
            RecordAggregator._add(result.by_source, record.source or unknown, revenue)
            RecordAggregator._add(
                result.by_room_category, record.room_category or unknown, revenue
            )

            day = RecordAggregator.day_key(record.created_at)
            if day is None:
                result.malformed_record_count += 1
                logger.warning(
                    "Booking has no usable creation date, bucketed as unknown",
                    record_id=record.id,
                    property_filter=property_filter,
                )
                day = unknown
            RecordAggregator._add(result.by_day, day, revenue)

            status = record.status.value
            result.status_counts[status] = result.status_counts.get(status, 0) + 1

            if record.status in OCCUPYING_STATUSES:
                result.occupied_rooms += record.rooms_count

        result.avg_occupancy = RecordAggregator.occupancy(result.occupied_rooms, capacity)
        if result.total_record_count > 0:
            result.avg_daily_rate = result.total_revenue / result.total_record_count
            result.avg_record_value = result.total_revenue / result.total_record_count

        if result.malformed_record_count:
            warnings.warn(
                MalformedRecordWarning(
                    f"{result.malformed_record_count} booking(s) without a usable "
                    f"creation date were bucketed as '{unknown}'"
                ),
                stacklevel=2,
            )

        logger.info(
            "Aggregated booking records",
            property_filter=property_filter,
            total_records=result.total_record_count,
            total_revenue=result.total_revenue,
            properties=len(result.by_property),
            days=len(result.by_day),
            malformed_records=result.malformed_record_count,
            skipped_out_of_scope=skipped_out_of_scope,
        )

        return result
