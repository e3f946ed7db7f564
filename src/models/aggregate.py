"""Pydantic models for aggregated booking statistics."""

from typing import Optional

from pydantic import BaseModel, Field


class DimensionStats(BaseModel):
    """Revenue and booking count for one bucket of a grouping dimension."""

    revenue: float = 0.0
    count: int = 0


class Aggregate(BaseModel):
    """Statistical summary of the bookings of one period and scope.

    Built fresh for every report request and never persisted. Each of the
    ``by_*`` maps is a full partition of the aggregated records, so their
    revenues and counts sum to ``total_revenue`` and ``total_record_count``.
    Cancelled bookings are counted but contribute no revenue.
    """

    total_revenue: float = 0.0
    total_record_count: int = 0
    by_property: dict[str, DimensionStats] = Field(default_factory=dict)
    by_source: dict[str, DimensionStats] = Field(default_factory=dict)
    by_room_category: dict[str, DimensionStats] = Field(default_factory=dict)
    by_day: dict[str, DimensionStats] = Field(
        default_factory=dict,
        description="Keyed by ISO creation date, or the unknown sentinel",
    )
    status_counts: dict[str, int] = Field(default_factory=dict)

    occupied_rooms: int = Field(
        default=0,
        description="Rooms held by confirmed and checked-in bookings",
    )
    avg_occupancy: float = Field(
        default=0.0,
        description=(
            "Approximate occupancy in percent: occupied_rooms over the configured "
            "room capacity, capped at 100. Not a true occupancy figure."
        ),
    )
    avg_daily_rate: float = 0.0
    avg_record_value: float = 0.0

    malformed_record_count: int = 0
    property_filter: Optional[str] = None

    def status_count(self, status: str) -> int:
        return self.status_counts.get(status, 0)
