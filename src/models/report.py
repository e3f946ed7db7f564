"""Pydantic models for report requests, results and their building blocks."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, model_validator

from src.models.aggregate import Aggregate
from src.models.period import DateRange, PeriodSelector


class Granularity(str, Enum):
    """Chart series bucket size."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class CategoryKind(str, Enum):
    """Grouping dimension a category key belongs to."""
    PROPERTY = "property"
    SOURCE = "source"
    ROOM_CATEGORY = "roomCategory"


class ComparativeKPI(BaseModel):
    """One metric compared between the current and the previous period.

    The comparison fields are None when no previous period is available;
    they are never filled with zeros in that case.
    """

    metric_name: str
    label: str
    current_value: float
    previous_value: Optional[float] = None
    percent_change: Optional[float] = None
    absolute_change: Optional[float] = None

    @property
    def display_percent_change(self) -> Optional[float]:
        """Percent change rounded to one decimal place for presentation."""
        if self.percent_change is None:
            return None
        return round(self.percent_change, 1)

    @property
    def comparison_available(self) -> bool:
        return self.previous_value is not None


class ChartSeries(BaseModel):
    """Aligned label/value arrays for one metric of one chart."""

    metric: str
    granularity: Granularity
    labels: list[str] = Field(default_factory=list)
    values: list[float] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_alignment(self) -> "ChartSeries":
        if len(self.labels) != len(self.values):
            raise ValueError(
                f"labels ({len(self.labels)}) and values ({len(self.values)}) differ in length"
            )
        return self


class CategoryLabel(BaseModel):
    """Display decoration for a category key."""

    key: str
    kind: CategoryKind
    name: str
    color: str
    icon: str


class BreakdownRow(BaseModel):
    """One row of a per-property, per-source or per-room-category table."""

    key: str
    name: str
    color: str
    icon: str
    revenue: float
    count: int
    average_value: float
    share: float = Field(description="Percent of all bookings in the period")


class ExportTable(BaseModel):
    """Format-agnostic header + rows matrix handed to a serializer."""

    headers: list[str]
    rows: list[list[Union[str, int, float]]] = Field(default_factory=list)

    def to_dicts(self) -> list[dict[str, Any]]:
        """Rows as header->cell dictionaries, for JSON-like consumers."""
        return [dict(zip(self.headers, row)) for row in self.rows]


class ReportScope(BaseModel):
    """Which properties a report covers.

    ``allowed_properties`` lists the properties the requesting user may see;
    None or a list containing "all" means unrestricted.
    """

    property_filter: str = "all"
    allowed_properties: Optional[list[str]] = None

    def effective_property_filter(self) -> str:
        """Property filter after applying the user's property restriction.

        A restricted user asking for "all" (or for a property outside their
        list) is narrowed to their first allowed property.
        """
        allowed = self.allowed_properties
        if not allowed or "all" in allowed:
            return self.property_filter
        if self.property_filter in allowed:
            return self.property_filter
        return allowed[0]


class ReportRequest(BaseModel):
    """Everything needed to compute one report."""

    scope: ReportScope = Field(default_factory=ReportScope)
    period: PeriodSelector = Field(default_factory=PeriodSelector)
    granularity: Granularity = Granularity.WEEKLY


class ReportResult(BaseModel):
    """Computed report handed back to the caller; nothing is retained."""

    current_range: DateRange
    previous_range: DateRange
    property_filter: str
    comparison_available: bool
    current: Aggregate
    previous: Optional[Aggregate] = None
    kpis: list[ComparativeKPI] = Field(default_factory=list)
    tables: dict[str, list[BreakdownRow]] = Field(default_factory=dict)
    series: list[ChartSeries] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_bundle(self) -> dict[str, Any]:
        """Plain data bundle for the presentation layer."""
        return {
            "kpis": [
                {
                    **kpi.model_dump(),
                    "display_percent_change": kpi.display_percent_change,
                }
                for kpi in self.kpis
            ],
            "tables": {
                name: [row.model_dump() for row in rows]
                for name, rows in self.tables.items()
            },
            "series": [series.model_dump(mode="json") for series in self.series],
        }
