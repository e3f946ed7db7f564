"""Pydantic models for report periods and date ranges."""

from datetime import date, timedelta
from enum import Enum
from typing import Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PeriodName(str, Enum):
    """Named report periods offered by the dashboard period selector."""
    TODAY = "today"
    YESTERDAY = "yesterday"
    LAST_7_DAYS = "last7days"
    LAST_30_DAYS = "last30days"
    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"
    THIS_YEAR = "thisYear"
    CUSTOM = "custom"


class DateRange(BaseModel):
    """Inclusive calendar date range."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date_from: date = Field(alias="from")
    date_to: date = Field(alias="to")

    @model_validator(mode="after")
    def _check_order(self) -> "DateRange":
        if self.date_from > self.date_to:
            raise ValueError(
                f"date_from {self.date_from} is after date_to {self.date_to}"
            )
        return self

    @property
    def days(self) -> int:
        """Number of calendar days in the range, both ends included."""
        return (self.date_to - self.date_from).days + 1

    def previous(self) -> "DateRange":
        """Range of the same length ending the day before this one starts."""
        shift = timedelta(days=self.days)
        return DateRange(date_from=self.date_from - shift, date_to=self.date_to - shift)

    def contains(self, day: date) -> bool:
        return self.date_from <= day <= self.date_to

    def iter_days(self) -> Iterator[date]:
        for offset in range(self.days):
            yield self.date_from + timedelta(days=offset)

    def __str__(self) -> str:
        return f"{self.date_from.isoformat()}..{self.date_to.isoformat()}"


class PeriodSelector(BaseModel):
    """Named period, or ``custom`` with explicit bounds.

    Bounds are kept loosely typed here; the period resolver validates them
    and raises InvalidPeriodError for incomplete or malformed custom ranges.
    """

    model_config = ConfigDict(populate_by_name=True)

    period: Union[PeriodName, str] = PeriodName.LAST_7_DAYS
    date_from: Optional[Union[date, str]] = Field(None, alias="from")
    date_to: Optional[Union[date, str]] = Field(None, alias="to")
