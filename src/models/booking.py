"""Pydantic model for booking records read from the document store."""

from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from src.models.booking_status import BookingStatus, BookingStatusMapper


class TransactionRecord(BaseModel):
    """Single booking record as consumed by the reporting engine.

    Accepts both the snake_case field names and the camelCase names used by
    the bookings collection (``totalAmount``, ``roomType``, ``createdAt``,
    ``rooms``). Records are immutable once parsed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))
    # Shadows the builtin inside this class body; no @property below this line.
    property: Optional[str] = Field(None, description="Property key, e.g. 'limuru'")
    status: BookingStatus = BookingStatus.PENDING
    source: Optional[str] = Field(None, description="Booking channel, e.g. 'website'")
    room_category: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("room_category", "roomCategory", "roomType"),
    )
    amount: float = Field(
        default=0.0,
        ge=0,
        validation_alias=AliasChoices("amount", "totalAmount"),
    )
    created_at: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("created_at", "createdAt"),
        description="Creation timestamp; None when missing or unparseable",
    )
    rooms_count: int = Field(
        default=1,
        ge=1,
        validation_alias=AliasChoices("rooms_count", "roomsCount", "rooms"),
    )

    # Descriptive fields, only used by exports
    booking_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("booking_id", "bookingId")
    )
    first_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("first_name", "firstName")
    )
    last_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("last_name", "lastName")
    )
    email: Optional[str] = None
    phone: Optional[str] = None
    check_in: Optional[str] = Field(
        None, validation_alias=AliasChoices("check_in", "checkIn")
    )
    check_out: Optional[str] = Field(
        None, validation_alias=AliasChoices("check_out", "checkOut")
    )
    nights: int = Field(default=1, ge=0)

    @field_validator("id", "booking_id", "phone", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("property", "source", "room_category", mode="before")
    @classmethod
    def _blank_key_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _normalise_status(cls, value: Any) -> BookingStatus:
        return BookingStatusMapper.normalise(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _missing_amount_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None or value == "" else value

    @field_validator("rooms_count", "nights", mode="before")
    @classmethod
    def _missing_count_is_one(cls, value: Any) -> Any:
        return 1 if value is None or value == "" else value

    @field_validator("created_at", mode="before")
    @classmethod
    def _lenient_created_at(cls, value: Any) -> Optional[datetime]:
        """Parse the creation timestamp, degrading to None instead of failing.

        Handles ISO strings (with or without a trailing ``Z``), datetime and
        date objects, and serialized Firestore timestamps
        (``{"_seconds": ..., "_nanoseconds": ...}``).
        """
        if value is None:
            return None
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        if isinstance(value, dict):
            seconds = value.get("_seconds", value.get("seconds"))
            if not isinstance(seconds, (int, float)):
                return None
            # NaN, millisecond epochs and other out-of-range values
            try:
                return datetime.fromtimestamp(seconds, tz=timezone.utc)
            except (ValueError, OverflowError, OSError):
                return None
        if isinstance(value, str):
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                return datetime.fromisoformat(text)
            except ValueError:
                return None
        return None

    def guest_name(self) -> str:
        """Guest full name, empty when unknown."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)
