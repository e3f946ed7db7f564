"""Booking status values and normalisation of raw store status strings."""

from enum import Enum
from typing import Any


class BookingStatus(str, Enum):
    """Lifecycle status of a booking record.

    Values match the strings stored in the bookings collection:
    - pending: created, awaiting confirmation
    - confirmed: confirmed, guest not yet arrived
    - checked-in: guest in house
    - checked-out: stay completed
    - cancelled: cancelled, excluded from revenue
    """
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    CANCELLED = "cancelled"


# Statuses whose rooms count towards the occupancy approximation
OCCUPYING_STATUSES = frozenset({BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN})


class BookingStatusMapper:
    """Maps raw status strings from the store to BookingStatus."""

    _ALIASES = {
        "pending": BookingStatus.PENDING,
        "new": BookingStatus.PENDING,
        "tentative": BookingStatus.PENDING,
        "confirmed": BookingStatus.CONFIRMED,
        "checkedin": BookingStatus.CHECKED_IN,
        "ci": BookingStatus.CHECKED_IN,
        "inhouse": BookingStatus.CHECKED_IN,
        "checkedout": BookingStatus.CHECKED_OUT,
        "co": BookingStatus.CHECKED_OUT,
        "completed": BookingStatus.CHECKED_OUT,
        "cancelled": BookingStatus.CANCELLED,
        "canceled": BookingStatus.CANCELLED,
        "cxl": BookingStatus.CANCELLED,
    }

    @staticmethod
    def normalise(raw_status: Any) -> BookingStatus:
        """Map a raw status value to a BookingStatus.

        Case, whitespace, hyphens and underscores are ignored, so
        "Checked_In", "checked-in" and "CI" all map to CHECKED_IN.
        Missing or unrecognised values default to PENDING.

        Args:
            raw_status: Status as stored (string, enum or None)

        Returns:
            Normalised BookingStatus
        """
        if isinstance(raw_status, BookingStatus):
            return raw_status
        if not isinstance(raw_status, str):
            return BookingStatus.PENDING

        compact = (
            raw_status.strip().lower().replace("-", "").replace("_", "").replace(" ", "")
        )
        return BookingStatusMapper._ALIASES.get(compact, BookingStatus.PENDING)
