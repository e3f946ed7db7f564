"""Record source clients package."""

from src.clients.booking_api_client import (
    BookingAPIAuthenticationError,
    BookingAPIClient,
    BookingAPINotFoundError,
    BookingAPIServerError,
)
from src.clients.record_source import (
    RecordSource,
    SourceUnavailableError,
    StaticRecordSource,
)

__all__ = [
    "BookingAPIClient",
    "BookingAPIAuthenticationError",
    "BookingAPINotFoundError",
    "BookingAPIServerError",
    "RecordSource",
    "SourceUnavailableError",
    "StaticRecordSource",
]
