"""Bookings API client for fetching booking records by property and date range."""

import asyncio
from datetime import date
from typing import Any, Optional

import httpx
from pydantic import ValidationError
from structlog import get_logger

from src.clients.record_source import RecordSource, SourceUnavailableError
from src.config import settings
from src.models.booking import TransactionRecord

logger = get_logger(__name__)


class BookingAPIAuthenticationError(SourceUnavailableError):
    """Raised when the bookings API rejects our credentials."""

    pass


class BookingAPINotFoundError(SourceUnavailableError):
    """Raised when the bookings endpoint is not found."""

    pass


class BookingAPIServerError(SourceUnavailableError):
    """Raised when the bookings API keeps returning server errors."""

    pass


class BookingAPIClient(RecordSource):
    """Client for the dashboard bookings endpoint."""

    def __init__(self):
        """Initialize the bookings API client with settings."""
        self.base_url = settings.booking_api_base_url
        self.api_key = settings.booking_api.api_key
        self.timeout = settings.booking_api.request_timeout
        self.max_retries = settings.booking_api.max_retries
        self.retry_backoff_base = 2  # Exponential backoff base

    def _get_headers(self) -> dict[str, str]:
        """Get default headers for bookings API requests."""
        headers = {
            "Accept": "application/json",
            "User-Agent": "BookingReports/1.0",
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Make an HTTP request to the bookings API with retry logic.

        Server errors, timeouts and transport errors are retried with
        exponential backoff; other failures are raised immediately.

        Args:
            method: HTTP method
            endpoint: API endpoint path (without base URL)
            params: Query parameters

        Returns:
            Decoded JSON response

        Raises:
            BookingAPIAuthenticationError: On 401/403
            BookingAPINotFoundError: On 404
            BookingAPIServerError: When server errors persist
            SourceUnavailableError: For other failures
        """
        url = f"{self.base_url}{endpoint}"
        headers = self._get_headers()

        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(
                        method=method,
                        url=url,
                        headers=headers,
                        params=params,
                    )

                    if response.status_code in (401, 403):
                        logger.error(
                            "Bookings API authentication failed",
                            endpoint=endpoint,
                            status_code=response.status_code,
                        )
                        raise BookingAPIAuthenticationError(
                            f"Authentication failed for {endpoint}: {response.status_code}"
                        )

                    if response.status_code == 404:
                        logger.warning(
                            "Bookings API resource not found",
                            endpoint=endpoint,
                            status_code=response.status_code,
                        )
                        raise BookingAPINotFoundError(f"Resource not found: {endpoint}")

                    # Handle server errors with retry
                    if response.status_code >= 500:
                        if attempt < self.max_retries - 1:
                            wait_time = self.retry_backoff_base ** attempt
                            logger.warning(
                                "Bookings API server error, retrying",
                                endpoint=endpoint,
                                status_code=response.status_code,
                                attempt=attempt + 1,
                                max_retries=self.max_retries,
                                wait_seconds=wait_time,
                            )
                            await asyncio.sleep(wait_time)
                            continue
                        logger.error(
                            "Bookings API server error, max retries exceeded",
                            endpoint=endpoint,
                            status_code=response.status_code,
                        )
                        raise BookingAPIServerError(
                            f"Server error at {endpoint}: {response.status_code}"
                        )

                    if 400 <= response.status_code < 500:
                        logger.error(
                            "Bookings API client error",
                            endpoint=endpoint,
                            status_code=response.status_code,
                            response_text=response.text[:200],
                        )
                        raise SourceUnavailableError(
                            f"Client error at {endpoint}: {response.status_code}"
                        )

                    if response.status_code in (200, 201, 204):
                        logger.debug(
                            "Bookings API request successful",
                            endpoint=endpoint,
                            method=method,
                            status_code=response.status_code,
                        )
                        return response.json() if response.text else []

                    logger.error(
                        "Unexpected bookings API response status",
                        endpoint=endpoint,
                        status_code=response.status_code,
                    )
                    raise SourceUnavailableError(
                        f"Unexpected response from {endpoint}: {response.status_code}"
                    )

            except httpx.TimeoutException as e:
                if attempt < self.max_retries - 1:
                    wait_time = self.retry_backoff_base ** attempt
                    logger.warning(
                        "Bookings API request timeout, retrying",
                        endpoint=endpoint,
                        attempt=attempt + 1,
                        max_retries=self.max_retries,
                        wait_seconds=wait_time,
                    )
                    await asyncio.sleep(wait_time)
                    continue
                logger.error("Bookings API request timeout, max retries exceeded", endpoint=endpoint)
                raise SourceUnavailableError(f"Request timeout for {endpoint}") from e

            except httpx.RequestError as e:
                if attempt < self.max_retries - 1:
                    wait_time = self.retry_backoff_base ** attempt
                    logger.warning(
                        "Bookings API request error, retrying",
                        endpoint=endpoint,
                        error=str(e),
                        attempt=attempt + 1,
                        max_retries=self.max_retries,
                        wait_seconds=wait_time,
                    )
                    await asyncio.sleep(wait_time)
                    continue
                logger.error(
                    "Bookings API request error, max retries exceeded",
                    endpoint=endpoint,
                    error=str(e),
                )
                raise SourceUnavailableError(f"Request failed for {endpoint}: {str(e)}") from e

            except ValueError as e:
                # Body was not JSON
                logger.error("Bookings API returned invalid JSON", endpoint=endpoint, error=str(e))
                raise SourceUnavailableError(f"Invalid JSON from {endpoint}") from e

        raise SourceUnavailableError(f"Failed to complete request to {endpoint}")

    @staticmethod
    def _parse_bookings(payload: Any) -> list[TransactionRecord]:
        """Parse a JSON list (or ``{"bookings": [...]}``) into records.

        Items that fail validation are logged and skipped.
        """
        if isinstance(payload, dict):
            payload = payload.get("bookings") or payload.get("data") or []
        if not isinstance(payload, list):
            raise SourceUnavailableError(
                f"Unexpected bookings payload type: {type(payload).__name__}"
            )

        records = []
        for item in payload:
            try:
                records.append(TransactionRecord.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    "Failed to parse booking",
                    booking=str(item)[:100],
                    error=str(e),
                )
        return records

    async def query(
        self,
        property_filter: str,
        date_from: date,
        date_to: date,
    ) -> list[TransactionRecord]:
        """Fetch bookings created in a date range, optionally for one property.

        Args:
            property_filter: Property key, or "all" for every property
            date_from: First creation day (inclusive)
            date_to: Last creation day (inclusive)

        Returns:
            Parsed booking records

        Raises:
            SourceUnavailableError: If the API request fails
        """
        logger.info(
            "Fetching bookings from API",
            property_filter=property_filter,
            date_from=date_from.isoformat(),
            date_to=date_to.isoformat(),
        )
        params = {
            "startDate": date_from.isoformat(),
            "endDate": date_to.isoformat(),
        }
        if property_filter and property_filter != "all":
            params["property"] = property_filter

        payload = await self._make_request("GET", "/bookings", params=params)
        records = self._parse_bookings(payload)

        logger.info(
            "Successfully fetched bookings",
            property_filter=property_filter,
            booking_count=len(records),
        )
        return records
