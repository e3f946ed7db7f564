"""Application settings and configuration management."""
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportSettings(BaseSettings):
    """Reporting engine configuration."""

    timezone: str = "UTC"  # Single reference timezone for "today" and day buckets
    room_capacity: int = Field(default=30, gt=0)  # Coarse occupancy denominator
    unknown_key: str = "unknown"  # Sentinel bucket for missing keys and dates
    previous_fetch_timeout: float = 10.0  # Seconds before the comparison fetch is dropped
    default_period: str = "last7days"

    model_config = SettingsConfigDict(env_prefix="REPORTS_")


class SeriesSettings(BaseSettings):
    """Chart series bucketing configuration.

    The legacy schemes reproduce the numbering and ordering of the existing
    dashboard charts. Switch to ``iso``/``calendar`` for calendar-correct
    buckets.
    """

    week_numbering: Literal["legacy", "iso"] = "legacy"
    month_order: Literal["first_seen", "calendar"] = "first_seen"

    model_config = SettingsConfigDict(env_prefix="SERIES_")


class BookingAPISettings(BaseSettings):
    """Booking document store API configuration."""

    base_url: str = "http://localhost:3000/api"
    api_key: Optional[str] = None
    request_timeout: int = 30
    max_retries: int = 3

    model_config = SettingsConfigDict(env_prefix="BOOKING_API_")


class LabelSettings(BaseSettings):
    """Display names and colors for report categories."""

    property_names: dict[str, str] = {
        "limuru": "Limuru Country Home",
        "kanamai": "Kanamai Beach Resort",
        "kisumu": "Kisumu Hotel",
    }
    colors: dict[str, str] = {
        "limuru": "#22440f",
        "kanamai": "#f3a435",
        "kisumu": "#17a2b8",
        "revenue": "#28a745",
        "occupancy": "#007bff",
        "bookings": "#6c757d",
        "website": "#22440f",
        "phone": "#f3a435",
        "email": "#17a2b8",
        "walkin": "#6c757d",
        "standard": "#22440f",
        "deluxe": "#f3a435",
        "suite": "#17a2b8",
        "executive": "#6c757d",
    }
    palette: list[str] = [
        "#FF6384",
        "#36A2EB",
        "#FFCE56",
        "#4BC0C0",
        "#9966FF",
        "#FF9F40",
        "#8AC926",
        "#1982C4",
        "#6A4C93",
        "#F15BB5",
    ]

    model_config = SettingsConfigDict(env_prefix="LABELS_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "json"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    """Main application settings."""

    environment: Literal["dev", "staging", "prod"] = "dev"
    debug: bool = False

    # Sub-settings
    reports: ReportSettings = ReportSettings()
    series: SeriesSettings = SeriesSettings()
    booking_api: BookingAPISettings = BookingAPISettings()
    labels: LabelSettings = LabelSettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def booking_api_base_url(self) -> str:
        """Booking API base URL without trailing slash."""
        return self.booking_api.base_url.rstrip("/")


# Global settings instance
settings = Settings()
