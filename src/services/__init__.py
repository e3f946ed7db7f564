"""Business services package."""

from src.services.report_service import ReportGenerationError, ReportService

__all__ = [
    "ReportService",
    "ReportGenerationError",
]
