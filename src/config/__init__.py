"""Configuration package."""

from src.config.logging import configure_logging, get_logger
from src.config.settings import Settings, settings

__all__ = ["settings", "Settings", "configure_logging", "get_logger"]
