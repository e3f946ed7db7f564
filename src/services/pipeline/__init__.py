"""Pipeline infrastructure for report computation."""

from .base_step import PipelineStep
from .context import ReportContext
from .pipeline import Pipeline

__all__ = [
    "PipelineStep",
    "ReportContext",
    "Pipeline",
]
