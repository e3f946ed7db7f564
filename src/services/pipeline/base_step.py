"""Base class for report pipeline steps."""

import time
from abc import ABC, abstractmethod

from structlog import get_logger

from .context import ReportContext

logger = get_logger(__name__)


class PipelineStep(ABC):
    """Abstract base class for report pipeline steps.

    Each step reads its inputs from the context, does its work, writes its
    results back to the context and returns a success boolean.
    """

    def __init__(self, name: str | None = None):
        """Initialize the pipeline step.

        Args:
            name: Optional custom name for the step. Defaults to class name.
        """
        self.name = name or self.__class__.__name__
        self.logger = logger.bind(step=self.name)

    @abstractmethod
    async def execute(self, context: ReportContext) -> bool:
        """Execute the pipeline step.

        Args:
            context: Report context containing shared data

        Returns:
            True if step succeeded, False if failed
        """
        pass

    async def run(self, context: ReportContext) -> bool:
        """Run the step, recording its outcome on the context.

        Exceptions are kept on the context so the report service can
        re-raise domain errors once the pipeline stops. Outcome and
        duration land in ``context.stats["steps"][name]``.

        Args:
            context: Report context

        Returns:
            True if step succeeded, False if failed
        """
        started = time.perf_counter()
        try:
            success = await self.execute(context)
        except Exception as e:
            self.logger.error(
                "Step raised",
                property_filter=context.property_filter,
                error=str(e),
                error_type=type(e).__name__,
            )
            context.add_error(self.name, e)
            success = False
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        context.stats.setdefault("steps", {})[self.name] = {
            "success": success,
            "required": self.is_required(),
            "duration_ms": duration_ms,
        }
        self.logger.debug(
            "Step finished",
            property_filter=context.property_filter,
            success=success,
            duration_ms=duration_ms,
        )
        return success

    def is_required(self) -> bool:
        """Check if this step is required for pipeline success.

        Returns:
            True if step failure should stop pipeline, False if optional
        """
        return True

    def get_name(self) -> str:
        return self.name
