"""Pipeline executor for report computation steps."""

from structlog import get_logger

from .base_step import PipelineStep
from .context import ReportContext

logger = get_logger(__name__)


class Pipeline:
    """Pipeline for executing a sequence of report steps.

    The pipeline:
    1. Executes steps in order
    2. Passes context between steps
    3. Stops at the first failed required step
    4. Continues past failed optional steps
    5. Collects statistics
    """

    def __init__(self, name: str, steps: list[PipelineStep]):
        """Initialize the pipeline.

        Args:
            name: Pipeline name for logging
            steps: List of pipeline steps to execute in order
        """
        self.name = name
        self.steps = steps
        self.logger = logger.bind(pipeline=name)

    async def execute(self, context: ReportContext) -> ReportContext:
        """Execute the pipeline.

        Args:
            context: Report context

        Returns:
            Updated context with results
        """
        self.logger.debug(
            "Pipeline starting",
            property_filter=context.property_filter,
            step_count=len(self.steps),
        )

        successful_steps = 0
        failed_steps = 0
        stopped_at = None

        for step in self.steps:
            step_name = step.get_name()

            success = await step.run(context)

            if success:
                successful_steps += 1
                continue

            failed_steps += 1

            # If step is required and failed, stop pipeline
            if step.is_required():
                self.logger.error(
                    "Required step failed, stopping pipeline",
                    property_filter=context.property_filter,
                    step=step_name,
                )
                stopped_at = step_name
                break

            self.logger.warning(
                "Optional step failed, continuing pipeline",
                property_filter=context.property_filter,
                step=step_name,
            )

        context.success = stopped_at is None

        context.stats["pipeline"] = {
            "name": self.name,
            "total_steps": len(self.steps),
            "successful_steps": successful_steps,
            "failed_steps": failed_steps,
            "stopped_at": stopped_at,
        }

        self.logger.info(
            "Pipeline completed",
            property_filter=context.property_filter,
            success=context.success,
            successful_steps=successful_steps,
            failed_steps=failed_steps,
        )

        return context

    def add_step(self, step: PipelineStep) -> "Pipeline":
        """Add a step to the pipeline.

        Args:
            step: Pipeline step to add

        Returns:
            Self for method chaining
        """
        self.steps.append(step)
        return self

    def get_step_names(self) -> list[str]:
        return [step.get_name() for step in self.steps]
