"""Step to resolve the report scope and periods."""

from src.analytics import PeriodResolver
from src.services.pipeline import PipelineStep, ReportContext


class ResolvePeriodStep(PipelineStep):
    """Resolve the property filter and the current and previous date ranges."""

    def __init__(self):
        super().__init__("ResolvePeriod")

    async def execute(self, context: ReportContext) -> bool:
        """Resolve scope and periods.

        InvalidPeriodError propagates to the step runner, which records it
        so the report service can re-raise it.

        Args:
            context: Report context

        Returns:
            True once both ranges are resolved
        """
        context.property_filter = context.request.scope.effective_property_filter()
        if context.property_filter != context.request.scope.property_filter:
            self.logger.info(
                "Property filter narrowed to allowed property",
                requested=context.request.scope.property_filter,
                property_filter=context.property_filter,
            )

        context.current_range, context.previous_range = PeriodResolver.resolve_with_previous(
            context.request.period,
            today=context.today,
        )

        self.logger.info(
            "Resolved report periods",
            property_filter=context.property_filter,
            current_range=str(context.current_range),
            previous_range=str(context.previous_range),
        )
        return True
