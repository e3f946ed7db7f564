"""Step to build labeled breakdown tables."""

from src.analytics import BreakdownTables, CategoryLabeler
from src.services.pipeline import PipelineStep, ReportContext


class BuildTablesStep(PipelineStep):
    """Build the property, source and room category tables."""

    def __init__(self, labeler: CategoryLabeler):
        """Initialize the step.

        Args:
            labeler: Category labeler for names, colors and icons
        """
        super().__init__("BuildTables")
        self.labeler = labeler

    async def execute(self, context: ReportContext) -> bool:
        context.tables = BreakdownTables.build(context.current, self.labeler)
        return True

    def is_required(self) -> bool:
        """Tables are optional; KPIs and charts still render without them.

        Returns:
            False
        """
        return False
