"""Step to compare the current period with the previous one."""

from src.analytics import ComparativeCalculator
from src.services.pipeline import PipelineStep, ReportContext


class ComparePeriodsStep(PipelineStep):
    """Compute the comparative KPIs."""

    def __init__(self):
        super().__init__("ComparePeriods")

    async def execute(self, context: ReportContext) -> bool:
        context.kpis = ComparativeCalculator.compare(context.current, context.previous)
        return True
