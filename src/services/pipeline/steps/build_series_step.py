"""Step to derive chart series from the current period."""

from src.analytics import SeriesBucketer
from src.services.pipeline import PipelineStep, ReportContext


class BuildSeriesStep(PipelineStep):
    """Bucket the current period's daily data into revenue and booking series."""

    def __init__(self):
        super().__init__("BuildSeries")

    async def execute(self, context: ReportContext) -> bool:
        context.series = SeriesBucketer.bucket_all(
            context.current.by_day,
            context.request.granularity,
        )
        return True

    def is_required(self) -> bool:
        """Charts are optional; KPIs and tables still render without them.

        Returns:
            False
        """
        return False
