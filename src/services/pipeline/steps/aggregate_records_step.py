"""Step to aggregate fetched booking records."""

from src.analytics import RecordAggregator
from src.services.pipeline import PipelineStep, ReportContext


class AggregateRecordsStep(PipelineStep):
    """Reduce each period's records independently into an Aggregate."""

    def __init__(self):
        super().__init__("AggregateRecords")

    async def execute(self, context: ReportContext) -> bool:
        scope = context.request.scope.model_copy(
            update={"property_filter": context.property_filter}
        )

        context.current = RecordAggregator.aggregate(context.current_records, scope)
        if context.previous_records is not None:
            context.previous = RecordAggregator.aggregate(context.previous_records, scope)

        context.stats["aggregation"] = {
            "current_total_revenue": context.current.total_revenue,
            "current_total_records": context.current.total_record_count,
            "current_malformed_records": context.current.malformed_record_count,
            "previous_total_records": (
                context.previous.total_record_count if context.previous else None
            ),
        }
        return True
