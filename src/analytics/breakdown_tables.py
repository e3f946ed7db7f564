"""Per-dimension breakdown tables for the report screen."""

from typing import Optional

from src.analytics.category_labeler import CategoryLabeler
from src.models.aggregate import Aggregate, DimensionStats
from src.models.report import BreakdownRow, CategoryKind


class BreakdownTables:
    """Turns the dimension maps of an Aggregate into labeled table rows."""

    @staticmethod
    def rows(
        stats_by_key: dict[str, DimensionStats],
        kind: CategoryKind,
        total_count: int,
        labeler: CategoryLabeler,
    ) -> list[BreakdownRow]:
        """Rows sorted by revenue (highest first), then key."""
        rows = []
        for key, stats in stats_by_key.items():
            label = labeler.label(key, kind)
            rows.append(
                BreakdownRow(
                    key=key,
                    name=label.name,
                    color=label.color,
                    icon=label.icon,
                    revenue=stats.revenue,
                    count=stats.count,
                    average_value=stats.revenue / stats.count if stats.count else 0.0,
                    share=stats.count / total_count * 100 if total_count else 0.0,
                )
            )
        rows.sort(key=lambda row: (-row.revenue, row.key))
        return rows

    @staticmethod
    def build(
        aggregate: Aggregate,
        labeler: Optional[CategoryLabeler] = None,
    ) -> dict[str, list[BreakdownRow]]:
        """Property, source and room category tables keyed by dimension name."""
        labeler = labeler or CategoryLabeler()
        total = aggregate.total_record_count
        return {
            CategoryKind.PROPERTY.value: BreakdownTables.rows(
                aggregate.by_property, CategoryKind.PROPERTY, total, labeler
            ),
            CategoryKind.SOURCE.value: BreakdownTables.rows(
                aggregate.by_source, CategoryKind.SOURCE, total, labeler
            ),
            CategoryKind.ROOM_CATEGORY.value: BreakdownTables.rows(
                aggregate.by_room_category, CategoryKind.ROOM_CATEGORY, total, labeler
            ),
        }
