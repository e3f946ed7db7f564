"""Unit tests for ComparativeCalculator."""

import pytest

from src.analytics import ComparativeCalculator, RecordAggregator
from src.analytics.comparative_calculator import TRACKED_METRICS
from src.models.aggregate import Aggregate


class TestPercentChange:
    """Tests for ComparativeCalculator.percent_change."""

    @pytest.mark.parametrize(
        "current,previous,expected",
        [
            (0, 0, 0),
            (50, 0, 100),
            (80, 40, 100),
            (30, 40, -25),
            (40, 40, 0),
        ],
    )
    def test_percent_change(self, current, previous, expected):
        assert ComparativeCalculator.percent_change(current, previous) == pytest.approx(expected)

    def test_full_precision(self):
        assert ComparativeCalculator.percent_change(1, 3) == pytest.approx(-66.6666667)


class TestCompare:
    """Tests for ComparativeCalculator.compare."""

    def test_metric_order(self):
        kpis = ComparativeCalculator.compare(Aggregate(), Aggregate())

        assert [kpi.metric_name for kpi in kpis] == [name for name, _, _ in TRACKED_METRICS]
        assert kpis[0].metric_name == "total_revenue"

    def test_no_previous_leaves_comparison_empty(self, scenario_a_records):
        current = RecordAggregator.aggregate(scenario_a_records)

        kpis = ComparativeCalculator.compare(current, None)

        assert len(kpis) == len(TRACKED_METRICS)
        for kpi in kpis:
            assert kpi.previous_value is None
            assert kpi.percent_change is None
            assert kpi.absolute_change is None
        assert kpis[0].current_value == 3000

    def test_previous_with_zero_values(self, scenario_a_records):
        current = RecordAggregator.aggregate(scenario_a_records)

        kpis = {kpi.metric_name: kpi for kpi in ComparativeCalculator.compare(current, Aggregate())}

        assert kpis["total_revenue"].percent_change == 100
        assert kpis["total_revenue"].absolute_change == 3000
        assert kpis["pending"].percent_change == 0
        assert kpis["pending"].previous_value == 0

    def test_status_metrics(self, scenario_a_records):
        current = RecordAggregator.aggregate(scenario_a_records)
        previous = RecordAggregator.aggregate(scenario_a_records[:1])

        kpis = {kpi.metric_name: kpi for kpi in ComparativeCalculator.compare(current, previous)}

        assert kpis["confirmed"].current_value == 2
        assert kpis["confirmed"].previous_value == 1
        assert kpis["confirmed"].percent_change == pytest.approx(100)
        assert kpis["cancelled"].current_value == 1
        assert kpis["total_bookings"].absolute_change == 2
        assert kpis["total_revenue"].percent_change == pytest.approx(200)

    def test_compare_metric_rounds_only_for_display(self):
        kpi = ComparativeCalculator.compare_metric("total_revenue", "Total Revenue", 58000, 15000)

        assert kpi.percent_change == pytest.approx(286.6666667)
        assert kpi.display_percent_change == 286.7
        assert kpi.absolute_change == 43000
