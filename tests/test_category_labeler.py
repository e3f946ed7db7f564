"""Unit tests for CategoryLabeler and BreakdownTables."""

import zlib

import pytest

from src.analytics import BreakdownTables, CategoryLabeler, RecordAggregator
from src.config import settings
from src.models.report import CategoryKind


class TestCategoryLabeler:
    """Tests for CategoryLabeler."""

    def test_configured_property_name_and_color(self):
        labeler = CategoryLabeler()

        label = labeler.label("limuru", CategoryKind.PROPERTY)

        assert label.name == settings.labels.property_names["limuru"]
        assert label.color == settings.labels.colors["limuru"]
        assert label.icon == "fas fa-mountain"

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("walk-in", "Walk In"),
            ("travel_agent", "Travel Agent"),
            ("website", "Website"),
        ],
    )
    def test_title_case_fallback(self, key, expected):
        assert CategoryLabeler(names={}).display_name(key) == expected

    def test_unmapped_color_is_stable_palette_pick(self):
        palette = ["#111111", "#222222", "#333333"]
        labeler = CategoryLabeler(colors={}, palette=palette)

        color = labeler.color("garden-view")

        assert color == palette[zlib.crc32(b"garden-view") % 3]
        assert CategoryLabeler(colors={}, palette=palette).color("garden-view") == color

    def test_explicit_color_wins_over_palette(self):
        labeler = CategoryLabeler(colors={"suite": "#abcdef"}, palette=["#000000"])

        assert labeler.color("suite") == "#abcdef"
        assert labeler.color("standard") == "#000000"

    def test_default_icons(self):
        labeler = CategoryLabeler()

        assert labeler.icon("carrier-pigeon", CategoryKind.SOURCE) == "fas fa-question-circle"
        assert labeler.icon("suite", CategoryKind.ROOM_CATEGORY) == "fas fa-bed"
        assert labeler.icon("website", CategoryKind.SOURCE) == "fas fa-globe"

    def test_label_accepts_kind_string(self):
        label = CategoryLabeler().label("phone", "source")

        assert label.kind == CategoryKind.SOURCE
        assert label.name == "Phone"


class TestBreakdownTables:
    """Tests for BreakdownTables."""

    def test_property_table_sorted_by_revenue(self, bookings):
        current = [record for record in bookings if record.booking_id in {"B001", "B002", "B003", "B004", "B005"}]
        aggregate = RecordAggregator.aggregate(current)

        tables = BreakdownTables.build(aggregate, CategoryLabeler())

        assert set(tables) == {"property", "source", "roomCategory"}
        rows = tables["property"]
        assert [row.key for row in rows] == ["kanamai", "limuru", "kisumu"]
        assert rows[0].revenue == 40000
        assert rows[0].count == 2
        assert rows[0].average_value == 20000
        assert rows[0].share == pytest.approx(40)
        assert sum(row.share for row in rows) == pytest.approx(100)

    def test_ties_broken_by_key(self):
        records = [
            {"property": "kisumu", "amount": 500, "createdAt": "2025-01-10"},
            {"property": "kanamai", "amount": 500, "createdAt": "2025-01-10"},
        ]

        rows = BreakdownTables.build(RecordAggregator.aggregate(records))["property"]

        assert [row.key for row in rows] == ["kanamai", "kisumu"]

    def test_missing_source_row(self, scenario_a_records):
        aggregate = RecordAggregator.aggregate(scenario_a_records)

        rows = BreakdownTables.build(aggregate)["source"]

        assert [row.key for row in rows] == ["unknown"]
        assert rows[0].name == "Unknown"
        assert rows[0].share == 100

    def test_empty_aggregate(self):
        aggregate = RecordAggregator.aggregate([])

        tables = BreakdownTables.build(aggregate)

        assert tables["property"] == []
