"""Tests for availability aggregation and heatmap buckets."""

import pytest

from meetgrid.engine.aggregate import (
    HeatmapBucket,
    aggregate,
    heatmap_bucket,
    summarize,
    total_participants,
)


class TestAggregate:
    def test_scenario_cell(self, scenario_responses):
        stats = aggregate(scenario_responses, "2024-06-03", "09:00")
        assert stats.count == 2
        assert stats.available_users == ["Alice", "Bob"]

    def test_partial_cell(self, scenario_responses):
        stats = aggregate(scenario_responses, "2024-06-03", "09:30")
        assert stats.count == 1
        assert stats.available_users == ["Bob"]

    def test_empty_cell(self, scenario_responses):
        stats = aggregate(scenario_responses, "2024-06-04", "09:00")
        assert stats.count == 0
        assert stats.available_users == []

    def test_false_values_do_not_count(self):
        responses = {"Alice": {"Monday_09:00": False}, "Bob": {"Monday_09:00": True}}
        assert aggregate(responses, "Monday", "09:00").available_users == ["Bob"]

    def test_missing_map_is_available_nowhere(self):
        responses = {"Alice": None, "Bob": {}, "Cara": {"Monday_09:00": True}}
        stats = aggregate(responses, "Monday", "09:00")
        assert stats.count == 1
        assert stats.available_users == ["Cara"]

    def test_follows_responses_order(self):
        responses = {"Zed": {"Monday_09:00": True}, "Amy": {"Monday_09:00": True}}
        assert aggregate(responses, "Monday", "09:00").available_users == ["Zed", "Amy"]

    def test_count_matches_respondents_for_every_key(self, scenario_grid):
        responses = {
            "a": {"2024-06-03_09:00": True, "2024-06-04_09:30": True},
            "b": {"2024-06-04_09:30": True},
            "c": {"2024-06-03_09:00": False, "2024-06-04_09:00": True},
        }
        for column, time_slot in scenario_grid.cells():
            key = f"{column}_{time_slot}"
            expected = sum(1 for a in responses.values() if a.get(key))
            stats = aggregate(responses, column, time_slot)
            assert stats.count == expected == len(stats.available_users)
            assert stats.count <= total_participants(responses)


class TestHeatmapBucket:
    @pytest.mark.parametrize(
        "count,total,expected",
        [
            (5, 5, HeatmapBucket.PEAK),
            (4, 5, HeatmapBucket.PEAK),
            (3, 5, HeatmapBucket.HIGH),
            (2, 5, HeatmapBucket.MEDIUM),
            (1, 5, HeatmapBucket.LOW),
            (1, 6, HeatmapBucket.SPARSE),
            (0, 5, HeatmapBucket.EMPTY),
            (0, 0, HeatmapBucket.EMPTY),
            (3, 0, HeatmapBucket.EMPTY),
        ],
    )
    def test_tiers(self, count, total, expected):
        assert heatmap_bucket(count, total) is expected

    def test_lower_bounds_are_inclusive(self):
        assert heatmap_bucket(8, 10) is HeatmapBucket.PEAK
        assert heatmap_bucket(7, 10) is HeatmapBucket.HIGH
        assert heatmap_bucket(6, 10) is HeatmapBucket.HIGH
        assert heatmap_bucket(4, 10) is HeatmapBucket.MEDIUM
        assert heatmap_bucket(2, 10) is HeatmapBucket.LOW

    def test_monotonic_in_ratio(self):
        total = 17
        buckets = [heatmap_bucket(count, total) for count in range(total + 1)]
        assert buckets == sorted(buckets)


class TestSummarize:
    def test_every_cell_in_scan_order(self, scenario_grid, scenario_responses):
        cells = summarize(scenario_responses, scenario_grid.columns, scenario_grid.time_slots)
        assert [c.key for c in cells] == scenario_grid.keys()
        first = cells[0]
        assert first.count == 2
        assert first.available_users == ["Alice", "Bob"]
        assert first.bucket is HeatmapBucket.PEAK
        assert cells[1].bucket is HeatmapBucket.MEDIUM  # 1 of 2
        assert cells[2].bucket is HeatmapBucket.EMPTY

    def test_no_respondents(self, scenario_grid):
        cells = summarize({}, scenario_grid.columns, scenario_grid.time_slots)
        assert all(c.count == 0 and c.bucket is HeatmapBucket.EMPTY for c in cells)
