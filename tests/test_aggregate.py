"""Tests for per-floor and project-wide aggregation."""

from __future__ import annotations

import json
import math

import pytest

from packages.core.types import WindowStatus
from packages.tolerance.aggregate import (
    STATUS_COLORS,
    count_statuses,
    floor_chart_series,
    floor_summary,
    max_deviation,
    project_statistics,
    status_distribution,
)
from packages.tolerance.registry import FloorRegistry

from helpers import make_window


class TestCounts:
    def test_floor_summary(self, populated_registry: FloorRegistry):
        first, second = populated_registry.floors
        s1 = floor_summary(first)
        s2 = floor_summary(second)

        assert (s1.pass_, s1.warning, s1.fail, s1.total) == (1, 1, 0, 2)
        assert (s2.pass_, s2.warning, s2.fail, s2.total) == (1, 0, 1, 2)
        assert s1.floor_number == 1
        assert s2.label == "Floor 2"

    def test_counts_add_up(self, populated_registry: FloorRegistry):
        for floor in populated_registry.floors:
            c = count_statuses(floor.windows)
            assert c.pass_ + c.warning + c.fail == c.total
        stats = project_statistics(populated_registry.floors)
        assert stats.pass_ + stats.warning + stats.fail == stats.total == 4

    def test_serialized_with_pass_key(self, populated_registry: FloorRegistry):
        data = count_statuses(populated_registry.iter_windows()).model_dump(by_alias=True)
        assert data == {"pass": 2, "warning": 1, "fail": 1, "total": 4}


class TestProjectStatistics:
    def test_values(self, populated_registry: FloorRegistry):
        floors = populated_registry.floors
        stats = project_statistics(floors)

        assert stats.floor_count == 2
        assert stats.pass_rate == pytest.approx(50.0)
        expected_max = max(w.diagonal_diff for w in populated_registry.iter_windows())
        assert stats.max_deviation == pytest.approx(expected_max)
        assert stats.max_deviation == max_deviation(floors)
        windows = list(populated_registry.iter_windows())
        expected_avg = sum((w.width_tolerance + w.height_tolerance) / 2 for w in windows) / 4
        assert stats.average_tolerance == pytest.approx(expected_avg)

    def test_empty_project(self):
        stats = project_statistics(FloorRegistry().floors)
        assert stats.total == 0
        assert stats.pass_rate == 0.0
        assert stats.max_deviation == 0.0
        assert stats.average_tolerance == 0.0
        assert stats.floor_count == 1

    def test_no_floors(self):
        stats = project_statistics([])
        assert stats.total == 0
        assert stats.pass_rate == 0.0
        assert max_deviation([]) == 0.0


class TestCharts:
    def test_series_in_floor_order(self, populated_registry: FloorRegistry):
        series = floor_chart_series(populated_registry.floors)
        assert [p.label for p in series] == ["Floor 1", "Floor 2"]
        assert [(p.pass_, p.warning, p.fail) for p in series] == [(1, 1, 0), (1, 0, 1)]

    def test_distribution(self, populated_registry: FloorRegistry):
        slices = status_distribution(populated_registry.floors)
        assert [s.name for s in slices] == [
            WindowStatus.PASS, WindowStatus.WARNING, WindowStatus.FAIL,
        ]
        assert [s.value for s in slices] == [2, 1, 1]
        assert [s.percentage for s in slices] == ["50.0", "25.0", "25.0"]
        assert slices[2].color == STATUS_COLORS[WindowStatus.FAIL]

    def test_distribution_empty(self):
        slices = status_distribution(FloorRegistry().floors)
        assert [s.value for s in slices] == [0, 0, 0]
        assert all(s.percentage == "0.0" for s in slices)

    def test_reads_do_not_mutate(self, populated_registry: FloorRegistry):
        before = [f.model_dump() for f in populated_registry.floors]
        project_statistics(populated_registry.floors)
        floor_chart_series(populated_registry.floors)
        status_distribution(populated_registry.floors)
        assert [f.model_dump() for f in populated_registry.floors] == before


class TestNonFiniteWindows:
    @pytest.mark.parametrize(
        "widths",
        [(math.inf, 1200.0, 1200.0), (math.inf, -math.inf, 1200.0)],
    )
    @pytest.mark.parametrize("bad_first", [True, False])
    def test_ignored_regardless_of_order(self, widths, bad_first: bool):
        registry = FloorRegistry()
        floor_id = registry.floors[0].id
        bad = make_window("BAD", widths=widths)
        good = make_window("GOOD", widths=(1204.0, 1204.0, 1204.0))
        for window in ([bad, good] if bad_first else [good, bad]):
            registry.add_window(floor_id, window)
        good_record = next(w for w in registry.iter_windows() if w.code == "GOOD")

        stats = project_statistics(registry.floors)

        assert stats.max_deviation == pytest.approx(good_record.diagonal_diff)
        assert stats.average_tolerance == pytest.approx(
            (good_record.width_tolerance + good_record.height_tolerance) / 2 / 2
        )
        data = json.loads(stats.model_dump_json())
        assert data["max_deviation"] is not None
        assert data["average_tolerance"] is not None
