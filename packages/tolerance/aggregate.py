"""Per-floor and project-wide statistics, and the series fed to charts.

All functions are read-only over a snapshot of floors and are recomputed
on every call.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Sequence

from packages.core.types import (
    FloorChartPoint,
    FloorRecord,
    FloorSummary,
    ProjectStatistics,
    StatusCounts,
    StatusSlice,
    WindowMeasurement,
    WindowStatus,
)

STATUS_COLORS: dict[WindowStatus, str] = {
    WindowStatus.PASS: "#10b981",
    WindowStatus.WARNING: "#f59e0b",
    WindowStatus.FAIL: "#ef4444",
}


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def _all_windows(floors: Iterable[FloorRecord]) -> list[WindowMeasurement]:
    return [w for floor in floors for w in floor.windows]


def count_statuses(windows: Iterable[WindowMeasurement]) -> StatusCounts:
    """Count windows by status."""
    counts = Counter(w.status for w in windows)
    return StatusCounts(
        pass_=counts[WindowStatus.PASS],
        warning=counts[WindowStatus.WARNING],
        fail=counts[WindowStatus.FAIL],
        total=sum(counts.values()),
    )


def max_deviation(floors: Sequence[FloorRecord]) -> float:
    """Largest ``diagonal_diff`` over every window; 0 when there are none.

    Non-finite differences count as 0.
    """
    return max(
        (_finite_or_zero(w.diagonal_diff) for w in _all_windows(floors)), default=0.0
    )


def floor_summary(floor: FloorRecord) -> FloorSummary:
    counts = count_statuses(floor.windows)
    return FloorSummary(
        **counts.model_dump(),
        floor_id=floor.id,
        floor_number=floor.floor_number,
        label=floor.label,
        max_deviation=max_deviation([floor]),
    )


def project_statistics(floors: Sequence[FloorRecord]) -> ProjectStatistics:
    """Summed status counts, pass rate, and deviation figures for the project.

    ``pass_rate`` and the deviation figures are 0 for a project without
    windows.
    """
    windows = _all_windows(floors)
    counts = count_statuses(windows)
    total = counts.total

    pass_rate = counts.pass_ / total * 100 if total else 0.0
    average_tolerance = (
        sum(_finite_or_zero((w.width_tolerance + w.height_tolerance) / 2) for w in windows)
        / total
        if total
        else 0.0
    )

    return ProjectStatistics(
        **counts.model_dump(),
        floor_count=len(floors),
        pass_rate=pass_rate,
        max_deviation=max_deviation(floors),
        average_tolerance=average_tolerance,
    )


def floor_chart_series(floors: Sequence[FloorRecord]) -> list[FloorChartPoint]:
    """One ``(pass, warning, fail)`` entry per floor, in floor order."""
    return [
        FloorChartPoint(label=floor.label, **count_statuses(floor.windows).model_dump())
        for floor in floors
    ]


def status_distribution(floors: Sequence[FloorRecord]) -> list[StatusSlice]:
    """Project-wide status distribution for a pie chart."""
    counts = count_statuses(_all_windows(floors))
    values = {
        WindowStatus.PASS: counts.pass_,
        WindowStatus.WARNING: counts.warning,
        WindowStatus.FAIL: counts.fail,
    }
    slices = []
    for status, value in values.items():
        share = value / counts.total * 100 if counts.total else 0.0
        slices.append(
            StatusSlice(
                name=status,
                value=value,
                percentage=f"{share:.1f}",
                color=STATUS_COLORS[status],
            )
        )
    return slices
