"""Flatten project metadata and floors into the record set used for export."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from packages.core.types import (
    ExportFloor,
    ExportProject,
    ExportSnapshot,
    ExportWindowRow,
    FloorRecord,
    ProjectMetadata,
    WindowMeasurement,
)
from packages.tolerance.aggregate import project_statistics

logger = logging.getLogger(__name__)

_NUMERIC_FIELDS = (
    "nominal_width",
    "nominal_height",
    "limit",
    "width_top",
    "width_middle",
    "width_bottom",
    "height_left",
    "height_middle",
    "height_right",
    "width_mean",
    "height_mean",
    "width_range",
    "height_range",
    "theoretical_diagonal",
    "actual_diagonal",
    "diagonal_diff",
    "width_tolerance",
    "height_tolerance",
)


class ExportNotReadyError(ValueError):
    """The project cannot be exported yet (missing metadata or no windows)."""


def format_mm(value: float) -> str:
    """Render a millimetre value with one decimal; non-finite values become ``0.0``."""
    if not math.isfinite(value):
        value = 0.0
    return f"{value:.1f}"


def window_row(window: WindowMeasurement) -> ExportWindowRow:
    return ExportWindowRow(
        code=window.code,
        status=window.status,
        **{name: format_mm(getattr(window, name)) for name in _NUMERIC_FIELDS},
    )


def build_export(
    project: ProjectMetadata,
    floors: Sequence[FloorRecord],
) -> ExportSnapshot:
    """Build the export snapshot for *project* over *floors*.

    Raises :class:`ExportNotReadyError` when the building name is missing or
    no floor holds a window.
    """
    if not project.building_name.strip():
        raise ExportNotReadyError("Project information is incomplete: building name is required")
    if not any(floor.windows for floor in floors):
        raise ExportNotReadyError("At least one window must be recorded before exporting")

    export_floors = [
        ExportFloor(
            floor_number=floor.floor_number,
            label=floor.label,
            window_count=len(floor.windows),
            rows=[window_row(w) for w in floor.windows],
        )
        for floor in floors
    ]
    snapshot = ExportSnapshot(
        project=ExportProject(**project.model_dump(), floor_count=len(floors)),
        floors=export_floors,
        statistics=project_statistics(floors),
    )
    logger.info(
        "Built export for %r: %d floor(s), %d window(s)",
        project.building_name, len(floors), snapshot.statistics.total,
    )
    return snapshot
