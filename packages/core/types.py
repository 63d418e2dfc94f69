"""Pydantic models for window measurements, floors, and report artefacts.

A *window* carries nine raw inputs recorded on site (three width samples,
three height samples, two nominal dimensions, and the allowed limit) plus
the geometric values derived from them and its conformance status.  Floors
group windows in display order; reports and exports are flattened views of
the floors built on demand.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ── status ───────────────────────────────────────────────────────────
class WindowStatus(str, Enum):
    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


# ── window inputs ────────────────────────────────────────────────────
class WindowInput(BaseModel):
    """Raw measurements of one window, in millimetres.

    No range constraints are applied here: rejecting implausible values is
    the job of :mod:`packages.tolerance.validation`.
    """

    code: str
    nominal_width: float
    nominal_height: float
    limit: float = Field(description="Allowed tolerance for this window (mm)")

    # width sampled at three heights
    width_top: float
    width_middle: float
    width_bottom: float

    # height sampled at three positions
    height_left: float
    height_middle: float
    height_right: float


class WindowPatch(BaseModel):
    """Partial update of a window's inputs.  Only fields explicitly set are merged."""

    code: Optional[str] = None
    nominal_width: Optional[float] = None
    nominal_height: Optional[float] = None
    limit: Optional[float] = None
    width_top: Optional[float] = None
    width_middle: Optional[float] = None
    width_bottom: Optional[float] = None
    height_left: Optional[float] = None
    height_middle: Optional[float] = None
    height_right: Optional[float] = None

    def apply(self, window: WindowInput) -> WindowInput:
        """Return *window*'s inputs with the set, non-null fields of this patch merged in."""
        changes = self.model_dump(exclude_unset=True, exclude_none=True)
        current = window.model_dump(include=set(WindowInput.model_fields))
        return WindowInput.model_validate({**current, **changes})


# ── derived values ───────────────────────────────────────────────────
class DerivedMeasurements(BaseModel):
    """Geometric quantities computed from a :class:`WindowInput`."""

    model_config = ConfigDict(frozen=True)

    width_mean: float
    height_mean: float
    width_range: float = Field(description="max - min of the three width samples")
    height_range: float = Field(description="max - min of the three height samples")
    theoretical_diagonal: float = Field(description="Diagonal of the nominal rectangle")
    actual_diagonal: float = Field(description="Diagonal of the mean measured rectangle")
    diagonal_diff: float
    width_tolerance: float = Field(description="|width_mean - nominal_width|")
    height_tolerance: float = Field(description="|height_mean - nominal_height|")
    combined_deviation: float = Field(
        description="Largest of the tolerances, the diagonal difference and half of each range"
    )


class WindowMeasurement(WindowInput):
    """A stored window: inputs, derived values, and status.

    Instances are created by the registry only and are immutable; an update
    replaces the whole record.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    floor_id: str

    width_mean: float
    height_mean: float
    width_range: float
    height_range: float
    theoretical_diagonal: float
    actual_diagonal: float
    diagonal_diff: float
    width_tolerance: float
    height_tolerance: float
    combined_deviation: float

    status: WindowStatus

    def to_input(self) -> WindowInput:
        return WindowInput.model_validate(
            self.model_dump(include=set(WindowInput.model_fields))
        )


# ── floors & project ─────────────────────────────────────────────────
class FloorRecord(BaseModel):
    """One floor of the building, holding its windows in display order."""

    id: str
    floor_number: int = Field(ge=1)
    name: Optional[str] = None
    windows: list[WindowMeasurement] = Field(default_factory=list)

    @property
    def label(self) -> str:
        return self.name or f"Floor {self.floor_number}"


class ProjectMetadata(BaseModel):
    building_name: str = ""
    engineer_name: str = ""
    date: str = Field(default_factory=lambda: date.today().isoformat())
    project_code: Optional[str] = None
    description: Optional[str] = None


# ── aggregation ──────────────────────────────────────────────────────
class StatusCounts(BaseModel):
    """Window counts per status.  ``pass_`` is serialized as ``pass``."""

    model_config = ConfigDict(populate_by_name=True)

    pass_: int = Field(0, alias="pass")
    warning: int = 0
    fail: int = 0
    total: int = 0


class FloorSummary(StatusCounts):
    floor_id: str
    floor_number: int
    label: str
    max_deviation: float = 0.0


class ProjectStatistics(StatusCounts):
    floor_count: int = 0
    pass_rate: float = Field(0.0, description="Percentage of windows with status pass")
    max_deviation: float = Field(0.0, description="Largest diagonal difference in the project (mm)")
    average_tolerance: float = Field(
        0.0, description="Mean of (width_tolerance + height_tolerance) / 2 over all windows"
    )


class FloorChartPoint(StatusCounts):
    """One bar/line chart entry, keyed by floor label."""

    label: str


class StatusSlice(BaseModel):
    """One pie chart slice of the project-wide status distribution."""

    name: WindowStatus
    value: int
    percentage: str
    color: str


# ── export ───────────────────────────────────────────────────────────
class ExportWindowRow(BaseModel):
    """A window as rendered in a floor sheet: numeric values as one-decimal text."""

    code: str
    nominal_width: str
    nominal_height: str
    limit: str
    width_top: str
    width_middle: str
    width_bottom: str
    height_left: str
    height_middle: str
    height_right: str
    width_mean: str
    height_mean: str
    width_range: str
    height_range: str
    theoretical_diagonal: str
    actual_diagonal: str
    diagonal_diff: str
    width_tolerance: str
    height_tolerance: str
    status: WindowStatus


class ExportFloor(BaseModel):
    floor_number: int
    label: str
    window_count: int
    rows: list[ExportWindowRow] = Field(default_factory=list)


class ExportProject(ProjectMetadata):
    floor_count: int


class ExportSnapshot(BaseModel):
    """Everything the document-export collaborator needs, fully derived."""

    project: ExportProject
    floors: list[ExportFloor] = Field(default_factory=list)
    statistics: ProjectStatistics


# ── survey files & reports ───────────────────────────────────────────
class SurveyFloor(BaseModel):
    name: Optional[str] = None
    windows: list[WindowInput] = Field(default_factory=list)


class Survey(BaseModel):
    """Raw site survey as stored on disk: project metadata and per-floor inputs."""

    project: ProjectMetadata = Field(default_factory=ProjectMetadata)
    floors: list[SurveyFloor] = Field(default_factory=list)


class EvaluationReport(BaseModel):
    """Output of evaluating a survey file."""

    source_file: str = ""
    warning_multiplier: float
    skipped: list[str] = Field(default_factory=list)
    export: ExportSnapshot
    chart_series: list[FloorChartPoint] = Field(default_factory=list)
    distribution: list[StatusSlice] = Field(default_factory=list)
