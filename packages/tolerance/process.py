"""End-to-end pipeline: load a survey file → evaluate every window → report JSON."""

from __future__ import annotations

import logging
from pathlib import Path

from packages.core.types import EvaluationReport, Survey
from packages.tolerance.aggregate import floor_chart_series, status_distribution
from packages.tolerance.classify import WARNING_MULTIPLIER
from packages.tolerance.export import build_export
from packages.tolerance.loader import load_survey
from packages.tolerance.registry import FloorRegistry
from packages.tolerance.validation import validate_window_input

logger = logging.getLogger(__name__)


def build_registry(
    survey: Survey,
    *,
    warning_multiplier: float = WARNING_MULTIPLIER,
    strict: bool = False,
) -> tuple[FloorRegistry, list[str]]:
    """Populate a registry from a survey.

    Windows failing input validation raise ``ValueError`` when *strict*,
    otherwise they are skipped and described in the returned list.
    """
    registry = FloorRegistry(warning_multiplier=warning_multiplier)
    skipped: list[str] = []

    for i, survey_floor in enumerate(survey.floors):
        if i == 0:
            floor = registry.current_floor
            floor.name = survey_floor.name
        else:
            floor = registry.add_floor(survey_floor.name)

        for window in survey_floor.windows:
            errors = validate_window_input(window, [w.code for w in floor.windows])
            if errors:
                message = f"{floor.label} / {window.code or '?'}: {'; '.join(errors)}"
                if strict:
                    raise ValueError(f"Invalid window: {message}")
                logger.warning("Skipping window %s", message)
                skipped.append(message)
                continue
            registry.add_window(floor.id, window)

    registry.select_floor(0)
    return registry, skipped


def evaluate_survey(
    input_path: str | Path,
    *,
    warning_multiplier: float = WARNING_MULTIPLIER,
    strict: bool = False,
) -> EvaluationReport:
    """Run the full evaluation on a single survey file.

    1. Load the file.
    2. Validate and register every window (derive + classify).
    3. Aggregate per-floor and project statistics.
    4. Assemble an :class:`EvaluationReport`.
    """
    input_path = Path(input_path)
    logger.info("Loading %s …", input_path.name)
    survey = load_survey(input_path)
    project = survey.project
    if not project.building_name.strip():
        logger.info("No building name in survey, using %r", input_path.stem)
        project = project.model_copy(update={"building_name": input_path.stem})

    logger.info("Evaluating windows (k=%.2f) …", warning_multiplier)
    registry, skipped = build_registry(
        survey, warning_multiplier=warning_multiplier, strict=strict,
    )
    floors = registry.floors
    logger.info(
        "Evaluated %d window(s) on %d floor(s), skipped %d",
        sum(len(f.windows) for f in floors), len(floors), len(skipped),
    )

    return EvaluationReport(
        source_file=input_path.name,
        warning_multiplier=warning_multiplier,
        skipped=skipped,
        export=build_export(project, floors),
        chart_series=floor_chart_series(floors),
        distribution=status_distribution(floors),
    )


def evaluate_survey_to_json(
    input_path: str | Path,
    output_path: str | Path | None = None,
    **kwargs,
) -> str:
    """Run the evaluation and write the report to a JSON file.

    Returns the JSON string.
    """
    report = evaluate_survey(input_path, **kwargs)
    json_str = report.model_dump_json(indent=2, by_alias=True)

    if output_path is None:
        output_path = Path(input_path).with_suffix(".report.json")
    Path(output_path).write_text(json_str)
    logger.info("Wrote report → %s", output_path)
    return json_str
