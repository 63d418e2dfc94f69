"""CLI entry-point for window tolerance evaluation."""

from __future__ import annotations

import json
import logging

import click

from packages.core.types import WindowInput
from packages.tolerance.classify import WARNING_MULTIPLIER, evaluate_window
from packages.tolerance.process import evaluate_survey_to_json


@click.group()
def main():
    """Window installation tolerance checks."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s | %(name)s | %(message)s",
    )


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", "output_file", default=None, help="Output JSON path.")
@click.option(
    "--warning-multiplier", default=WARNING_MULTIPLIER, show_default=True,
    help="Scale applied to each window's limit for the warning band.",
)
@click.option("--strict", is_flag=True, help="Fail on the first invalid window instead of skipping it.")
def evaluate(input_file: str, output_file: str | None, warning_multiplier: float, strict: bool):
    """Evaluate a survey file (.json or .csv) and produce a report JSON."""
    try:
        json_str = evaluate_survey_to_json(
            input_file,
            output_path=output_file,
            warning_multiplier=warning_multiplier,
            strict=strict,
        )
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    click.echo(json_str)


@main.command()
@click.option("--nominal", nargs=2, type=float, required=True, help="Nominal width and height (mm).")
@click.option("--widths", nargs=3, type=float, required=True, help="Top, middle, bottom widths (mm).")
@click.option("--heights", nargs=3, type=float, required=True, help="Left, middle, right heights (mm).")
@click.option("--limit", type=float, required=True, help="Allowed tolerance (mm).")
@click.option("--warning-multiplier", default=WARNING_MULTIPLIER, show_default=True)
@click.option("--code", default="W", show_default=True)
def classify(nominal, widths, heights, limit: float, warning_multiplier: float, code: str):
    """Derive and classify a single window."""
    if limit <= 0:
        raise click.BadParameter("limit must be positive", param_hint="--limit")
    window = WindowInput(
        code=code,
        nominal_width=nominal[0],
        nominal_height=nominal[1],
        limit=limit,
        width_top=widths[0],
        width_middle=widths[1],
        width_bottom=widths[2],
        height_left=heights[0],
        height_middle=heights[1],
        height_right=heights[2],
    )
    derived, status = evaluate_window(window, warning_multiplier=warning_multiplier)
    click.echo(json.dumps({"code": code, **derived.model_dump(), "status": status.value}, indent=2))


if __name__ == "__main__":
    main()
