"""Input checks applied before a window reaches the registry.

The engine itself computes whatever it is given; these rules are what an
input form enforces: every dimension finite, positive and at most 10 m, a
non-blank window code that is unique on its floor, and the two required
project fields.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from packages.core.types import WindowInput

# Largest accepted dimension (mm).
MAX_DIMENSION = 10_000.0

_DIMENSION_FIELDS = {
    "nominal_width": "Nominal width",
    "nominal_height": "Nominal height",
    "limit": "Limit",
    "width_top": "Top width",
    "width_middle": "Middle width",
    "width_bottom": "Bottom width",
    "height_left": "Left height",
    "height_middle": "Middle height",
    "height_right": "Right height",
}


def validate_dimension(value: float, field_name: str) -> str | None:
    """Return an error message, or None if *value* is acceptable."""
    if not math.isfinite(value):
        return f"{field_name} must be a finite number"
    if value <= 0:
        return f"{field_name} must be greater than zero"
    if value > MAX_DIMENSION:
        return f"{field_name} cannot exceed {MAX_DIMENSION / 1000:g} m"
    return None


def validate_window_code(code: str, existing_codes: Iterable[str]) -> str | None:
    if not code.strip():
        return "Window code is required"
    if code in set(existing_codes):
        return f"Window code {code!r} is already used on this floor"
    return None


def validate_window_input(
    window: WindowInput,
    existing_codes: Iterable[str] = (),
) -> list[str]:
    """Collect every error for *window*; an empty list means it is valid."""
    errors = []
    code_error = validate_window_code(window.code, existing_codes)
    if code_error:
        errors.append(code_error)
    for field, label in _DIMENSION_FIELDS.items():
        error = validate_dimension(getattr(window, field), label)
        if error:
            errors.append(error)
    return errors


def validate_project_info(building_name: str, engineer_name: str) -> list[str]:
    errors = []
    if not building_name.strip():
        errors.append("Building name is required")
    if not engineer_name.strip():
        errors.append("Engineer name is required")
    return errors
