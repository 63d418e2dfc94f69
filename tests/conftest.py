"""Shared test fixtures – window measurements around a 1200 × 1500 mm opening."""

from __future__ import annotations

import pytest

from packages.core.types import WindowInput
from packages.tolerance.registry import FloorRegistry

from helpers import make_window


@pytest.fixture()
def passing_window() -> WindowInput:
    return make_window("W-PASS")


@pytest.fixture()
def warning_window() -> WindowInput:
    # mean width 1204 → tolerance 4 mm, inside 1.5 × 3
    return make_window("W-WARN", widths=(1204.0, 1204.0, 1204.0), heights=(1500.0, 1500.0, 1500.0))


@pytest.fixture()
def failing_window() -> WindowInput:
    # width range 20 mm > 2 × 1.5 × 3
    return make_window("W-FAIL", widths=(1190.0, 1210.0, 1195.0))


@pytest.fixture()
def populated_registry(
    passing_window: WindowInput,
    warning_window: WindowInput,
    failing_window: WindowInput,
) -> FloorRegistry:
    """Two floors: floor 1 holds pass + warning, floor 2 holds pass + fail."""
    registry = FloorRegistry()
    first = registry.floors[0]
    registry.add_window(first.id, passing_window)
    registry.add_window(first.id, warning_window)

    second = registry.add_floor()
    registry.add_window(second.id, make_window("W-PASS-2"))
    registry.add_window(second.id, failing_window)
    return registry
