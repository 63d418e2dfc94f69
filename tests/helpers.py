"""Test helpers shared across modules."""

from __future__ import annotations

from packages.core.types import WindowInput


def make_window(
    code: str = "W1",
    *,
    nominal: tuple[float, float] = (1200.0, 1500.0),
    limit: float = 3.0,
    widths: tuple[float, float, float] = (1198.0, 1201.0, 1199.0),
    heights: tuple[float, float, float] = (1499.0, 1502.0, 1500.0),
) -> WindowInput:
    """Build a :class:`WindowInput`; defaults describe a conforming window."""
    return WindowInput(
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
