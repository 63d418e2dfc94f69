"""Derive geometric quantities from the raw three-point window measurements."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from packages.core.types import DerivedMeasurements, WindowInput


def mean(samples: Sequence[float]) -> float:
    """Arithmetic mean of the samples."""
    return float(np.mean(np.asarray(samples, dtype=np.float64)))


def value_range(samples: Sequence[float]) -> float:
    """Spread of the samples (max - min)."""
    return float(np.ptp(np.asarray(samples, dtype=np.float64)))


def diagonal(width: float, height: float) -> float:
    """Diagonal of a ``width`` x ``height`` rectangle (Pythagoras)."""
    return float(np.hypot(width, height))


def derive_measurements(window: WindowInput) -> DerivedMeasurements:
    """Compute means, ranges, diagonals and tolerances for one window.

    Zero or negative inputs are not rejected; the result is whatever the
    arithmetic yields.
    """
    widths = (window.width_top, window.width_middle, window.width_bottom)
    heights = (window.height_left, window.height_middle, window.height_right)

    width_mean = mean(widths)
    height_mean = mean(heights)
    width_range = value_range(widths)
    height_range = value_range(heights)

    theoretical = diagonal(window.nominal_width, window.nominal_height)
    actual = diagonal(width_mean, height_mean)
    diagonal_diff = abs(actual - theoretical)

    width_tolerance = abs(width_mean - window.nominal_width)
    height_tolerance = abs(height_mean - window.nominal_height)

    return DerivedMeasurements(
        width_mean=width_mean,
        height_mean=height_mean,
        width_range=width_range,
        height_range=height_range,
        theoretical_diagonal=theoretical,
        actual_diagonal=actual,
        diagonal_diff=diagonal_diff,
        width_tolerance=width_tolerance,
        height_tolerance=height_tolerance,
        combined_deviation=max(
            width_tolerance,
            height_tolerance,
            diagonal_diff,
            width_range / 2,
            height_range / 2,
        ),
    )
