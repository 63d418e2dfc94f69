"""Three-state conformance classification of a window against its limit."""

from __future__ import annotations

from packages.core.types import DerivedMeasurements, WindowInput, WindowStatus
from packages.tolerance.derive import derive_measurements

# Scale applied to a window's limit to get the warning/fail boundary.
WARNING_MULTIPLIER = 1.5


def within_limit(derived: DerivedMeasurements, limit: float) -> bool:
    """Return True if every dimension conforms to *limit*.

    Tolerances and the diagonal difference must not exceed *limit*; each
    sample range must not exceed ``2 * limit``.  Equality conforms.
    """
    return (
        derived.width_tolerance <= limit
        and derived.height_tolerance <= limit
        and derived.diagonal_diff <= limit
        and derived.width_range <= 2 * limit
        and derived.height_range <= 2 * limit
    )


def classify(
    derived: DerivedMeasurements,
    limit: float,
    *,
    warning_multiplier: float = WARNING_MULTIPLIER,
) -> WindowStatus:
    """Map derived values to ``pass`` / ``warning`` / ``fail``.

    * All five checks hold at *limit* → pass.
    * All five hold at ``warning_multiplier * limit`` → warning.
    * Otherwise → fail.

    A single violated dimension downgrades the whole window.  *limit* is
    assumed positive; callers reject non-positive limits.
    """
    if within_limit(derived, limit):
        return WindowStatus.PASS
    if within_limit(derived, warning_multiplier * limit):
        return WindowStatus.WARNING
    return WindowStatus.FAIL


def evaluate_window(
    window: WindowInput,
    *,
    warning_multiplier: float = WARNING_MULTIPLIER,
) -> tuple[DerivedMeasurements, WindowStatus]:
    """Derive and classify a single window in one call."""
    derived = derive_measurements(window)
    status = classify(derived, window.limit, warning_multiplier=warning_multiplier)
    return derived, status
