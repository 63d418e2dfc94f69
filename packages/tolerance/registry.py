"""In-memory registry of floors and their windows.

Every window stored here has been derived and classified; any change to a
window's inputs goes through :meth:`FloorRegistry.update_window`, which
re-derives the whole record.  Floor numbers are kept contiguous (``1..N``)
after every structural change and at least one floor always exists.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Iterator

from packages.core.types import (
    FloorRecord,
    WindowInput,
    WindowMeasurement,
    WindowPatch,
)
from packages.tolerance.classify import WARNING_MULTIPLIER, evaluate_window

logger = logging.getLogger(__name__)


class FloorNotFoundError(LookupError):
    """Raised when a window is added to a floor id the registry does not hold."""


class InvalidLimitError(ValueError):
    """Raised when a window's limit is not strictly positive."""


def _new_id() -> str:
    return str(uuid.uuid4())


def _new_floor(name: str | None = None) -> FloorRecord:
    return FloorRecord(id=_new_id(), floor_number=1, name=name)


def build_window(
    floor_id: str,
    window: WindowInput,
    *,
    window_id: str | None = None,
    warning_multiplier: float = WARNING_MULTIPLIER,
) -> WindowMeasurement:
    """Derive, classify and wrap *window* into a stored record."""
    if not window.limit > 0:
        raise InvalidLimitError(f"limit must be positive, got {window.limit!r}")
    derived, status = evaluate_window(window, warning_multiplier=warning_multiplier)
    return WindowMeasurement(
        id=window_id or _new_id(),
        floor_id=floor_id,
        **window.model_dump(include=set(WindowInput.model_fields)),
        **derived.model_dump(),
        status=status,
    )


class FloorRegistry:
    """Owns the floors of one project and keeps their invariants."""

    def __init__(
        self,
        floors: Iterable[FloorRecord] | None = None,
        *,
        warning_multiplier: float = WARNING_MULTIPLIER,
    ) -> None:
        self.warning_multiplier = warning_multiplier
        self._floors: list[FloorRecord] = [self._adopt(floor) for floor in floors or []]
        if not self._floors:
            self._floors.append(_new_floor())
        self._renumber()
        self.current_floor_index = 0

    def _adopt(self, floor: FloorRecord) -> FloorRecord:
        """Copy a seeded floor, re-evaluating its windows with this registry's multiplier."""
        copy = FloorRecord(id=floor.id, floor_number=1, name=floor.name)
        copy.windows = [
            build_window(
                copy.id,
                window.to_input(),
                window_id=window.id,
                warning_multiplier=self.warning_multiplier,
            )
            for window in floor.windows
        ]
        return copy

    # ── views ────────────────────────────────────────────────────────
    @property
    def floors(self) -> list[FloorRecord]:
        return self._floors

    @property
    def current_floor(self) -> FloorRecord:
        return self._floors[self.current_floor_index]

    def get_floor(self, floor_id: str) -> FloorRecord | None:
        return next((f for f in self._floors if f.id == floor_id), None)

    def get_window(self, floor_id: str, window_id: str) -> WindowMeasurement | None:
        floor = self.get_floor(floor_id)
        if floor is None:
            return None
        return next((w for w in floor.windows if w.id == window_id), None)

    def iter_windows(self) -> Iterator[WindowMeasurement]:
        for floor in self._floors:
            yield from floor.windows

    def select_floor(self, index: int) -> int:
        """Select the floor at *index*, clamped to the valid range."""
        self.current_floor_index = min(max(index, 0), len(self._floors) - 1)
        return self.current_floor_index

    # ── floors ───────────────────────────────────────────────────────
    def _renumber(self) -> None:
        for i, floor in enumerate(self._floors):
            floor.floor_number = i + 1

    def add_floor(self, name: str | None = None) -> FloorRecord:
        """Append a new empty floor and select it."""
        floor = _new_floor(name)
        self._floors.append(floor)
        self._renumber()
        self.current_floor_index = len(self._floors) - 1
        logger.info("Added floor %d (%s)", floor.floor_number, floor.id)
        return floor

    def remove_floor(self, floor_id: str) -> bool:
        """Remove a floor; removing the last one leaves a fresh empty floor.

        Returns False (and changes nothing) if *floor_id* is unknown.
        """
        floor = self.get_floor(floor_id)
        if floor is None:
            logger.info("remove_floor: unknown floor %s, ignoring", floor_id)
            return False

        self._floors.remove(floor)
        if not self._floors:
            self._floors.append(_new_floor())
        self._renumber()
        if self.current_floor_index >= len(self._floors):
            self.current_floor_index = len(self._floors) - 1
        logger.info(
            "Removed floor %s (%d windows), %d floor(s) remaining",
            floor_id, len(floor.windows), len(self._floors),
        )
        return True

    def clear_all(self) -> None:
        """Reset to a single empty floor."""
        self._floors = [_new_floor()]
        self.current_floor_index = 0
        logger.info("Cleared all floors")

    # ── windows ──────────────────────────────────────────────────────
    def add_window(self, floor_id: str, window: WindowInput) -> WindowMeasurement:
        """Evaluate *window* and append it to the floor.

        Raises :class:`FloorNotFoundError` for an unknown floor and
        :class:`InvalidLimitError` for a non-positive limit; the registry is
        left untouched in both cases.
        """
        floor = self.get_floor(floor_id)
        if floor is None:
            raise FloorNotFoundError(f"No floor with id {floor_id!r}")

        record = build_window(floor_id, window, warning_multiplier=self.warning_multiplier)
        floor.windows.append(record)
        logger.debug(
            "Window %s on floor %d → %s (Δdiag=%.2f mm)",
            record.code, floor.floor_number, record.status.value, record.diagonal_diff,
        )
        return record

    def update_window(
        self,
        floor_id: str,
        window_id: str,
        patch: WindowPatch,
    ) -> WindowMeasurement | None:
        """Merge *patch* over the window's inputs and re-evaluate it.

        Fields not set on *patch* keep their previous values.  The record
        keeps its id and position.  Returns None if the floor or window is
        unknown.
        """
        floor = self.get_floor(floor_id)
        if floor is None:
            logger.info("update_window: unknown floor %s, ignoring", floor_id)
            return None
        for i, current in enumerate(floor.windows):
            if current.id == window_id:
                break
        else:
            logger.info("update_window: unknown window %s, ignoring", window_id)
            return None

        merged = patch.apply(current)
        record = build_window(
            floor_id,
            merged,
            window_id=window_id,
            warning_multiplier=self.warning_multiplier,
        )
        floor.windows[i] = record
        logger.debug("Window %s re-evaluated → %s", record.code, record.status.value)
        return record

    def remove_window(self, floor_id: str, window_id: str) -> bool:
        """Remove a window; returns False if it was not found."""
        floor = self.get_floor(floor_id)
        if floor is None:
            return False
        before = len(floor.windows)
        floor.windows = [w for w in floor.windows if w.id != window_id]
        return len(floor.windows) < before
