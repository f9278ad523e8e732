"""Rectangle selection over the grid's index space.

A drag from one cell to another covers the inclusive rectangle of column and
time indices between them, whatever the drag direction.
"""

import logging
from collections.abc import Iterable, Mapping
from enum import Enum

from meetgrid.engine.grid import GridMapper

logger = logging.getLogger(__name__)


class SelectionMode(str, Enum):
    TOGGLE = "toggle"
    PAINT = "paint"


def slots_between(mapper: GridMapper, start_key: str, end_key: str) -> list[str]:
    """Every key in the rectangle spanned by two cells, columns outer, time inner."""
    c1, t1 = mapper.to_coordinates(start_key)
    c2, t2 = mapper.to_coordinates(end_key)
    return [
        mapper.from_coordinates(ci, ti)
        for ci in range(min(c1, c2), max(c1, c2) + 1)
        for ti in range(min(t1, t2), max(t1, t2) + 1)
    ]


def paint_value_for(availability: Mapping[str, bool], start_key: str) -> bool:
    """A drag selects when it starts on an unselected cell and deselects otherwise."""
    return not availability.get(start_key, False)


def apply_selection(
    availability: Mapping[str, bool],
    keys: Iterable[str],
    mode: SelectionMode,
    value: bool | None = None,
) -> dict[str, bool]:
    """Return a new availability map with the selection applied.

    ``TOGGLE`` flips exactly one key. ``PAINT`` writes ``value`` to every key.
    The input map is never modified.
    """
    keys = list(keys)
    updated = dict(availability)
    if mode == SelectionMode.TOGGLE:
        if len(keys) != 1:
            raise ValueError(f"toggle applies to exactly one slot, got {len(keys)}")
        updated[keys[0]] = not updated.get(keys[0], False)
        return updated
    if value is None:
        raise ValueError("paint selection requires a value")
    for key in keys:
        updated[key] = value
    return updated


class DragSession:
    """One in-progress drag gesture of one respondent.

    The paint value is fixed at ``begin``. Each ``move`` rebuilds the map from
    the pre-gesture baseline and the rectangle between the start cell and the
    current cell, so shrinking the drag restores cells it no longer covers.
    There is no rollback: ``cancel`` keeps the last written map.
    """

    def __init__(self, mapper: GridMapper) -> None:
        self.mapper = mapper
        self._baseline: dict[str, bool] | None = None
        self._start_key: str | None = None
        self._current_key: str | None = None
        self.paint_value: bool | None = None
        self.availability: dict[str, bool] | None = None

    @property
    def active(self) -> bool:
        return self._start_key is not None

    @property
    def start_key(self) -> str | None:
        return self._start_key

    @property
    def moved(self) -> bool:
        return self.active and self._current_key != self._start_key

    def begin(self, availability: Mapping[str, bool], start_key: str) -> dict[str, bool]:
        self.mapper.to_coordinates(start_key)
        self._baseline = dict(availability)
        self._start_key = start_key
        self.paint_value = paint_value_for(availability, start_key)
        return self.move(start_key)

    def rectangle(self) -> list[str]:
        if not self.active:
            return []
        return slots_between(self.mapper, self._start_key, self._current_key)

    def move(self, current_key: str) -> dict[str, bool]:
        if not self.active:
            raise RuntimeError("drag has not begun")
        keys = slots_between(self.mapper, self._start_key, current_key)
        self._current_key = current_key
        self.availability = apply_selection(self._baseline, keys, SelectionMode.PAINT, self.paint_value)
        return self.availability

    def end(self) -> dict[str, bool] | None:
        result = self.availability
        if self.active:
            logger.debug(
                "drag end start=%s current=%s value=%s",
                self._start_key,
                self._current_key,
                self.paint_value,
            )
        self._reset()
        return result

    def cancel(self) -> dict[str, bool] | None:
        return self.end()

    def _reset(self) -> None:
        self._baseline = None
        self._start_key = None
        self._current_key = None
        self.paint_value = None
        self.availability = None
