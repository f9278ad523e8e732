"""Slot keys and grid coordinates.

A slot key is ``"<column>_<HH:MM>"``. This module is the only place keys are
built or parsed; column identifiers must not contain the separator.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence

from meetgrid.errors import KeyResolutionError

KEY_SEPARATOR = "_"

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

MODE_SPECIFIC = "specific"
MODE_WEEKLY = "weekly"


def to_key(column: str, time_slot: str) -> str:
    return f"{column}{KEY_SEPARATOR}{time_slot}"


def split_key(key: str) -> tuple[str, str]:
    """Split a slot key on the last separator into ``(column, time)``."""
    column, sep, time_slot = key.rpartition(KEY_SEPARATOR)
    if not sep:
        raise KeyResolutionError(detail=f"malformed slot key: {key!r}", key=key)
    return column, time_slot


def columns_for_event(
    mode: str,
    dates: Sequence[str] | None = None,
    days_of_week: Sequence[int] | None = None,
) -> list[str]:
    """Ordered grid columns: ISO dates in specific mode, weekday names in weekly mode."""
    if mode == MODE_WEEKLY:
        return [WEEKDAY_NAMES[d] for d in days_of_week or []]
    return list(dates or [])


class GridMapper:
    """Maps slot keys to integer ``(column_index, time_index)`` pairs and back."""

    def __init__(self, columns: Sequence[str], time_slots: Sequence[str]) -> None:
        self.columns = list(columns)
        self.time_slots = list(time_slots)
        self._column_index = {c: i for i, c in enumerate(self.columns)}
        self._time_index = {t: i for i, t in enumerate(self.time_slots)}

    def __repr__(self) -> str:
        return f"GridMapper(columns={len(self.columns)}, time_slots={len(self.time_slots)})"

    def to_key(self, column: str, time_slot: str) -> str:
        return to_key(column, time_slot)

    def to_coordinates(self, key: str) -> tuple[int, int]:
        """Resolve a slot key to ``(column_index, time_index)``.

        Raises:
            KeyResolutionError: If the column or time is not part of this grid.
        """
        column, time_slot = split_key(key)
        ci = self._column_index.get(column)
        ti = self._time_index.get(time_slot)
        if ci is None or ti is None:
            raise KeyResolutionError(
                detail=f"slot key not in grid: {key!r}",
                key=key,
            )
        return ci, ti

    def from_coordinates(self, column_index: int, time_index: int) -> str:
        if not (0 <= column_index < len(self.columns) and 0 <= time_index < len(self.time_slots)):
            raise KeyResolutionError(
                detail=f"coordinates outside grid: ({column_index}, {time_index})",
                column_index=column_index,
                time_index=time_index,
            )
        return to_key(self.columns[column_index], self.time_slots[time_index])

    def contains(self, key: str) -> bool:
        try:
            self.to_coordinates(key)
        except KeyResolutionError:
            return False
        return True

    def cells(self) -> Iterator[tuple[str, str]]:
        """Every ``(column, time)`` pair in scan order: columns outer, time inner."""
        for column in self.columns:
            for time_slot in self.time_slots:
                yield column, time_slot

    def keys(self) -> list[str]:
        return [to_key(c, t) for c, t in self.cells()]

    def validate(self, keys: Iterable[str] | Mapping[str, bool]) -> None:
        """Raise ``KeyResolutionError`` on the first key that is not in the grid."""
        for key in keys:
            self.to_coordinates(key)
