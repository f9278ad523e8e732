"""Picking the one final slot to export, separate from availability editing."""

import logging
from collections.abc import Sequence
from enum import Enum

from meetgrid.engine.grid import GridMapper, split_key, to_key
from meetgrid.errors import SchedulingInactiveError

logger = logging.getLogger(__name__)


class PickerState(str, Enum):
    INACTIVE = "inactive"
    NO_SELECTION = "no_selection"
    SLOT_CHOSEN = "slot_chosen"


class SchedulingPicker:
    """Single-selection state machine laid over the grid.

    inactive -> no_selection -> slot_chosen, back to inactive on cancel or to
    no_selection on re-activation. The chosen slot is informational only.
    """

    def __init__(self, mapper: GridMapper) -> None:
        self.mapper = mapper
        self._active = False
        self._chosen: tuple[str, str] | None = None

    @property
    def active(self) -> bool:
        return self._active

    @property
    def state(self) -> PickerState:
        if not self._active:
            return PickerState.INACTIVE
        if self._chosen is None:
            return PickerState.NO_SELECTION
        return PickerState.SLOT_CHOSEN

    @property
    def chosen(self) -> tuple[str, str] | None:
        """The chosen ``(column, time)``, or None."""
        return self._chosen

    @property
    def chosen_key(self) -> str | None:
        return to_key(*self._chosen) if self._chosen else None

    def activate(self) -> None:
        self._active = True
        self._chosen = None

    def cancel(self) -> None:
        self._active = False
        self._chosen = None

    def toggle(self) -> PickerState:
        if self._active:
            self.cancel()
        else:
            self.activate()
        return self.state

    def choose(self, column: str, time_slot: str) -> tuple[str, str]:
        if not self._active:
            raise SchedulingInactiveError()
        key = to_key(column, time_slot)
        self.mapper.to_coordinates(key)
        self._chosen = (column, time_slot)
        logger.debug("scheduling picked %s", key)
        return self._chosen

    def offer(self, keys: Sequence[str]) -> bool:
        """Accept a gesture result only when it is exactly one cell.

        Returns True when the choice was applied.
        """
        if not self._active or len(keys) != 1:
            return False
        self.choose(*split_key(keys[0]))
        return True
