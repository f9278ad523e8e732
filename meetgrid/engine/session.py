"""One respondent's interaction session with an event grid.

Holds the short-lived state the presentation layer would otherwise keep in
globals: whether a name was entered, whether the map was submitted and is
being edited again, the drag in progress, and the scheduling picker. Gestures
go to the scheduling picker while it is active and never touch availability.
"""

import logging
from collections.abc import Mapping

from meetgrid.engine.aggregate import Responses
from meetgrid.engine.best import filter_to_best, find_best
from meetgrid.engine.grid import GridMapper
from meetgrid.engine.scheduling import SchedulingPicker
from meetgrid.engine.selection import DragSession, SelectionMode, apply_selection, slots_between
from meetgrid.errors import InvalidParticipantError

logger = logging.getLogger(__name__)

DEFAULT_MAX_NAME_LENGTH = 250


def clean_participant_name(name: str | None, max_length: int = DEFAULT_MAX_NAME_LENGTH) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidParticipantError()
    if len(cleaned) > max_length:
        raise InvalidParticipantError(
            detail=f"Name cannot exceed {max_length} characters",
            max_length=max_length,
        )
    return cleaned


class RespondentSession:
    """Routes one respondent's gestures to their availability or the picker.

    A plain press on a cell arrives either as ``click`` or as the pointer
    sequence ``pointer_down``/``pointer_up``, never both: the pointer pair on
    one cell already flips it. While scheduling is active a pointer drag is
    offered to the picker on release, so only a single-cell press chooses.
    """

    def __init__(
        self,
        mapper: GridMapper,
        availability: Mapping[str, bool] | None = None,
        max_name_length: int = DEFAULT_MAX_NAME_LENGTH,
    ) -> None:
        self.mapper = mapper
        self.max_name_length = max_name_length
        self.name: str | None = None
        self.availability: dict[str, bool] = dict(availability or {})
        self.has_submitted = False
        self.editing = False
        self.drag = DragSession(mapper)
        self.picker = SchedulingPicker(mapper)
        # [start, current] of a pointer gesture aimed at the picker
        self._pick: list[str] | None = None

    @property
    def has_entered_name(self) -> bool:
        return self.name is not None

    @property
    def read_only(self) -> bool:
        return not self.has_entered_name or (self.has_submitted and not self.editing)

    def enter_name(self, name: str) -> str:
        self.name = clean_participant_name(name, self.max_name_length)
        return self.name

    # Gestures

    def pointer_down(self, key: str) -> None:
        if self.picker.active:
            self.mapper.to_coordinates(key)
            self._pick = [key, key]
            return
        if self.read_only:
            return
        self.availability = self.drag.begin(self.availability, key)

    def pointer_enter(self, key: str) -> None:
        if self.picker.active:
            if self._pick is not None:
                self.mapper.to_coordinates(key)
                self._pick[1] = key
            return
        if not self.drag.active:
            return
        self.availability = self.drag.move(key)

    def pointer_up(self) -> None:
        if self._pick is not None:
            start, current = self._pick
            self._pick = None
            if self.picker.active:
                self.picker.offer(slots_between(self.mapper, start, current))
            return
        if self.drag.active:
            self.drag.end()

    def pointer_leave(self) -> None:
        """The pointer left the grid: the drag stops where it was."""
        self._pick = None
        if self.drag.active:
            self.drag.cancel()

    def click(self, key: str) -> None:
        if self.picker.active:
            self.picker.offer([key])
            return
        if self.read_only:
            return
        self.availability = apply_selection(self.availability, [key], SelectionMode.TOGGLE)

    def select_range(self, start_key: str, end_key: str) -> None:
        """A completed range gesture delivered in one piece."""
        keys = slots_between(self.mapper, start_key, end_key)
        if self.picker.active:
            self.picker.offer(keys)
            return
        if self.read_only:
            return
        value = not self.availability.get(start_key, False)
        self.availability = apply_selection(self.availability, keys, SelectionMode.PAINT, value)

    # Lifecycle

    def submit(self) -> dict[str, bool]:
        if self.name is None:
            raise InvalidParticipantError()
        if self.drag.active:
            self.drag.end()
        self.mapper.validate(self.availability)
        self.has_submitted = True
        self.editing = False
        logger.info("session submit participant=%s slots=%d", self.name, sum(self.availability.values()))
        return dict(self.availability)

    def edit(self) -> None:
        if self.has_submitted:
            self.editing = True

    def start_scheduling(self) -> None:
        self._pick = None
        if self.drag.active:
            self.drag.cancel()
        self.picker.activate()

    def cancel_scheduling(self) -> None:
        self._pick = None
        self.picker.cancel()

    def visible_responses(self, responses: Responses, best_only: bool = False) -> dict:
        """The responses snapshot the grid should render right now.

        Read-only sessions see every stored response; a respondent who is
        editing sees only their own in-progress map.
        """
        if self.read_only:
            visible = {name: dict(a or {}) for name, a in responses.items()}
        else:
            visible = {self.name: dict(self.availability)}
        if best_only:
            best = find_best(self.mapper.columns, self.mapper.time_slots, visible)
            return filter_to_best(visible, best)
        return visible
