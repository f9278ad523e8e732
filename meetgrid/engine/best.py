from collections.abc import Sequence
from dataclasses import dataclass

from meetgrid.engine.aggregate import Responses, aggregate
from meetgrid.engine.grid import to_key


@dataclass(frozen=True)
class BestSlot:
    column: str
    time: str
    count: int

    @property
    def key(self) -> str:
        return to_key(self.column, self.time)


def find_best(
    columns: Sequence[str],
    time_slots: Sequence[str],
    responses: Responses,
) -> list[BestSlot]:
    """All cells tied at the highest availability count, in grid scan order.

    Empty when nobody is available anywhere.
    """
    counts = [
        (column, time_slot, aggregate(responses, column, time_slot).count)
        for column in columns
        for time_slot in time_slots
    ]
    top = max((count for _, _, count in counts), default=0)
    if top == 0:
        return []
    return [BestSlot(column, time_slot, count) for column, time_slot, count in counts if count == top]


def filter_to_best(responses: Responses, best: Sequence[BestSlot]) -> dict[str, dict[str, bool]]:
    """Each respondent's map restricted to the best slots' keys."""
    best_keys = {slot.key for slot in best}
    return {
        name: {key: value for key, value in (availability or {}).items() if key in best_keys}
        for name, availability in responses.items()
    }
