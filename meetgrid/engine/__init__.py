"""Availability aggregation and selection engine.

Pure functions and small session objects over an event grid; no I/O.
"""

from meetgrid.engine.aggregate import (
    CellStats,
    CellSummary,
    HeatmapBucket,
    aggregate,
    heatmap_bucket,
    summarize,
    total_participants,
)
from meetgrid.engine.best import BestSlot, filter_to_best, find_best
from meetgrid.engine.grid import (
    MODE_SPECIFIC,
    MODE_WEEKLY,
    WEEKDAY_NAMES,
    GridMapper,
    columns_for_event,
    split_key,
    to_key,
)
from meetgrid.engine.scheduling import PickerState, SchedulingPicker
from meetgrid.engine.selection import (
    DragSession,
    SelectionMode,
    apply_selection,
    paint_value_for,
    slots_between,
)
from meetgrid.engine.session import RespondentSession, clean_participant_name
from meetgrid.engine.timeslots import SLOT_MINUTES, generate_slots, time_options

__all__ = [
    "BestSlot",
    "CellStats",
    "CellSummary",
    "DragSession",
    "GridMapper",
    "HeatmapBucket",
    "MODE_SPECIFIC",
    "MODE_WEEKLY",
    "PickerState",
    "RespondentSession",
    "SLOT_MINUTES",
    "SchedulingPicker",
    "SelectionMode",
    "WEEKDAY_NAMES",
    "aggregate",
    "apply_selection",
    "clean_participant_name",
    "columns_for_event",
    "filter_to_best",
    "find_best",
    "generate_slots",
    "heatmap_bucket",
    "paint_value_for",
    "slots_between",
    "split_key",
    "summarize",
    "time_options",
    "to_key",
    "total_participants",
]
