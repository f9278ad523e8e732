"""Half-hour time slot indexing.

The ordered list returned by ``generate_slots`` is the canonical time axis of
an event grid: every "index of a time slot" elsewhere is an index into it.
"""

import re

from meetgrid.errors import InvalidTimeRangeError

SLOT_MINUTES = 30
MINUTES_PER_DAY = 24 * 60

_HHMM_RE = re.compile(r"^(\d{1,2}):([0-5]\d)$")


def parse_hhmm(value: str) -> int:
    """Return minutes since midnight for an ``HH:MM`` string (``24:00`` allowed)."""
    m = _HHMM_RE.match(value or "")
    if not m:
        raise InvalidTimeRangeError(detail=f"invalid time format: {value!r}", value=value)
    minutes = int(m.group(1)) * 60 + int(m.group(2))
    if minutes > MINUTES_PER_DAY:
        raise InvalidTimeRangeError(detail=f"time out of range: {value!r}", value=value)
    return minutes


def format_hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def generate_slots(start: str, end: str) -> list[str]:
    """Every 30-minute boundary in the half-open interval ``[start, end)``.

    Raises:
        InvalidTimeRangeError: If either value is malformed or ``start >= end``.
    """
    begin = parse_hhmm(start)
    stop = parse_hhmm(end)
    if begin >= stop:
        raise InvalidTimeRangeError(start=start, end=end)
    return [format_hhmm(t) for t in range(begin, stop, SLOT_MINUTES)]


def _twelve_hour(minutes: int) -> tuple[int, int, str]:
    hour, minute = divmod(minutes % MINUTES_PER_DAY, 60)
    suffix = "AM" if hour < 12 else "PM"
    return (hour % 12 or 12), minute, suffix


def format_slot_label(slot: str) -> str:
    """Row label for the grid's time axis, e.g. ``"13:30" -> "1 PM"``."""
    hour, _, suffix = _twelve_hour(parse_hhmm(slot))
    return f"{hour} {suffix}"


def format_time_label(slot: str) -> str:
    """Full 12-hour label, e.g. ``"09:30" -> "9:30 AM"``."""
    hour, minute, suffix = _twelve_hour(parse_hhmm(slot))
    return f"{hour}:{minute:02d} {suffix}"


def time_options() -> list[dict[str, str]]:
    """The 48 times of day an organizer can pick a range boundary from."""
    return [
        {"value": format_hhmm(t), "label": format_time_label(format_hhmm(t))}
        for t in range(0, MINUTES_PER_DAY, SLOT_MINUTES)
    ]
