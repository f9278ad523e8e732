"""Google Calendar export link for a scheduled slot."""

from datetime import date, datetime, timedelta
from urllib.parse import urlencode

from meetgrid.engine.grid import MODE_WEEKLY, WEEKDAY_NAMES
from meetgrid.engine.timeslots import parse_hhmm
from meetgrid.errors import BadRequestError

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"
_STAMP_FORMAT = "%Y%m%dT%H%M%S"


def _weekday_index(name: str) -> int:
    # WEEKDAY_NAMES starts on Sunday, date.weekday() on Monday
    try:
        return WEEKDAY_NAMES.index(name)
    except ValueError:
        raise BadRequestError(detail=f"unknown weekday: {name!r}", column=name) from None


def next_occurrence(weekday: str, today: date) -> date:
    """The first date on or after ``today`` falling on ``weekday``."""
    target = _weekday_index(weekday)
    current = (today.weekday() + 1) % 7
    return today + timedelta(days=(target - current) % 7)


def slot_start(mode: str, column: str, time_slot: str, today: date | None = None) -> datetime:
    if mode == MODE_WEEKLY:
        day = next_occurrence(column, today or date.today())
    else:
        try:
            day = date.fromisoformat(column)
        except ValueError:
            raise BadRequestError(detail=f"invalid date column: {column!r}", column=column) from None
    return datetime.combine(day, datetime.min.time()) + timedelta(minutes=parse_hhmm(time_slot))


def calendar_link(
    event_name: str,
    mode: str,
    column: str,
    time_slot: str,
    duration_minutes: int = 60,
    today: date | None = None,
) -> str:
    """Build a calendar ``TEMPLATE`` URL; weekly events recur on the column's weekday.

    Times are floating local timestamps, the event's single implicit zone.
    """
    start = slot_start(mode, column, time_slot, today)
    end = start + timedelta(minutes=duration_minutes)
    params = {
        "action": "TEMPLATE",
        "text": event_name,
        "dates": f"{start.strftime(_STAMP_FORMAT)}/{end.strftime(_STAMP_FORMAT)}",
    }
    if mode == MODE_WEEKLY:
        params["recur"] = f"RRULE:FREQ=WEEKLY;BYDAY={column[:2].upper()}"
    return f"{GOOGLE_CALENDAR_URL}?{urlencode(params)}"
