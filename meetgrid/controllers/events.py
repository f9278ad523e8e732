import re
import logging
from datetime import UTC, date, datetime
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator

from meetgrid import db
from meetgrid.calendar_link import calendar_link
from meetgrid.config import get_settings
from meetgrid.dependencies import OptionalBus, require_database
from meetgrid.engine import (
    GridMapper,
    SelectionMode,
    apply_selection,
    columns_for_event,
    filter_to_best,
    find_best,
    generate_slots,
    paint_value_for,
    slots_between,
    summarize,
    time_options,
    to_key,
)
from meetgrid.errors import BadRequestError, DatabaseError, NotFoundError
from meetgrid.models.events import (
    BestSlot,
    BestSlotsResponse,
    CalendarLinkResponse,
    Cell,
    Event,
    EventResponse,
    GridResponse,
    SelectionResponse,
    SubmittedAvailability,
)

logger = logging.getLogger("meetgrid.w2m")
router = APIRouter(dependencies=[Depends(require_database)])
public_router = APIRouter()

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_RE = re.compile(r"^(?:(?:[01]\d|2[0-3]):[0-5]\d|24:00)$")


def _max_name_length() -> int:
    return get_settings().scheduling.max_name_length


class TimeRangeIn(BaseModel):
    start: str = "09:00"
    end: str = "17:00"

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, v: str) -> str:
        if not TIME_RE.match(v):
            raise ValueError(f"invalid time format: {v}")
        return v


class CreateEventRequest(BaseModel):
    name: str
    mode: Literal["specific", "weekly"] = "specific"
    dates: List[str] = []
    days_of_week: List[int] = []
    time_range: TimeRangeIn = TimeRangeIn()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        limit = _max_name_length()
        if not v or len(v) > limit:
            raise ValueError(f"name must be 1-{limit} characters")
        return v

    @field_validator("dates")
    @classmethod
    def validate_dates(cls, v: List[str]) -> List[str]:
        for d in v:
            if not DATE_RE.match(d):
                raise ValueError(f"invalid date format: {d}")
            try:
                date.fromisoformat(d)
            except ValueError:
                raise ValueError(f"invalid date: {d}") from None
        if len(set(v)) != len(v):
            raise ValueError("dates must be unique")
        return v

    @field_validator("days_of_week")
    @classmethod
    def validate_days_of_week(cls, v: List[int]) -> List[int]:
        for d in v:
            if not 0 <= d <= 6:
                raise ValueError(f"invalid day of week: {d}")
        if len(set(v)) != len(v):
            raise ValueError("days_of_week must be unique")
        return v


class AvailabilityRequest(BaseModel):
    participant_name: str
    availability: Dict[str, bool] = {}

    @field_validator("participant_name")
    @classmethod
    def validate_participant_name(cls, v: str) -> str:
        v = v.strip()
        limit = _max_name_length()
        if not v or len(v) > limit:
            raise ValueError(f"participant_name must be 1-{limit} characters")
        return v


class SelectionRequest(BaseModel):
    availability: Dict[str, bool] = {}
    start_key: str
    end_key: Optional[str] = None
    mode: SelectionMode = SelectionMode.PAINT
    value: Optional[bool] = None


async def _load_event(event_id: str) -> tuple[Dict[str, Any], GridMapper]:
    event = await db.w2m_get_event(event_id)
    if not event:
        logger.warning("Event not found: %s", event_id)
        raise NotFoundError(detail="Event not found", event_id=event_id)
    time_range = event["time_range"]
    mapper = GridMapper(event["columns"], generate_slots(time_range["start"], time_range["end"]))
    return event, mapper


@public_router.get("/time-options")
async def get_time_options() -> List[Dict[str, str]]:
    return time_options()


@router.post("/events", status_code=201)
async def create_event(req: CreateEventRequest) -> Event:
    columns = columns_for_event(req.mode, req.dates, req.days_of_week)
    if not columns:
        field = "dates" if req.mode == "specific" else "days_of_week"
        raise BadRequestError(detail=f"{field} must not be empty", mode=req.mode)
    time_slots = generate_slots(req.time_range.start, req.time_range.end)
    logger.info(
        "POST /events name=%s mode=%s columns=%d time_slots=%d",
        req.name, req.mode, len(columns), len(time_slots),
    )
    try:
        event = await db.w2m_create_event(
            name=req.name,
            mode=req.mode,
            columns=columns,
            time_start=req.time_range.start,
            time_end=req.time_range.end,
            id_length=get_settings().scheduling.event_id_length,
        )
    except Exception as e:
        logger.exception("Failed to create event")
        raise DatabaseError(detail=str(e)) from e
    logger.info("Created event id=%s", event["id"])
    return Event(**event)


@router.get("/events/{event_id}")
async def get_event(event_id: str) -> EventResponse:
    logger.info("GET /events/%s", event_id)
    event, mapper = await _load_event(event_id)
    responses = await db.w2m_get_responses(event_id)
    return EventResponse(
        event=Event(**event),
        time_slots=mapper.time_slots,
        responses=responses,
        participants=len(responses),
    )


@router.get("/events/{event_id}/grid")
async def get_grid(event_id: str, best_only: bool = False) -> GridResponse:
    event, mapper = await _load_event(event_id)
    responses = await db.w2m_get_responses(event_id)
    visible = responses
    if best_only:
        visible = filter_to_best(responses, find_best(mapper.columns, mapper.time_slots, responses))
    cells = [
        Cell(
            column=c.column,
            time=c.time,
            key=c.key,
            count=c.count,
            available_users=c.available_users,
            bucket=int(c.bucket),
        )
        for c in summarize(visible, mapper.columns, mapper.time_slots)
    ]
    return GridResponse(
        event_id=event_id,
        columns=mapper.columns,
        time_slots=mapper.time_slots,
        total_participants=len(responses),
        best_only=best_only,
        cells=cells,
    )


@router.get("/events/{event_id}/best")
async def get_best(event_id: str) -> BestSlotsResponse:
    _, mapper = await _load_event(event_id)
    responses = await db.w2m_get_responses(event_id)
    best = find_best(mapper.columns, mapper.time_slots, responses)
    logger.info("Best slots for %s: %d at count=%d", event_id, len(best), best[0].count if best else 0)
    return BestSlotsResponse(
        event_id=event_id,
        total_participants=len(responses),
        best=[BestSlot(column=b.column, time=b.time, count=b.count) for b in best],
    )


@router.post("/events/{event_id}/availability")
async def submit_availability(
    event_id: str,
    req: AvailabilityRequest,
    bus: OptionalBus,
) -> SubmittedAvailability:
    logger.info(
        "POST /events/%s/availability participant=%s slots=%d",
        event_id, req.participant_name, sum(req.availability.values()),
    )
    _, mapper = await _load_event(event_id)
    mapper.validate(req.availability)
    try:
        result = await db.w2m_upsert_response(event_id, req.participant_name, req.availability)
    except Exception as e:
        logger.exception("Failed to upsert availability")
        raise DatabaseError(detail=str(e)) from e
    logger.info("Upserted availability for %s on event %s", req.participant_name, event_id)
    if bus is not None:
        try:
            await bus.publish_submission(
                {
                    "type": "availability_submitted",
                    "event_id": event_id,
                    "participant_name": req.participant_name,
                    "slots": sum(req.availability.values()),
                    "timestamp": datetime.now(UTC).isoformat(),
                }
            )
        except Exception as e:
            logger.warning("Failed to publish submission for event %s: %s", event_id, e)
    return SubmittedAvailability(**result)


@router.post("/events/{event_id}/selection")
async def apply_range_selection(event_id: str, req: SelectionRequest) -> SelectionResponse:
    """Apply a click or drag gesture to an availability map without storing it."""
    _, mapper = await _load_event(event_id)
    end_key = req.end_key or req.start_key
    if req.mode == SelectionMode.TOGGLE:
        if end_key != req.start_key:
            raise BadRequestError(detail="toggle applies to a single slot")
        mapper.to_coordinates(req.start_key)
        keys = [req.start_key]
        availability = apply_selection(req.availability, keys, SelectionMode.TOGGLE)
    else:
        keys = slots_between(mapper, req.start_key, end_key)
        value = req.value if req.value is not None else paint_value_for(req.availability, req.start_key)
        availability = apply_selection(req.availability, keys, SelectionMode.PAINT, value)
    return SelectionResponse(keys=keys, availability=availability)


@router.get("/events/{event_id}/calendar-link")
async def get_calendar_link(event_id: str, column: str, time: str) -> CalendarLinkResponse:
    event, mapper = await _load_event(event_id)
    mapper.to_coordinates(to_key(column, time))
    url = calendar_link(
        event["name"],
        event["mode"],
        column,
        time,
        duration_minutes=get_settings().scheduling.calendar_duration_minutes,
    )
    return CalendarLinkResponse(column=column, time=time, url=url)
