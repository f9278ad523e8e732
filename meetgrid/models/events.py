from typing import Literal

from pydantic import BaseModel


class TimeRange(BaseModel):
    start: str
    end: str


class Event(BaseModel):
    id: str
    name: str
    mode: Literal["specific", "weekly"]
    columns: list[str]
    time_range: TimeRange
    created_at: str


class EventResponse(BaseModel):
    event: Event
    time_slots: list[str]
    responses: dict[str, dict[str, bool]]
    participants: int


class Cell(BaseModel):
    column: str
    time: str
    key: str
    count: int
    available_users: list[str]
    bucket: int


class GridResponse(BaseModel):
    event_id: str
    columns: list[str]
    time_slots: list[str]
    total_participants: int
    best_only: bool = False
    cells: list[Cell]


class BestSlot(BaseModel):
    column: str
    time: str
    count: int


class BestSlotsResponse(BaseModel):
    event_id: str
    total_participants: int
    best: list[BestSlot]


class SubmittedAvailability(BaseModel):
    event_id: str
    participant_name: str
    availability: dict[str, bool]
    updated_at: str


class SelectionResponse(BaseModel):
    keys: list[str]
    availability: dict[str, bool]


class CalendarLinkResponse(BaseModel):
    column: str
    time: str
    url: str
