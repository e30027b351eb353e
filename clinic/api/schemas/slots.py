from datetime import date
from pydantic import BaseModel


class BookableDateInfo(BaseModel):
    value: date
    label: str  # "Monday, Mar 10"
    weekday: str


class SlotInfo(BaseModel):
    time_slot: str
    available: bool


class AvailableSlotsResponse(BaseModel):
    date: str  # YYYY-MM-DD
    weekday: str
    slots: list[SlotInfo]


class TemplateSlotInfo(BaseModel):
    id: str
    day: str
    time: str
