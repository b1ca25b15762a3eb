from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ResourceSchema(BaseModel):
    id: str
    display_name: str


class ResourcesResponseSchema(BaseModel):
    kind: str
    resources: list[ResourceSchema]
    advisory: str | None = None
    advisory_message: str | None = None


class SlotSchema(BaseModel):
    start: datetime
    end: datetime
    start_instant: str
    end_instant: str
    civil_hour: int
    label: str
    available: bool
    reason: str | None = None
    state: str
    selectable: bool
    occupant: str | None = None


class SlotsResponseSchema(BaseModel):
    kind: str
    date: str
    resource_id: str | None = None
    status: str
    is_today: bool
    closed: bool
    advisory: str | None = None
    advisory_message: str | None = None
    slots: list[SlotSchema]


class OverviewResponseSchema(BaseModel):
    kind: str
    date: str
    resource_id: str | None = None
    is_today: bool
    bookings_count: int
    advisory: str | None = None
    error: str | None = None
    slots: list[SlotSchema]


class BookingWindowSchema(BaseModel):
    start: datetime
    end: datetime
    owner: str


class MachineStatusSchema(BaseModel):
    id: str
    display_name: str
    occupied: bool
    current_booking: BookingWindowSchema | None = None
    next_booking: BookingWindowSchema | None = None


class OccupancyResponseSchema(BaseModel):
    kind: str
    as_of: datetime
    advisory: str | None = None
    error: str | None = None
    machines: list[MachineStatusSchema]


class BookingSubmitSchema(BaseModel):
    date: str
    slot_start: datetime
    resource_id: str | None = None
    requester_id: str | None = None
    participant_count: int | str | None = None
    purpose: str = ""
    borrow_equipment: bool = False


class BookingCreatedSchema(BaseModel):
    booking: dict[str, Any] = Field(default_factory=dict)
