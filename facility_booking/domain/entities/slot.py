from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UnavailableReason(str, Enum):
    CLOSED = "closed"
    BOOKED = "booked"


@dataclass(frozen=True)
class Slot:
    start_instant: datetime  # identity within a day for one resource
    end_instant: datetime
    civil_hour: int
    display_label: str  # "HH:00 - HH:00" in civil time
    available: bool = True
    reason: UnavailableReason | None = None
    occupant: str | None = None  # owner summary, overview views only


@dataclass(frozen=True)
class OccupiedWindow:
    start_instant: datetime
    end_instant: datetime
    owner_summary: str = "Booked"
    resource_id: str | None = None
