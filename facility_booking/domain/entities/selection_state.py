from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from facility_booking.domain.entities.slot import Slot


class SelectionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    SELECTED = "selected"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class Selection:
    date: str  # civil YYYY-MM-DD
    resource_id: str | None = None
    slot: Slot | None = None
