from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BookingDraft:
    requester_id: str | None = None
    participant_count: str | None = None  # kept as typed; the backend stores a string
    purpose: str = ""
    borrow_equipment: bool = False
