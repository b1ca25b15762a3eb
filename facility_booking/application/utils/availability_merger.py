from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from facility_booking.application.utils.civil_clock import CivilClock
from facility_booking.domain.entities.schedule_config import ScheduleConfig
from facility_booking.domain.entities.slot import OccupiedWindow, Slot, UnavailableReason


class OutcomeStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"
    UNAUTHENTICATED = "unauthenticated"


class Advisory(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    UNAVAILABLE = "unavailable"


def advisory_message(advisory: Advisory | None, subject: str = "time slots") -> str | None:
    if advisory is Advisory.UNAUTHENTICATED:
        return f"You are not logged in. Showing default {subject}."
    if advisory is Advisory.UNAVAILABLE:
        return f"Live data could not be loaded. Showing default {subject}."
    return None


@dataclass(frozen=True)
class AvailabilityOutcome:
    status: OutcomeStatus
    occupied: tuple[OccupiedWindow, ...] = ()
    error: str | None = None

    @classmethod
    def ok(cls, occupied: list[OccupiedWindow] | tuple[OccupiedWindow, ...] = ()) -> "AvailabilityOutcome":
        return cls(status=OutcomeStatus.OK, occupied=tuple(occupied))

    @classmethod
    def failed(cls, error: str | None = None) -> "AvailabilityOutcome":
        return cls(status=OutcomeStatus.FAILED, error=error)

    @classmethod
    def unauthenticated(cls, error: str | None = None) -> "AvailabilityOutcome":
        return cls(status=OutcomeStatus.UNAUTHENTICATED, error=error)

    @property
    def advisory(self) -> Advisory | None:
        if self.status is OutcomeStatus.UNAUTHENTICATED:
            return Advisory.UNAUTHENTICATED
        if self.status is OutcomeStatus.FAILED:
            return Advisory.UNAVAILABLE
        return None


def merge_availability(
    slots: list[Slot],
    date_string: str,
    config: ScheduleConfig,
    outcome: AvailabilityOutcome,
    clock: CivilClock,
    include_occupant: bool = False,
) -> list[Slot]:
    """
    Mark generated slots available/unavailable.

    Priority: closed weekday, then occupied windows, then fail-open when the
    fetch failed or no credential was present. Output depends only on the
    arguments, so merging the same inputs twice gives the same slots.
    """
    if config.is_closed_on(clock.weekday_of(date_string)):
        return [
            replace(slot, available=False, reason=UnavailableReason.CLOSED, occupant=None)
            for slot in slots
        ]

    if outcome.status is not OutcomeStatus.OK:
        return [replace(slot, available=True, reason=None, occupant=None) for slot in slots]

    occupied_by_hour: dict[int, OccupiedWindow] = {}
    for window in outcome.occupied:
        if clock.civil_date_of(window.start_instant) != date_string:
            continue
        occupied_by_hour.setdefault(clock.civil_hour_of(window.start_instant), window)

    merged: list[Slot] = []
    for slot in slots:
        window = occupied_by_hour.get(slot.civil_hour)
        if window is None:
            merged.append(replace(slot, available=True, reason=None, occupant=None))
            continue
        merged.append(
            replace(
                slot,
                available=False,
                reason=UnavailableReason.BOOKED,
                occupant=window.owner_summary if include_occupant else None,
            )
        )
    return merged
