from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Awaitable, Callable

from facility_booking.application.exceptions import AuthRequired, BookingServiceError, ValidationFailure
from facility_booking.application.ports.booking_service import BookingServicePort
from facility_booking.application.use_cases.booking import BookingRequestBuilder
from facility_booking.application.utils.availability_merger import (
    Advisory,
    AvailabilityOutcome,
    advisory_message,
    merge_availability,
)
from facility_booking.application.utils.civil_clock import CivilClock
from facility_booking.application.utils.slot_generator import generate_slots
from facility_booking.domain.entities.booking_draft import BookingDraft
from facility_booking.domain.entities.resource import ResourceKind
from facility_booking.domain.entities.schedule_config import ScheduleConfig, get_schedule_config
from facility_booking.domain.entities.selection_state import Selection, SelectionStatus
from facility_booking.domain.entities.slot import Slot, UnavailableReason

OnBooked = Callable[[dict[str, Any]], Awaitable[None]]

_LOCKED_STATUSES = frozenset({SelectionStatus.IDLE, SelectionStatus.LOADING, SelectionStatus.SUBMITTING})
_COMMITTED_STATUSES = frozenset({SelectionStatus.SELECTED, SelectionStatus.FAILED})


@dataclass(frozen=True)
class SubmitResult:
    action: str  # "booked", "invalid", "rejected", "busy"
    message: str | None = None
    booking: dict[str, Any] | None = None
    problems: list[str] = field(default_factory=list)
    error: BookingServiceError | None = None


class SelectionController:
    """
    Per-form picker state: date, secondary resource, merged slots and the one committed slot.

    Only this object writes the selection. Fetches are keyed by a generation token;
    a result whose token no longer matches the current (date, resource) is dropped.
    """

    def __init__(
        self,
        kind: ResourceKind,
        service: BookingServicePort,
        clock: CivilClock,
        credential: str | None = None,
        date: str | None = None,
        resource_id: str | None = None,
        config: ScheduleConfig | None = None,
        builder: BookingRequestBuilder | None = None,
        on_booked: OnBooked | None = None,
    ) -> None:
        if resource_id and not kind.requires_resource:
            raise ValueError(f"{kind.value} bookings have no secondary resource")
        self._kind = kind
        self._service = service
        self._clock = clock
        self._credential = credential
        self._config = config or get_schedule_config(kind)
        self._builder = builder or BookingRequestBuilder()
        self._on_booked = on_booked
        self._logger = logging.getLogger(__name__)

        self._selection = Selection(date=clock.normalize_date(date), resource_id=resource_id or None)
        self._slots: list[Slot] = []
        self._status = SelectionStatus.IDLE
        self._advisory: Advisory | None = None
        self._error: str | None = None
        self._generation = 0
        self._reset_slots()

    @property
    def kind(self) -> ResourceKind:
        return self._kind

    @property
    def config(self) -> ScheduleConfig:
        return self._config

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def slots(self) -> list[Slot]:
        return list(self._slots)

    @property
    def status(self) -> SelectionStatus:
        return self._status

    @property
    def advisory(self) -> Advisory | None:
        return self._advisory

    @property
    def advisory_message(self) -> str | None:
        return advisory_message(self._advisory)

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def is_today(self) -> bool:
        return self._clock.is_today(self._selection.date)

    @property
    def is_closed_day(self) -> bool:
        return self._config.is_closed_on(self._clock.weekday_of(self._selection.date))

    @property
    def can_submit(self) -> bool:
        return self._status in _COMMITTED_STATUSES and self._selection.slot is not None

    def set_date(self, date: str | None) -> None:
        """Move to another civil date. The chosen slot is dropped before anything is fetched."""
        self._selection = replace(self._selection, date=self._clock.normalize_date(date))
        self._reset_slots()

    def set_resource(self, resource_id: str | None) -> None:
        if not self._kind.requires_resource:
            raise ValueError(f"{self._kind.value} bookings have no secondary resource")
        self._selection = replace(self._selection, resource_id=resource_id or None)
        self._reset_slots()

    def previous_day(self) -> None:
        self.set_date(self._clock.shift_date(self._selection.date, -1))

    def next_day(self) -> None:
        self.set_date(self._clock.shift_date(self._selection.date, 1))

    def go_to_today(self) -> None:
        self.set_date(self._clock.today())

    async def change_date(self, date: str | None) -> None:
        self.set_date(date)
        await self.load()

    async def change_resource(self, resource_id: str | None) -> None:
        self.set_resource(resource_id)
        await self.load()

    async def load(self) -> None:
        """Fetch availability for the current (date, resource) and merge it, unless superseded meanwhile."""
        if self._status is SelectionStatus.IDLE:
            return

        token = self._token()
        date, resource_id = self._selection.date, self._selection.resource_id
        outcome = await self._fetch_outcome(date, resource_id)

        if token != self._token():
            self._logger.debug(
                "Discarding stale availability",
                extra={"kind": self._kind.value, "date": date, "resource_id": resource_id},
            )
            return

        baseline = generate_slots(date, self._config, self._clock)
        self._slots = merge_availability(baseline, date, self._config, outcome, self._clock)
        self._advisory = outcome.advisory
        self._reconcile_selection()

    def find_slot(self, start_instant: datetime) -> Slot | None:
        return next((slot for slot in self._slots if slot.start_instant == start_instant), None)

    def is_past(self, slot: Slot) -> bool:
        return slot.start_instant < self._clock.now()

    def is_selectable(self, slot: Slot) -> bool:
        if self._status in _LOCKED_STATUSES:
            return False
        if not slot.available or self.is_closed_day or self.is_past(slot):
            return False
        current = self.find_slot(slot.start_instant)
        return current is not None and current.available

    def slot_state(self, slot: Slot) -> str:
        """Display state: past, closed, booked, selected or available."""
        if self.is_past(slot):
            return "past"
        if slot.reason is UnavailableReason.CLOSED or self.is_closed_day:
            return "closed"
        if not slot.available:
            return "booked"
        chosen = self._selection.slot
        if chosen is not None and chosen.start_instant == slot.start_instant:
            return "selected"
        return "available"

    def select_slot(self, slot: Slot) -> bool:
        """
        Commit `slot`, or clear it when it is already the chosen one.
        Returns False and changes nothing when the slot cannot be chosen.
        """
        chosen = self._selection.slot
        if (
            chosen is not None
            and chosen.start_instant == slot.start_instant
            and self._status in _COMMITTED_STATUSES
        ):
            self._selection = replace(self._selection, slot=None)
            self._status = SelectionStatus.READY
            self._error = None
            return True

        if not self.is_selectable(slot):
            self._logger.debug(
                "Slot selection rejected",
                extra={"kind": self._kind.value, "date": self._selection.date, "status": self._status.value},
            )
            return False

        self._selection = replace(self._selection, slot=self.find_slot(slot.start_instant))
        self._status = SelectionStatus.SELECTED
        self._error = None
        return True

    async def submit(self, draft: BookingDraft) -> SubmitResult:
        if self._status is SelectionStatus.SUBMITTING:
            return SubmitResult(action="busy", message="A booking request is already in progress")

        if not self.can_submit:
            message = "Please pick an available time slot"
            self._error = message
            return SubmitResult(action="invalid", message=message, problems=[message])

        try:
            request = self._builder.build(self._selection, draft, self._kind)
        except ValidationFailure as e:
            self._error = str(e)
            return SubmitResult(action="invalid", message=str(e), problems=e.problems)

        self._status = SelectionStatus.SUBMITTING
        self._error = None
        token = self._token()
        self._logger.info(
            "Submitting booking",
            extra={"kind": self._kind.value, "date": self._selection.date, "resource_id": self._selection.resource_id},
        )

        try:
            booking = await self._service.create_booking(request, self._credential)
        except BookingServiceError as e:
            if token == self._token():
                self._status = SelectionStatus.FAILED
                self._error = str(e)
            level = logging.WARNING if isinstance(e, AuthRequired) else logging.ERROR
            self._logger.log(
                level,
                "Booking submission failed",
                extra={"kind": self._kind.value, "date": self._selection.date, "error": str(e)},
            )
            return SubmitResult(action="rejected", message=str(e), error=e)

        if token == self._token():
            self._status = SelectionStatus.SUCCESS
            self._selection = replace(self._selection, slot=None)
        self._logger.info("Booking created", extra={"kind": self._kind.value, "date": self._selection.date})

        if self._on_booked is not None:
            await self._on_booked(booking)
        await self.load()
        return SubmitResult(action="booked", booking=booking)

    def _token(self) -> tuple[int, str, str | None]:
        return (self._generation, self._selection.date, self._selection.resource_id)

    def _reset_slots(self) -> None:
        self._generation += 1
        self._selection = replace(self._selection, slot=None)
        self._error = None
        self._advisory = None

        if self._kind.requires_resource and not self._selection.resource_id:
            self._slots = []
            self._status = SelectionStatus.IDLE
            return

        date = self._selection.date
        baseline = generate_slots(date, self._config, self._clock)
        self._slots = merge_availability(baseline, date, self._config, AvailabilityOutcome.ok(), self._clock)
        self._status = SelectionStatus.LOADING

    async def _fetch_outcome(self, date: str, resource_id: str | None) -> AvailabilityOutcome:
        extra = {"kind": self._kind.value, "date": date, "resource_id": resource_id}
        if not self._credential:
            self._logger.warning("No credential, using default time slots", extra=extra)
            return AvailabilityOutcome.unauthenticated()

        try:
            occupied = await self._service.fetch_occupied_windows(self._kind, date, resource_id, self._credential)
        except AuthRequired as e:
            self._logger.warning("Availability requires login, using default time slots", extra={**extra, "error": str(e)})
            return AvailabilityOutcome.unauthenticated(str(e))
        except BookingServiceError as e:
            self._logger.warning("Availability fetch failed, using default time slots", extra={**extra, "error": str(e)})
            return AvailabilityOutcome.failed(str(e))
        return AvailabilityOutcome.ok(occupied)

    def _reconcile_selection(self) -> None:
        chosen = self._selection.slot
        if chosen is not None:
            fresh = self.find_slot(chosen.start_instant)
            keep = fresh is not None and fresh.available and not self.is_past(fresh)
            self._selection = replace(self._selection, slot=fresh if keep else None)

        if self._status is SelectionStatus.LOADING:
            self._status = SelectionStatus.READY
        elif self._status in _COMMITTED_STATUSES and self._selection.slot is None:
            self._status = SelectionStatus.READY
