from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from facility_booking.application.exceptions import AuthRequired, BookingServiceError
from facility_booking.application.ports.booking_service import BookingServicePort
from facility_booking.application.use_cases.catalog import ResourceCatalogUseCase
from facility_booking.application.utils.availability_merger import (
    Advisory,
    AvailabilityOutcome,
    merge_availability,
)
from facility_booking.application.utils.civil_clock import CivilClock
from facility_booking.application.utils.slot_generator import generate_slots
from facility_booking.domain.entities.resource import Resource, ResourceKind
from facility_booking.domain.entities.schedule_config import get_schedule_config
from facility_booking.domain.entities.slot import OccupiedWindow, Slot


@dataclass(frozen=True)
class DayOverview:
    kind: ResourceKind
    date: str
    resource_id: str | None
    slots: list[Slot]
    bookings_count: int
    is_today: bool
    advisory: Advisory | None = None
    error: str | None = None


@dataclass(frozen=True)
class MachineStatus:
    resource: Resource
    occupied: bool
    current_booking: OccupiedWindow | None = None
    next_booking: OccupiedWindow | None = None


@dataclass(frozen=True)
class OccupancyBoard:
    kind: ResourceKind
    as_of: datetime
    machines: list[MachineStatus]
    advisory: Advisory | None = None
    error: str | None = None


class DayOverviewUseCase:
    """Read-only day calendar: the picker pipeline fed with the full booking list, no selection."""

    def __init__(self, service: BookingServicePort, clock: CivilClock) -> None:
        self._service = service
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def build(
        self,
        kind: ResourceKind,
        date: str | None,
        resource_id: str | None = None,
        credential: str | None = None,
    ) -> DayOverview:
        date = self._clock.normalize_date(date)
        config = get_schedule_config(kind)
        extra = {"kind": kind.value, "date": date, "resource_id": resource_id}

        windows: list[OccupiedWindow] = []
        error: str | None = None
        if not credential:
            outcome = AvailabilityOutcome.unauthenticated()
            error = "Authentication required. Please login again."
        else:
            try:
                windows = await self._service.fetch_bookings_by_date(kind, date, resource_id, credential)
                outcome = AvailabilityOutcome.ok(windows)
            except AuthRequired as e:
                self._logger.warning("Overview requires login", extra={**extra, "error": str(e)})
                outcome = AvailabilityOutcome.unauthenticated(str(e))
                error = str(e)
            except BookingServiceError as e:
                self._logger.warning("Overview fetch failed", extra={**extra, "error": str(e)})
                outcome = AvailabilityOutcome.failed(str(e))
                error = "Failed to load bookings"

        slots = merge_availability(
            generate_slots(date, config, self._clock),
            date,
            config,
            outcome,
            self._clock,
            include_occupant=True,
        )
        return DayOverview(
            kind=kind,
            date=date,
            resource_id=resource_id,
            slots=slots,
            bookings_count=len(windows),
            is_today=self._clock.is_today(date),
            advisory=outcome.advisory,
            error=error,
        )


class OccupancyBoardUseCase:
    """Which washing machines are in use right now, and who is next."""

    def __init__(self, service: BookingServicePort, catalog: ResourceCatalogUseCase, clock: CivilClock) -> None:
        self._service = service
        self._catalog = catalog
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def build(self, kind: ResourceKind, credential: str | None = None) -> OccupancyBoard:
        if not kind.is_washing_machine:
            raise ValueError(f"No occupancy board for {kind.value}")

        catalog = await self._catalog.list_resources(kind, credential)
        now = self._clock.now()

        bookings: list[OccupiedWindow] = []
        error: str | None = None
        advisory = catalog.advisory
        if credential:
            try:
                bookings = await self._service.fetch_bookings(kind, credential)
            except AuthRequired as e:
                error = str(e)
                advisory = Advisory.UNAUTHENTICATED
            except BookingServiceError as e:
                self._logger.warning("Occupancy fetch failed", extra={"kind": kind.value, "error": str(e)})
                error = "Failed to load bookings"
                advisory = Advisory.UNAVAILABLE

        machines = [self._status_of(machine, bookings, now) for machine in catalog.resources]
        return OccupancyBoard(kind=kind, as_of=now, machines=machines, advisory=advisory, error=error)

    def _status_of(self, machine: Resource, bookings: list[OccupiedWindow], now: datetime) -> MachineStatus:
        own = [booking for booking in bookings if booking.resource_id == machine.id]
        current = next((b for b in own if b.start_instant <= now < b.end_instant), None)
        upcoming = sorted((b for b in own if b.start_instant > now), key=lambda b: b.start_instant)
        return MachineStatus(
            resource=machine,
            occupied=current is not None,
            current_booking=current,
            next_booking=upcoming[0] if upcoming else None,
        )
