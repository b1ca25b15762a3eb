from __future__ import annotations

import logging
from typing import Any

from facility_booking.application.dto.booking_request import BookingRequest
from facility_booking.application.exceptions import AuthRequired, ServerRejection
from facility_booking.application.ports.booking_service import BookingServicePort
from facility_booking.application.ports.resource_catalog import ResourceCatalogPort
from facility_booking.application.utils.civil_clock import CivilClock, parse_instant
from facility_booking.domain.entities.resource import Resource, ResourceKind
from facility_booking.domain.entities.slot import OccupiedWindow
from facility_booking.infrastructure.catalog.default_catalog import DEFAULT_CATALOG


class MockBookingService(BookingServicePort, ResourceCatalogPort):
    """In-memory backend for local development; rejects overlapping bookings like the real one."""

    def __init__(self, clock: CivilClock | None = None) -> None:
        self._clock = clock or CivilClock()
        self._bookings: dict[str, tuple[ResourceKind, OccupiedWindow]] = {}
        self._logger = logging.getLogger(__name__)

    def _require(self, credential: str | None) -> None:
        if not credential:
            raise AuthRequired("Authentication required. Please login again.")

    def _windows(self, kind: ResourceKind) -> list[OccupiedWindow]:
        return [window for booked_kind, window in self._bookings.values() if booked_kind is kind]

    async def fetch_occupied_windows(
        self,
        kind: ResourceKind,
        date: str,
        resource_id: str | None,
        credential: str | None,
    ) -> list[OccupiedWindow]:
        return await self.fetch_bookings_by_date(kind, date, resource_id, credential)

    async def fetch_bookings(self, kind: ResourceKind, credential: str | None) -> list[OccupiedWindow]:
        self._require(credential)
        return sorted(self._windows(kind), key=lambda window: window.start_instant)

    async def fetch_bookings_by_date(
        self,
        kind: ResourceKind,
        date: str,
        resource_id: str | None,
        credential: str | None,
    ) -> list[OccupiedWindow]:
        return [
            window
            for window in await self.fetch_bookings(kind, credential)
            if self._clock.civil_date_of(window.start_instant) == date
            and (resource_id is None or window.resource_id == resource_id)
        ]

    async def list_resources(self, kind: ResourceKind, credential: str | None) -> list[Resource]:
        self._require(credential)
        return list(DEFAULT_CATALOG.get(kind, []))

    async def create_booking(self, request: BookingRequest, credential: str | None) -> dict[str, Any]:
        self._require(credential)
        start = parse_instant(request.start)
        end = parse_instant(request.end)

        for window in self._windows(request.kind):
            if window.resource_id != request.resource_id:
                continue
            if not (end <= window.start_instant or start >= window.end_instant):
                raise ServerRejection("Time slot is already booked", status=409)

        booking_id = f"mock_booking_{len(self._bookings) + 1}"
        owner = getattr(request, "responsible_id", None) or getattr(request, "borrower_id", None) or "Booked"
        self._bookings[booking_id] = (
            request.kind,
            OccupiedWindow(start_instant=start, end_instant=end, owner_summary=owner, resource_id=request.resource_id),
        )
        self._logger.info(
            "Mock booking created",
            extra={"booking_id": booking_id, "kind": request.kind.value, "start": request.start},
        )
        return {"id": booking_id, **request.to_payload()}
