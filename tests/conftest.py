from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any

import pytest

from facility_booking.application.exceptions import BookingServiceError
from facility_booking.application.ports.booking_service import BookingServicePort
from facility_booking.application.utils.civil_clock import CivilClock
from facility_booking.domain.entities.resource import ResourceKind
from facility_booking.domain.entities.slot import OccupiedWindow

# 2025-01-15 (Wednesday) 14:30 at UTC+7
FIXED_NOW = datetime(2025, 1, 15, 7, 30, tzinfo=timezone.utc)
TODAY = "2025-01-15"
TOMORROW = "2025-01-16"  # Thursday
FRIDAY = "2025-01-17"


class StubBookingService(BookingServicePort):
    """
    Scriptable backend double.

    `windows` maps (kind, date, resource_id) to occupied windows. Set `error` to make every
    call raise it. Set `gates[(date, resource_id)]` to an asyncio.Event to hold a fetch open.
    """

    def __init__(self) -> None:
        self.windows: dict[tuple[ResourceKind, str, str | None], list[OccupiedWindow]] = {}
        self.bookings: dict[ResourceKind, list[OccupiedWindow]] = {}
        self.error: BookingServiceError | None = None
        self.create_error: BookingServiceError | None = None
        self.gates: dict[tuple[str, str | None], asyncio.Event] = {}
        self.fetch_calls: list[tuple[ResourceKind, str, str | None]] = []
        self.created: list[Any] = []

    async def fetch_occupied_windows(self, kind, date, resource_id, credential):
        self.fetch_calls.append((kind, date, resource_id))
        gate = self.gates.get((date, resource_id))
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.windows.get((kind, date, resource_id), []))

    async def fetch_bookings(self, kind, credential):
        if self.error is not None:
            raise self.error
        return list(self.bookings.get(kind, []))

    async def fetch_bookings_by_date(self, kind, date, resource_id, credential):
        if self.error is not None:
            raise self.error
        return list(self.windows.get((kind, date, resource_id), []))

    async def create_booking(self, request, credential):
        if self.create_error is not None:
            raise self.create_error
        self.created.append(request)
        return {"id": f"booking_{len(self.created)}", **request.to_payload()}


@pytest.fixture
def clock() -> CivilClock:
    return CivilClock(7, now=lambda: FIXED_NOW)


@pytest.fixture
def service() -> StubBookingService:
    return StubBookingService()


def window(clock: CivilClock, date: str, hour: int, hours: int = 1, owner: str = "Booked", resource_id=None):
    return OccupiedWindow(
        start_instant=clock.to_instant(date, hour),
        end_instant=clock.to_instant(date, hour + hours),
        owner_summary=owner,
        resource_id=resource_id,
    )
