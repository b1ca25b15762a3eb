from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from facility_booking.application.dto.booking_request import BookingRequest
from facility_booking.domain.entities.resource import ResourceKind
from facility_booking.domain.entities.slot import OccupiedWindow


class BookingServicePort(ABC):
    @abstractmethod
    async def fetch_occupied_windows(
        self,
        kind: ResourceKind,
        date: str,
        resource_id: str | None,
        credential: str | None,
    ) -> list[OccupiedWindow]:
        """Server-reported occupied windows for one civil date and resource."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_bookings(self, kind: ResourceKind, credential: str | None) -> list[OccupiedWindow]:
        """Recent bookings of a resource kind, newest page only."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_bookings_by_date(
        self,
        kind: ResourceKind,
        date: str,
        resource_id: str | None,
        credential: str | None,
    ) -> list[OccupiedWindow]:
        """Bookings starting on the civil date, with owner summaries."""
        raise NotImplementedError

    @abstractmethod
    async def create_booking(self, request: BookingRequest, credential: str | None) -> dict[str, Any]:
        """Create a booking. Returns the booking as reported by the server."""
        raise NotImplementedError
