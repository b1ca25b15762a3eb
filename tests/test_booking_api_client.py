"""
Tests for the HTTP adapter against a scripted transport.
"""

from __future__ import annotations

import json

import httpx
import pytest
from conftest import FRIDAY

from facility_booking.application.dto.booking_request import KitchenBookingRequest
from facility_booking.application.exceptions import AuthRequired, NetworkFailure, ServerRejection
from facility_booking.domain.entities.resource import ResourceKind
from facility_booking.infrastructure.booking_api.http_client import BookingApiClient
from facility_booking.infrastructure.store.memory_store import MemorySessionStore


def _client(handler, clock, store=None) -> BookingApiClient:
    return BookingApiClient(
        base_url="http://backend.test",
        prefix="/api/v1",
        page_limit=100,
        clock=clock,
        session_store=store,
        transport=httpx.MockTransport(handler),
    )


def _kitchen_request() -> KitchenBookingRequest:
    return KitchenBookingRequest(
        facility_id="2",
        borrower_id="user-1",
        start="2025-01-17T03:00:00.000Z",
        end="2025-01-17T04:00:00.000Z",
    )


@pytest.mark.asyncio
async def test_room_availability_keeps_unavailable_entries(clock):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": [
                    {"waktuMulai": "2025-01-17T03:00:00.000Z", "waktuBerakhir": "2025-01-17T04:00:00.000Z", "available": False},
                    {"waktuMulai": "2025-01-17T04:00:00.000Z", "waktuBerakhir": "2025-01-17T05:00:00.000Z", "available": True},
                ],
            },
        )

    windows = await _client(handler, clock).fetch_occupied_windows(ResourceKind.COMMUNAL, FRIDAY, "2", "token")

    assert seen[0].url.path == "/api/v1/communal/available-slots/2025-01-17/2"
    assert seen[0].headers["Authorization"] == "Bearer token"
    assert len(windows) == 1
    assert clock.civil_hour_of(windows[0].start_instant) == 10


@pytest.mark.asyncio
async def test_kitchen_availability_passes_facility(clock):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": True, "data": []})

    await _client(handler, clock).fetch_occupied_windows(ResourceKind.KITCHEN, FRIDAY, "4", "token")

    assert seen[0].url.path == "/api/v1/dapur/time-slots"
    assert seen[0].url.params["date"] == FRIDAY
    assert seen[0].url.params["facilityId"] == "4"


@pytest.mark.asyncio
async def test_bookings_by_date_filters_day_and_resource(clock):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["limit"] == "100"
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": [
                    {"waktuMulai": "2025-01-17T03:00:00.000Z", "waktuBerakhir": "2025-01-17T05:00:00.000Z", "idArea": "1",
                     "penanggungJawab": {"namaLengkap": "Budi Santoso"}},
                    {"waktuMulai": "2025-01-17T05:00:00.000Z", "waktuBerakhir": "2025-01-17T07:00:00.000Z", "idArea": "2"},
                    {"waktuMulai": "2025-01-18T03:00:00.000Z", "waktuBerakhir": "2025-01-18T05:00:00.000Z", "idArea": "1"},
                ],
            },
        )

    windows = await _client(handler, clock).fetch_bookings_by_date(ResourceKind.SERBAGUNA, FRIDAY, "1", "token")

    assert len(windows) == 1
    assert windows[0].owner_summary == "Budi Santoso"


@pytest.mark.asyncio
async def test_401_clears_session(clock):
    store = MemorySessionStore("token", "user-1")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"success": False})

    with pytest.raises(AuthRequired) as exc:
        await _client(handler, clock, store).fetch_bookings(ResourceKind.THEATER, "token")

    assert str(exc.value) == "Session expired. Please login again."
    assert store.get_credential() is None


@pytest.mark.asyncio
async def test_missing_credential_never_hits_network(clock):
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(AuthRequired):
        await _client(handler, clock).fetch_bookings(ResourceKind.THEATER, None)


@pytest.mark.asyncio
async def test_rejection_message_is_verbatim(clock):
    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content) == {
            "idFasilitas": "2",
            "idPeminjam": "user-1",
            "waktuMulai": "2025-01-17T03:00:00.000Z",
            "waktuBerakhir": "2025-01-17T04:00:00.000Z",
            "pinjamPeralatan": False,
        }
        return httpx.Response(409, json={"success": False, "message": "Fasilitas sudah dipesan", "errors": ["overlap"]})

    with pytest.raises(ServerRejection) as exc:
        await _client(handler, clock).create_booking(_kitchen_request(), "token")

    assert str(exc.value) == "Fasilitas sudah dipesan"
    assert exc.value.status == 409
    assert exc.value.errors == ["overlap"]


@pytest.mark.asyncio
async def test_rejection_falls_back_to_body_text(clock):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="upstream exploded")

    with pytest.raises(ServerRejection) as exc:
        await _client(handler, clock).create_booking(_kitchen_request(), "token")

    assert str(exc.value) == "upstream exploded"
    assert exc.value.status == 500


@pytest.mark.asyncio
async def test_rejection_generic_message(clock):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400)

    with pytest.raises(ServerRejection) as exc:
        await _client(handler, clock).create_booking(_kitchen_request(), "token")

    assert str(exc.value) == "An error occurred"


@pytest.mark.asyncio
async def test_transport_error_is_network_failure(clock):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkFailure) as exc:
        await _client(handler, clock).create_booking(_kitchen_request(), "token")

    assert str(exc.value) == "Network error"


@pytest.mark.asyncio
async def test_create_returns_booking_data(clock):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/dapur"
        return httpx.Response(201, json={"success": True, "data": {"id": "b-1"}})

    booking = await _client(handler, clock).create_booking(_kitchen_request(), "token")

    assert booking == {"id": "b-1"}


@pytest.mark.asyncio
async def test_catalog_maps_name_field(clock):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/serbaguna/areas"
        return httpx.Response(200, json={"success": True, "data": [{"id": 7, "namaArea": "Area Timur"}]})

    resources = await _client(handler, clock).list_resources(ResourceKind.SERBAGUNA, "token")

    assert [(r.id, r.display_name) for r in resources] == [("7", "Area Timur")]


@pytest.mark.asyncio
async def test_machine_overview_uses_unpaginated_time_slots(clock):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": [
                    {"waktuMulai": "2025-01-17T13:00:00.000Z", "waktuBerakhir": "2025-01-17T14:00:00.000Z", "available": False},
                ],
            },
        )

    windows = await _client(handler, clock).fetch_bookings_by_date(
        ResourceKind.WASHING_MACHINE_WOMEN, FRIDAY, "3", "token"
    )

    assert seen[0].url.path == "/api/v1/mesin-cuci-cewe/time-slots"
    assert seen[0].url.params["facilityId"] == "3"
    assert "limit" not in seen[0].url.params
    assert [(clock.civil_hour_of(w.start_instant), w.resource_id) for w in windows] == [(20, "3")]
