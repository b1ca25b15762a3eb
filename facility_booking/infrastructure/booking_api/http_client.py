from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from facility_booking.application.dto.api_payloads import BookingRecordDTO, TimeSlotDTO
from facility_booking.application.dto.booking_request import BookingRequest
from facility_booking.application.exceptions import AuthRequired, NetworkFailure, ServerRejection
from facility_booking.application.ports.booking_service import BookingServicePort
from facility_booking.application.ports.resource_catalog import ResourceCatalogPort
from facility_booking.application.ports.session_store import SessionStorePort
from facility_booking.application.utils.civil_clock import CivilClock, parse_instant
from facility_booking.core.config import settings
from facility_booking.domain.entities.resource import Resource, ResourceKind
from facility_booking.domain.entities.slot import OccupiedWindow
from facility_booking.infrastructure.catalog.default_catalog import DEFAULT_CATALOG

KIND_PATHS = {
    ResourceKind.COMMUNAL: "/communal",
    ResourceKind.CWS: "/cws",
    ResourceKind.SERBAGUNA: "/serbaguna",
    ResourceKind.THEATER: "/theater",
    ResourceKind.KITCHEN: "/dapur",
    ResourceKind.WASHING_MACHINE_WOMEN: "/mesin-cuci-cewe",
    ResourceKind.WASHING_MACHINE_MEN: "/mesin-cuci-cowo",
}

# (path suffix, name field); floors have no endpoint
CATALOG_ENDPOINTS = {
    ResourceKind.SERBAGUNA: ("/areas", "namaArea"),
    ResourceKind.KITCHEN: ("/facilities", "fasilitas"),
    ResourceKind.WASHING_MACHINE_WOMEN: ("/facilities", "nama"),
    ResourceKind.WASHING_MACHINE_MEN: ("/facilities", "nama"),
}


def _decode_body(response: httpx.Response) -> Any:
    text = response.text.strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


def _extract_error_message(data: Any, fallback: str) -> str:
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    if isinstance(data, str) and data:
        return data
    return fallback


def _extract_error_details(data: Any) -> list[str]:
    if isinstance(data, dict) and isinstance(data.get("errors"), list):
        return [error for error in data["errors"] if isinstance(error, str)]
    return []


class BookingApiClient(BookingServicePort, ResourceCatalogPort):
    def __init__(
        self,
        base_url: str | None = None,
        prefix: str | None = None,
        timeout: float | None = None,
        page_limit: int | None = None,
        clock: CivilClock | None = None,
        session_store: SessionStorePort | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or settings.BOOKING_API_BASE_URL).rstrip("/")
        self._prefix = prefix if prefix is not None else settings.BOOKING_API_PREFIX
        self._page_limit = page_limit or settings.BOOKINGS_PAGE_LIMIT
        self._clock = clock or CivilClock(settings.CIVIL_UTC_OFFSET_HOURS)
        self._session_store = session_store
        self._client = httpx.AsyncClient(
            base_url=f"{self._base_url}{self._prefix}",
            timeout=timeout or settings.BOOKING_API_TIMEOUT_SECONDS,
            transport=transport,
        )
        self._logger = logging.getLogger(__name__)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_occupied_windows(
        self,
        kind: ResourceKind,
        date: str,
        resource_id: str | None,
        credential: str | None,
    ) -> list[OccupiedWindow]:
        base = KIND_PATHS[kind]
        params: dict[str, str] | None = None
        if kind in (ResourceKind.COMMUNAL, ResourceKind.SERBAGUNA):
            if not resource_id:
                raise ValueError(f"{kind.value} availability needs a resource id")
            path = f"{base}/available-slots/{date}/{resource_id}"
        else:
            path = f"{base}/time-slots"
            params = {"date": date}
            if kind.requires_resource and resource_id:
                params["facilityId"] = resource_id

        data = self._unwrap(await self._request("GET", path, credential, params=params), "availability")
        windows: list[OccupiedWindow] = []
        for entry in self._as_list(data, "availability"):
            try:
                slot = TimeSlotDTO.model_validate(entry)
                if slot.available is not False:
                    continue
                windows.append(
                    OccupiedWindow(
                        start_instant=parse_instant(slot.waktuMulai),
                        end_instant=parse_instant(slot.waktuBerakhir),
                        resource_id=resource_id,
                    )
                )
            except ValueError:
                self._logger.warning("Skipping malformed time slot", extra={"kind": kind.value, "date": date})
                continue
        return windows

    async def fetch_bookings(self, kind: ResourceKind, credential: str | None) -> list[OccupiedWindow]:
        params = {"page": 1, "limit": self._page_limit}
        data = self._unwrap(await self._request("GET", KIND_PATHS[kind], credential, params=params), "bookings")
        return self._to_windows(self._as_list(data, "bookings"), kind)

    async def fetch_bookings_by_date(
        self,
        kind: ResourceKind,
        date: str,
        resource_id: str | None,
        credential: str | None,
    ) -> list[OccupiedWindow]:
        if kind.is_washing_machine and resource_id:
            # per-machine time slots are not paginated
            return await self.fetch_occupied_windows(kind, date, resource_id, credential)

        if kind is ResourceKind.CWS:
            data = self._unwrap(await self._request("GET", f"/cws/date/{date}", credential), "bookings")
            windows = self._to_windows(self._as_list(data, "bookings"), kind)
        else:
            windows = await self.fetch_bookings(kind, credential)

        return [
            window
            for window in windows
            if self._clock.civil_date_of(window.start_instant) == date
            and (resource_id is None or window.resource_id == resource_id)
        ]

    async def list_resources(self, kind: ResourceKind, credential: str | None) -> list[Resource]:
        endpoint = CATALOG_ENDPOINTS.get(kind)
        if endpoint is None:
            return list(DEFAULT_CATALOG.get(kind, []))

        suffix, name_field = endpoint
        data = self._unwrap(await self._request("GET", f"{KIND_PATHS[kind]}{suffix}", credential), "catalog")
        resources: list[Resource] = []
        for entry in self._as_list(data, "catalog"):
            if not isinstance(entry, dict) or entry.get("id") is None:
                continue
            resources.append(Resource(id=str(entry["id"]), display_name=str(entry.get(name_field) or entry["id"])))
        return resources

    async def create_booking(self, request: BookingRequest, credential: str | None) -> dict[str, Any]:
        payload = request.to_payload()
        data = await self._request("POST", KIND_PATHS[request.kind], credential, json=payload)
        if not isinstance(data, dict) or not data.get("success"):
            raise ServerRejection(_extract_error_message(data, "Failed to create booking"))

        booking = data.get("data") or {}
        self._logger.info(
            "Booking created",
            extra={"kind": request.kind.value, "booking_id": booking.get("id") if isinstance(booking, dict) else None},
        )
        return booking if isinstance(booking, dict) else {"data": booking}

    async def _request(
        self,
        method: str,
        path: str,
        credential: str | None,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        if not credential:
            raise AuthRequired("Authentication required. Please login again.")

        headers = {"Authorization": f"Bearer {credential}", "Content-Type": "application/json"}
        try:
            response = await self._client.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            self._logger.error("Booking API unreachable", extra={"path": path, "error": str(e)})
            raise NetworkFailure() from e

        data = _decode_body(response)
        if response.status_code == 401:
            if self._session_store is not None:
                self._session_store.clear()
            raise AuthRequired(_extract_error_message(data, "Session expired. Please login again."))

        if response.status_code >= 400:
            message = _extract_error_message(data, "An error occurred")
            self._logger.error(
                "Booking API error",
                extra={"path": path, "status": response.status_code, "error": message},
            )
            raise ServerRejection(message, status=response.status_code, errors=_extract_error_details(data))

        return data

    def _unwrap(self, data: Any, what: str) -> Any:
        if isinstance(data, dict) and data.get("success") and data.get("data") is not None:
            return data["data"]
        raise NetworkFailure(f"Unusable {what} response")

    def _as_list(self, data: Any, what: str) -> list[Any]:
        if not isinstance(data, list):
            raise NetworkFailure(f"Unusable {what} response")
        return data

    def _to_windows(self, entries: list[Any], kind: ResourceKind) -> list[OccupiedWindow]:
        windows: list[OccupiedWindow] = []
        for entry in entries:
            try:
                record = BookingRecordDTO.model_validate(entry)
                windows.append(
                    OccupiedWindow(
                        start_instant=parse_instant(record.waktuMulai),
                        end_instant=parse_instant(record.waktuBerakhir),
                        owner_summary=record.owner_summary(),
                        resource_id=record.resource_id(),
                    )
                )
            except ValueError:
                self._logger.warning("Skipping malformed booking", extra={"kind": kind.value})
                continue
        return windows
