from functools import lru_cache
import logging

from facility_booking.core.config import settings
from facility_booking.application.ports.session_store import SessionStorePort
from facility_booking.application.use_cases.catalog import ResourceCatalogUseCase
from facility_booking.application.use_cases.overview import DayOverviewUseCase, OccupancyBoardUseCase
from facility_booking.application.use_cases.selection import OnBooked, SelectionController
from facility_booking.application.utils.civil_clock import CivilClock
from facility_booking.domain.entities.resource import ResourceKind
from facility_booking.infrastructure.booking_api.http_client import BookingApiClient
from facility_booking.infrastructure.booking_api.mock_service import MockBookingService
from facility_booking.infrastructure.catalog.default_catalog import DEFAULT_CATALOG
from facility_booking.infrastructure.store.json_store import JsonSessionStore
from facility_booking.infrastructure.store.memory_store import MemorySessionStore


@lru_cache
def get_clock() -> CivilClock:
    return CivilClock(settings.CIVIL_UTC_OFFSET_HOURS)


@lru_cache
def get_session_store() -> SessionStorePort:
    if settings.ENV.lower() in {"dev", "local"}:
        return JsonSessionStore(settings.SESSION_FILE)
    return MemorySessionStore()


@lru_cache
def get_booking_service() -> BookingApiClient | MockBookingService:
    logger = logging.getLogger(__name__)
    if settings.USE_MOCK_BACKEND and settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockBookingService (USE_MOCK_BACKEND, ENV=%s)", settings.ENV)
        return MockBookingService(clock=get_clock())
    logger.info("Using booking API at %s", settings.BOOKING_API_BASE_URL)
    return BookingApiClient(clock=get_clock(), session_store=get_session_store())


def get_catalog_use_case() -> ResourceCatalogUseCase:
    return ResourceCatalogUseCase(catalog=get_booking_service(), defaults=DEFAULT_CATALOG)


def get_day_overview_use_case() -> DayOverviewUseCase:
    return DayOverviewUseCase(service=get_booking_service(), clock=get_clock())


def get_occupancy_board_use_case() -> OccupancyBoardUseCase:
    return OccupancyBoardUseCase(
        service=get_booking_service(),
        catalog=get_catalog_use_case(),
        clock=get_clock(),
    )


def build_selection_controller(
    kind: ResourceKind,
    credential: str | None,
    date: str | None = None,
    resource_id: str | None = None,
    on_booked: OnBooked | None = None,
) -> SelectionController:
    return SelectionController(
        kind=kind,
        service=get_booking_service(),
        clock=get_clock(),
        credential=credential,
        date=date,
        resource_id=resource_id if kind.requires_resource else None,
        on_booked=on_booked,
    )
