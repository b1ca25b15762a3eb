from __future__ import annotations

import logging
from typing import Callable

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from facility_booking.api.v1.schemas import (
    BookingCreatedSchema,
    BookingSubmitSchema,
    BookingWindowSchema,
    MachineStatusSchema,
    OccupancyResponseSchema,
    OverviewResponseSchema,
    ResourceSchema,
    ResourcesResponseSchema,
    SlotSchema,
    SlotsResponseSchema,
)
from facility_booking.application.exceptions import AuthRequired, BookingServiceError, NetworkFailure, ServerRejection
from facility_booking.application.use_cases.catalog import ResourceCatalogUseCase
from facility_booking.application.use_cases.overview import DayOverviewUseCase, OccupancyBoardUseCase
from facility_booking.application.use_cases.selection import SelectionController
from facility_booking.application.utils.civil_clock import format_instant
from facility_booking.domain.entities.booking_draft import BookingDraft
from facility_booking.domain.entities.resource import ResourceKind
from facility_booking.domain.entities.slot import OccupiedWindow, Slot, UnavailableReason
from facility_booking.wiring.dependencies import (
    build_selection_controller,
    get_catalog_use_case,
    get_day_overview_use_case,
    get_occupancy_board_use_case,
)

router = APIRouter()
logger = logging.getLogger(__name__)

ControllerFactory = Callable[..., SelectionController]


def get_credential(authorization: str | None = Header(None)) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_controller_factory() -> ControllerFactory:
    return build_selection_controller


def _slot_schema(slot: Slot, state: str, selectable: bool) -> SlotSchema:
    return SlotSchema(
        start=slot.start_instant,
        end=slot.end_instant,
        start_instant=format_instant(slot.start_instant),
        end_instant=format_instant(slot.end_instant),
        civil_hour=slot.civil_hour,
        label=slot.display_label,
        available=slot.available,
        reason=slot.reason.value if slot.reason else None,
        state=state,
        selectable=selectable,
        occupant=slot.occupant,
    )


def _window_schema(window: OccupiedWindow | None) -> BookingWindowSchema | None:
    if window is None:
        return None
    return BookingWindowSchema(start=window.start_instant, end=window.end_instant, owner=window.owner_summary)


def _overview_state(slot: Slot) -> str:
    if slot.reason is UnavailableReason.CLOSED:
        return "closed"
    return "available" if slot.available else "booked"


def _status_for(error: BookingServiceError | None) -> int:
    if isinstance(error, AuthRequired):
        return 401
    if isinstance(error, NetworkFailure):
        return 502
    if isinstance(error, ServerRejection) and 400 <= error.status < 600:
        return error.status
    return 409


@router.get("/{kind}/resources", response_model=ResourcesResponseSchema)
async def list_resources(
    kind: ResourceKind,
    credential: str | None = Depends(get_credential),
    uc: ResourceCatalogUseCase = Depends(get_catalog_use_case),
):
    result = await uc.list_resources(kind, credential)
    return ResourcesResponseSchema(
        kind=kind.value,
        resources=[ResourceSchema(id=r.id, display_name=r.display_name) for r in result.resources],
        advisory=result.advisory.value if result.advisory else None,
        advisory_message=result.advisory_message,
    )


@router.get("/{kind}/slots", response_model=SlotsResponseSchema)
async def get_slots(
    kind: ResourceKind,
    date: str | None = Query(None),
    resource_id: str | None = Query(None),
    credential: str | None = Depends(get_credential),
    build_controller: ControllerFactory = Depends(get_controller_factory),
):
    controller = build_controller(kind, credential, date=date, resource_id=resource_id)
    await controller.load()
    selection = controller.selection
    return SlotsResponseSchema(
        kind=kind.value,
        date=selection.date,
        resource_id=selection.resource_id,
        status=controller.status.value,
        is_today=controller.is_today,
        closed=controller.is_closed_day,
        advisory=controller.advisory.value if controller.advisory else None,
        advisory_message=controller.advisory_message,
        slots=[
            _slot_schema(slot, controller.slot_state(slot), controller.is_selectable(slot))
            for slot in controller.slots
        ],
    )


@router.get("/{kind}/overview", response_model=OverviewResponseSchema)
async def get_overview(
    kind: ResourceKind,
    date: str | None = Query(None),
    resource_id: str | None = Query(None),
    credential: str | None = Depends(get_credential),
    uc: DayOverviewUseCase = Depends(get_day_overview_use_case),
):
    overview = await uc.build(kind, date, resource_id, credential)
    return OverviewResponseSchema(
        kind=kind.value,
        date=overview.date,
        resource_id=overview.resource_id,
        is_today=overview.is_today,
        bookings_count=overview.bookings_count,
        advisory=overview.advisory.value if overview.advisory else None,
        error=overview.error,
        slots=[
            _slot_schema(slot, _overview_state(slot), False)
            for slot in overview.slots
        ],
    )


@router.get("/{kind}/occupancy", response_model=OccupancyResponseSchema)
async def get_occupancy(
    kind: ResourceKind,
    credential: str | None = Depends(get_credential),
    uc: OccupancyBoardUseCase = Depends(get_occupancy_board_use_case),
):
    try:
        board = await uc.build(kind, credential)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return OccupancyResponseSchema(
        kind=kind.value,
        as_of=board.as_of,
        advisory=board.advisory.value if board.advisory else None,
        error=board.error,
        machines=[
            MachineStatusSchema(
                id=m.resource.id,
                display_name=m.resource.display_name,
                occupied=m.occupied,
                current_booking=_window_schema(m.current_booking),
                next_booking=_window_schema(m.next_booking),
            )
            for m in board.machines
        ],
    )


@router.post("/{kind}/bookings", response_model=BookingCreatedSchema, status_code=201)
async def create_booking(
    kind: ResourceKind,
    req: BookingSubmitSchema,
    credential: str | None = Depends(get_credential),
    build_controller: ControllerFactory = Depends(get_controller_factory),
):
    try:
        controller = build_controller(kind, credential, date=req.date, resource_id=req.resource_id)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    await controller.load()
    slot = controller.find_slot(req.slot_start)
    if slot is None or not controller.select_slot(slot):
        raise HTTPException(status_code=422, detail="Selected time slot is not available")

    result = await controller.submit(
        BookingDraft(
            requester_id=req.requester_id,
            participant_count=None if req.participant_count is None else str(req.participant_count),
            purpose=req.purpose,
            borrow_equipment=req.borrow_equipment,
        )
    )
    if result.action == "booked":
        return BookingCreatedSchema(booking=result.booking or {})
    if result.action == "invalid":
        raise HTTPException(status_code=422, detail=result.message)

    logger.info("Booking not created", extra={"kind": kind.value, "reason": result.message})
    raise HTTPException(status_code=_status_for(result.error), detail=result.message)
