from __future__ import annotations

import calendar
import logging
from datetime import date

from facility_booking.application.dto.booking_request import (
    BookingRequest,
    KitchenBookingRequest,
    RoomBookingRequest,
    WashingMachineBookingRequest,
)
from facility_booking.application.exceptions import ValidationFailure
from facility_booking.application.utils.civil_clock import format_instant
from facility_booking.domain.entities.booking_draft import BookingDraft
from facility_booking.domain.entities.resource import ResourceKind
from facility_booking.domain.entities.schedule_config import SCHEDULE_CONFIGS, ScheduleConfig
from facility_booking.domain.entities.selection_state import Selection

RESOURCE_NOUNS = {
    ResourceKind.COMMUNAL: "floor",
    ResourceKind.SERBAGUNA: "area",
    ResourceKind.KITCHEN: "kitchen facility",
    ResourceKind.WASHING_MACHINE_WOMEN: "washing machine",
    ResourceKind.WASHING_MACHINE_MEN: "washing machine",
}

KIND_LABELS = {
    ResourceKind.COMMUNAL: "Communal room",
    ResourceKind.CWS: "CWS",
    ResourceKind.SERBAGUNA: "Serbaguna",
    ResourceKind.THEATER: "Theater",
    ResourceKind.KITCHEN: "Kitchen",
    ResourceKind.WASHING_MACHINE_WOMEN: "Washing machine",
    ResourceKind.WASHING_MACHINE_MEN: "Washing machine",
}

MAX_PARTICIPANTS = {ResourceKind.COMMUNAL: 50}


class BookingRequestBuilder:
    """Map a committed selection plus form fields to the creation payload of one resource kind."""

    def __init__(self, configs: dict[ResourceKind, ScheduleConfig] | None = None) -> None:
        self._configs = configs or SCHEDULE_CONFIGS
        self._logger = logging.getLogger(__name__)

    def build(self, selection: Selection, draft: BookingDraft, kind: ResourceKind) -> BookingRequest:
        problems = self.validate(selection, draft, kind)
        if problems:
            self._logger.info(
                "Booking draft rejected",
                extra={"kind": kind.value, "date": selection.date, "reason": "; ".join(problems)},
            )
            raise ValidationFailure(problems)

        slot = selection.slot
        start = format_instant(slot.start_instant)
        end = format_instant(slot.end_instant)

        if kind.is_room_like:
            return RoomBookingRequest(
                kind=kind,
                responsible_id=draft.requester_id,
                start=start,
                end=end,
                participant_count=draft.participant_count.strip(),
                purpose=draft.purpose.strip(),
                floor=selection.resource_id if kind is ResourceKind.COMMUNAL else None,
                area_id=selection.resource_id if kind is ResourceKind.SERBAGUNA else None,
            )

        if kind is ResourceKind.KITCHEN:
            return KitchenBookingRequest(
                facility_id=selection.resource_id,
                borrower_id=draft.requester_id,
                start=start,
                end=end,
                borrow_equipment=draft.borrow_equipment,
            )

        return WashingMachineBookingRequest(
            kind=kind,
            facility_id=selection.resource_id,
            borrower_id=draft.requester_id,
            start=start,
            end=end,
        )

    def validate(self, selection: Selection, draft: BookingDraft, kind: ResourceKind) -> list[str]:
        problems: list[str] = []

        if selection.slot is None:
            problems.append("Please pick an available time slot")
        if not draft.requester_id:
            problems.append("User not found. Please login again.")
        if kind.requires_resource and not selection.resource_id:
            problems.append(f"Please choose a {RESOURCE_NOUNS[kind]}")

        closed_day = self._closed_weekday_name(selection.date, kind)
        if closed_day:
            problems.append(
                f"{KIND_LABELS[kind]} bookings are unavailable every {closed_day}. Please choose another day."
            )

        if kind.is_room_like:
            problems.extend(self._participant_problems(draft.participant_count, kind))
            if not draft.purpose.strip():
                problems.append("Purpose is required")

        return problems

    def _closed_weekday_name(self, date_string: str, kind: ResourceKind) -> str | None:
        try:
            weekday = date.fromisoformat(date_string).weekday()
        except ValueError:
            return None
        if self._configs[kind].is_closed_on(weekday):
            return calendar.day_name[weekday]
        return None

    def _participant_problems(self, raw: str | None, kind: ResourceKind) -> list[str]:
        if raw is None or not raw.strip():
            return ["Number of participants is required"]
        try:
            count = int(raw.strip())
        except ValueError:
            return ["Number of participants must be a whole number"]
        if count < 1:
            return ["Number of participants must be at least 1"]
        limit = MAX_PARTICIPANTS.get(kind)
        if limit is not None and count > limit:
            return [f"Number of participants must be at most {limit}"]
        return []
