"""
Tests for turning a committed selection into a creation payload.
"""

import pytest
from conftest import FRIDAY, TOMORROW

from facility_booking.application.exceptions import ValidationFailure
from facility_booking.application.use_cases.booking import BookingRequestBuilder
from facility_booking.application.utils.slot_generator import generate_slots
from facility_booking.domain.entities.booking_draft import BookingDraft
from facility_booking.domain.entities.resource import ResourceKind
from facility_booking.domain.entities.schedule_config import get_schedule_config
from facility_booking.domain.entities.selection_state import Selection


def _selection(clock, kind, date=FRIDAY, hour=10, resource_id=None):
    slots = generate_slots(date, get_schedule_config(kind), clock)
    slot = next(s for s in slots if s.civil_hour == hour)
    return Selection(date=date, resource_id=resource_id, slot=slot)


def test_communal_payload_carries_floor(clock):
    request = BookingRequestBuilder().build(
        _selection(clock, ResourceKind.COMMUNAL, resource_id="2"),
        BookingDraft(requester_id="user-1", participant_count=" 12 ", purpose=" Study group "),
        ResourceKind.COMMUNAL,
    )

    assert request.to_payload() == {
        "idPenanggungJawab": "user-1",
        "waktuMulai": "2025-01-17T03:00:00.000Z",
        "waktuBerakhir": "2025-01-17T04:00:00.000Z",
        "jumlahPengguna": "12",
        "keterangan": "Study group",
        "isDone": False,
        "lantai": "2",
    }


def test_serbaguna_payload_carries_area(clock):
    request = BookingRequestBuilder().build(
        _selection(clock, ResourceKind.SERBAGUNA, hour=8, resource_id="4"),
        BookingDraft(requester_id="user-1", participant_count="20", purpose="Workshop"),
        ResourceKind.SERBAGUNA,
    )
    payload = request.to_payload()

    assert payload["idArea"] == "4"
    assert "lantai" not in payload
    assert payload["waktuBerakhir"] == "2025-01-17T03:00:00.000Z"


def test_kitchen_payload(clock):
    request = BookingRequestBuilder().build(
        _selection(clock, ResourceKind.KITCHEN, resource_id="2"),
        BookingDraft(requester_id="user-1", borrow_equipment=True),
        ResourceKind.KITCHEN,
    )

    assert request.to_payload() == {
        "idFasilitas": "2",
        "idPeminjam": "user-1",
        "waktuMulai": "2025-01-17T03:00:00.000Z",
        "waktuBerakhir": "2025-01-17T04:00:00.000Z",
        "pinjamPeralatan": True,
    }


def test_washing_machine_payload_is_minimal(clock):
    request = BookingRequestBuilder().build(
        _selection(clock, ResourceKind.WASHING_MACHINE_WOMEN, hour=23, resource_id="1"),
        BookingDraft(requester_id="user-1"),
        ResourceKind.WASHING_MACHINE_WOMEN,
    )

    assert request.kind is ResourceKind.WASHING_MACHINE_WOMEN
    assert request.to_payload() == {
        "idFasilitas": "1",
        "idPeminjam": "user-1",
        "waktuMulai": "2025-01-17T16:00:00.000Z",
        "waktuBerakhir": "2025-01-17T17:00:00.000Z",
    }


def test_missing_fields_fail_fast(clock):
    selection = Selection(date=FRIDAY, resource_id=None, slot=None)

    with pytest.raises(ValidationFailure) as exc:
        BookingRequestBuilder().build(selection, BookingDraft(), ResourceKind.COMMUNAL)

    assert exc.value.problems == [
        "Please pick an available time slot",
        "User not found. Please login again.",
        "Please choose a floor",
        "Number of participants is required",
        "Purpose is required",
    ]


@pytest.mark.parametrize(
    "count, message",
    [
        ("abc", "Number of participants must be a whole number"),
        ("0", "Number of participants must be at least 1"),
        ("51", "Number of participants must be at most 50"),
    ],
)
def test_participant_count_rules(clock, count, message):
    with pytest.raises(ValidationFailure) as exc:
        BookingRequestBuilder().build(
            _selection(clock, ResourceKind.COMMUNAL, resource_id="1"),
            BookingDraft(requester_id="user-1", participant_count=count, purpose="Meeting"),
            ResourceKind.COMMUNAL,
        )
    assert exc.value.problems == [message]


def test_large_groups_allowed_outside_communal(clock):
    request = BookingRequestBuilder().build(
        _selection(clock, ResourceKind.THEATER),
        BookingDraft(requester_id="user-1", participant_count="120", purpose="Screening"),
        ResourceKind.THEATER,
    )
    assert request.participant_count == "120"


def test_closed_day_is_rejected(clock):
    selection = _selection(clock, ResourceKind.CWS, date=TOMORROW)

    with pytest.raises(ValidationFailure) as exc:
        BookingRequestBuilder().build(
            selection,
            BookingDraft(requester_id="user-1", participant_count="3", purpose="Focus"),
            ResourceKind.CWS,
        )
    assert exc.value.problems == ["CWS bookings are unavailable every Thursday. Please choose another day."]
