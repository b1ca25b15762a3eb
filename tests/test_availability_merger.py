"""
Tests for merging occupied windows into generated slots.
"""

from conftest import FRIDAY, TOMORROW, window

from facility_booking.application.utils.availability_merger import (
    Advisory,
    AvailabilityOutcome,
    OutcomeStatus,
    advisory_message,
    merge_availability,
)
from facility_booking.application.utils.slot_generator import generate_slots
from facility_booking.domain.entities.resource import ResourceKind
from facility_booking.domain.entities.schedule_config import get_schedule_config
from facility_booking.domain.entities.slot import UnavailableReason


def _merge(clock, kind, date, outcome, **kwargs):
    config = get_schedule_config(kind)
    return merge_availability(generate_slots(date, config, clock), date, config, outcome, clock, **kwargs)


def test_closed_weekday_blocks_every_slot(clock):
    """Thursday closes the community workspace even when the backend reports nothing."""
    slots = _merge(clock, ResourceKind.CWS, TOMORROW, AvailabilityOutcome.ok())

    assert len(slots) == 8
    assert all(not s.available and s.reason is UnavailableReason.CLOSED for s in slots)


def test_closed_weekday_beats_failed_fetch(clock):
    slots = _merge(clock, ResourceKind.CWS, TOMORROW, AvailabilityOutcome.failed("boom"))

    assert all(s.reason is UnavailableReason.CLOSED for s in slots)


def test_occupied_window_marks_only_matching_slot(clock):
    outcome = AvailabilityOutcome.ok([window(clock, FRIDAY, 10, hours=2)])
    slots = _merge(clock, ResourceKind.CWS, FRIDAY, outcome)

    booked = [s for s in slots if not s.available]
    assert [s.civil_hour for s in booked] == [10]
    assert booked[0].reason is UnavailableReason.BOOKED
    assert booked[0].occupant is None


def test_window_on_other_date_is_ignored(clock):
    outcome = AvailabilityOutcome.ok([window(clock, "2025-01-18", 10)])
    slots = _merge(clock, ResourceKind.THEATER, FRIDAY, outcome)

    assert all(s.available for s in slots)


def test_occupant_attached_for_overview(clock):
    outcome = AvailabilityOutcome.ok([window(clock, FRIDAY, 9, owner="Budi Santoso")])
    slots = _merge(clock, ResourceKind.THEATER, FRIDAY, outcome, include_occupant=True)

    slot = next(s for s in slots if s.civil_hour == 9)
    assert slot.occupant == "Budi Santoso"


def test_failed_fetch_fails_open(clock):
    for outcome in (AvailabilityOutcome.failed("down"), AvailabilityOutcome.unauthenticated()):
        slots = _merge(clock, ResourceKind.THEATER, FRIDAY, outcome)
        assert all(s.available and s.reason is None for s in slots)


def test_merge_is_idempotent(clock):
    config = get_schedule_config(ResourceKind.THEATER)
    outcome = AvailabilityOutcome.ok([window(clock, FRIDAY, 12)])
    once = merge_availability(generate_slots(FRIDAY, config, clock), FRIDAY, config, outcome, clock)
    twice = merge_availability(once, FRIDAY, config, outcome, clock)

    assert once == twice


def test_outcome_advisories():
    assert AvailabilityOutcome.ok().status is OutcomeStatus.OK
    assert AvailabilityOutcome.failed().status is OutcomeStatus.FAILED
    assert AvailabilityOutcome.ok().advisory is None
    assert AvailabilityOutcome.failed().advisory is Advisory.UNAVAILABLE
    assert AvailabilityOutcome.unauthenticated().advisory is Advisory.UNAUTHENTICATED
    assert advisory_message(Advisory.UNAUTHENTICATED) == "You are not logged in. Showing default time slots."
    assert advisory_message(None) is None
