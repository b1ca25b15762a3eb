from __future__ import annotations

from facility_booking.application.utils.civil_clock import CivilClock
from facility_booking.domain.entities.schedule_config import ScheduleConfig
from facility_booking.domain.entities.slot import Slot


def format_slot_label(start_hour: int, end_hour: int) -> str:
    return f"{start_hour:02d}:00 - {end_hour % 24:02d}:00"


def generate_slots(date_string: str, config: ScheduleConfig, clock: CivilClock) -> list[Slot]:
    """Ordered, gapless candidate slots for one civil date. Every slot starts out available."""
    slots: list[Slot] = []
    for hour in range(config.operating_start_hour, config.operating_end_hour, config.slot_duration_hours):
        end_hour = hour + config.slot_duration_hours
        slots.append(
            Slot(
                start_instant=clock.to_instant(date_string, hour),
                end_instant=clock.to_instant(date_string, end_hour),
                civil_hour=hour,
                display_label=format_slot_label(hour, end_hour),
            )
        )
    return slots
