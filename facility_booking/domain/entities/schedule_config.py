from __future__ import annotations

from dataclasses import dataclass, field

from facility_booking.domain.entities.resource import ResourceKind

THURSDAY = 3  # date.weekday(): Monday == 0


@dataclass(frozen=True)
class ScheduleConfig:
    operating_start_hour: int
    operating_end_hour: int  # exclusive
    slot_duration_hours: int
    closed_weekdays: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not 0 <= self.operating_start_hour < self.operating_end_hour <= 24:
            raise ValueError(
                f"Invalid operating window {self.operating_start_hour}-{self.operating_end_hour}"
            )
        if self.slot_duration_hours < 1:
            raise ValueError("slot_duration_hours must be at least 1")
        if (self.operating_end_hour - self.operating_start_hour) % self.slot_duration_hours != 0:
            raise ValueError("Operating window must be an exact multiple of the slot duration")
        if any(not 0 <= day <= 6 for day in self.closed_weekdays):
            raise ValueError("closed_weekdays must hold values in 0..6")

    @property
    def slot_count(self) -> int:
        return (self.operating_end_hour - self.operating_start_hour) // self.slot_duration_hours

    def is_closed_on(self, weekday: int) -> bool:
        return weekday in self.closed_weekdays


SCHEDULE_CONFIGS: dict[ResourceKind, ScheduleConfig] = {
    ResourceKind.COMMUNAL: ScheduleConfig(6, 22, 1),
    ResourceKind.CWS: ScheduleConfig(6, 22, 2, frozenset({THURSDAY})),
    ResourceKind.SERBAGUNA: ScheduleConfig(6, 22, 2),
    ResourceKind.THEATER: ScheduleConfig(6, 22, 1),
    ResourceKind.KITCHEN: ScheduleConfig(6, 22, 1),
    ResourceKind.WASHING_MACHINE_WOMEN: ScheduleConfig(0, 24, 1),
    ResourceKind.WASHING_MACHINE_MEN: ScheduleConfig(0, 24, 1),
}


def get_schedule_config(kind: ResourceKind) -> ScheduleConfig:
    return SCHEDULE_CONFIGS[kind]
