from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ResourceKind(str, Enum):
    COMMUNAL = "communal"
    CWS = "cws"
    SERBAGUNA = "serbaguna"
    THEATER = "theater"
    KITCHEN = "kitchen"
    WASHING_MACHINE_WOMEN = "washing_machine_women"
    WASHING_MACHINE_MEN = "washing_machine_men"

    @property
    def requires_resource(self) -> bool:
        """Kinds whose picker needs a floor, area, facility or machine before slots load."""
        return self in _KINDS_WITH_SELECTOR

    @property
    def is_room_like(self) -> bool:
        return self in _ROOM_LIKE_KINDS

    @property
    def is_washing_machine(self) -> bool:
        return self in (ResourceKind.WASHING_MACHINE_WOMEN, ResourceKind.WASHING_MACHINE_MEN)


_KINDS_WITH_SELECTOR = frozenset(
    {
        ResourceKind.COMMUNAL,
        ResourceKind.SERBAGUNA,
        ResourceKind.KITCHEN,
        ResourceKind.WASHING_MACHINE_WOMEN,
        ResourceKind.WASHING_MACHINE_MEN,
    }
)

_ROOM_LIKE_KINDS = frozenset(
    {
        ResourceKind.COMMUNAL,
        ResourceKind.CWS,
        ResourceKind.SERBAGUNA,
        ResourceKind.THEATER,
    }
)


@dataclass(frozen=True)
class Resource:
    id: str
    display_name: str
