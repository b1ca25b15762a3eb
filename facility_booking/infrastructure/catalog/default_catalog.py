from __future__ import annotations

from facility_booking.domain.entities.resource import Resource, ResourceKind

_WASHING_MACHINES = [
    Resource(id="1", display_name="Mesin 1"),
    Resource(id="2", display_name="Mesin 2"),
    Resource(id="3", display_name="Mesin 3"),
]

DEFAULT_CATALOG: dict[ResourceKind, list[Resource]] = {
    ResourceKind.COMMUNAL: [
        Resource(id="1", display_name="Floor 1"),
        Resource(id="2", display_name="Floor 2"),
        Resource(id="3", display_name="Floor 3"),
    ],
    ResourceKind.SERBAGUNA: [
        Resource(id="1", display_name="Area Meeting A"),
        Resource(id="2", display_name="Area Meeting B"),
        Resource(id="3", display_name="Area Meeting C"),
        Resource(id="4", display_name="Area Meeting D"),
    ],
    ResourceKind.KITCHEN: [
        Resource(id="1", display_name="Kompor Gas"),
        Resource(id="2", display_name="Microwave"),
        Resource(id="3", display_name="Oven"),
        Resource(id="4", display_name="Kulkas"),
        Resource(id="5", display_name="Blender"),
        Resource(id="6", display_name="Rice Cooker"),
    ],
    ResourceKind.WASHING_MACHINE_WOMEN: list(_WASHING_MACHINES),
    ResourceKind.WASHING_MACHINE_MEN: list(_WASHING_MACHINES),
}
