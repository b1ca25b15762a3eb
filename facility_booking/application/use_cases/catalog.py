from __future__ import annotations

import logging
from dataclasses import dataclass

from facility_booking.application.exceptions import AuthRequired, BookingServiceError
from facility_booking.application.ports.resource_catalog import ResourceCatalogPort
from facility_booking.application.utils.availability_merger import Advisory, advisory_message
from facility_booking.domain.entities.resource import Resource, ResourceKind

CATALOG_SUBJECTS = {
    ResourceKind.COMMUNAL: "floors",
    ResourceKind.SERBAGUNA: "areas",
    ResourceKind.KITCHEN: "facilities",
    ResourceKind.WASHING_MACHINE_WOMEN: "machines",
    ResourceKind.WASHING_MACHINE_MEN: "machines",
}


@dataclass(frozen=True)
class CatalogResult:
    kind: ResourceKind
    resources: list[Resource]
    advisory: Advisory | None = None

    @property
    def advisory_message(self) -> str | None:
        return advisory_message(self.advisory, CATALOG_SUBJECTS.get(self.kind, "resources"))


class ResourceCatalogUseCase:
    """Resource lists for the secondary selectors, falling back to a built-in catalog."""

    def __init__(self, catalog: ResourceCatalogPort, defaults: dict[ResourceKind, list[Resource]]) -> None:
        self._catalog = catalog
        self._defaults = defaults
        self._logger = logging.getLogger(__name__)

    def defaults_for(self, kind: ResourceKind) -> list[Resource]:
        return list(self._defaults.get(kind, []))

    async def list_resources(self, kind: ResourceKind, credential: str | None) -> CatalogResult:
        if not kind.requires_resource:
            return CatalogResult(kind=kind, resources=[])

        if not credential:
            self._logger.warning("No credential, using default catalog", extra={"kind": kind.value})
            return CatalogResult(kind=kind, resources=self.defaults_for(kind), advisory=Advisory.UNAUTHENTICATED)

        try:
            resources = await self._catalog.list_resources(kind, credential)
        except AuthRequired as e:
            self._logger.warning("Catalog requires login, using defaults", extra={"kind": kind.value, "error": str(e)})
            return CatalogResult(kind=kind, resources=self.defaults_for(kind), advisory=Advisory.UNAUTHENTICATED)
        except BookingServiceError as e:
            self._logger.warning("Catalog fetch failed, using defaults", extra={"kind": kind.value, "error": str(e)})
            return CatalogResult(kind=kind, resources=self.defaults_for(kind), advisory=Advisory.UNAVAILABLE)

        if not resources:
            return CatalogResult(kind=kind, resources=self.defaults_for(kind), advisory=Advisory.UNAVAILABLE)
        return CatalogResult(kind=kind, resources=resources)
