from __future__ import annotations

from abc import ABC, abstractmethod

from facility_booking.domain.entities.resource import Resource, ResourceKind


class ResourceCatalogPort(ABC):
    @abstractmethod
    async def list_resources(self, kind: ResourceKind, credential: str | None) -> list[Resource]:
        """Areas, kitchen facilities, machines or floors for a resource kind."""
        raise NotImplementedError
