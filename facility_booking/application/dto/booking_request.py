from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from facility_booking.domain.entities.resource import ResourceKind


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class RoomBookingRequest(_WireModel):
    """Communal rooms, community workspace, multipurpose areas and the theater."""

    kind: ResourceKind = Field(exclude=True)
    responsible_id: str = Field(alias="idPenanggungJawab")
    start: str = Field(alias="waktuMulai")
    end: str = Field(alias="waktuBerakhir")
    participant_count: str = Field(alias="jumlahPengguna")
    purpose: str = Field(alias="keterangan")
    is_done: bool = Field(default=False, alias="isDone")
    floor: str | None = Field(default=None, alias="lantai")
    area_id: str | None = Field(default=None, alias="idArea")

    @property
    def resource_id(self) -> str | None:
        return self.floor or self.area_id


class KitchenBookingRequest(_WireModel):
    kind: ResourceKind = Field(default=ResourceKind.KITCHEN, exclude=True)
    facility_id: str = Field(alias="idFasilitas")
    borrower_id: str = Field(alias="idPeminjam")
    start: str = Field(alias="waktuMulai")
    end: str = Field(alias="waktuBerakhir")
    borrow_equipment: bool = Field(default=False, alias="pinjamPeralatan")

    @property
    def resource_id(self) -> str | None:
        return self.facility_id


class WashingMachineBookingRequest(_WireModel):
    kind: ResourceKind = Field(exclude=True)
    facility_id: str = Field(alias="idFasilitas")
    borrower_id: str = Field(alias="idPeminjam")
    start: str = Field(alias="waktuMulai")
    end: str = Field(alias="waktuBerakhir")

    @property
    def resource_id(self) -> str | None:
        return self.facility_id


BookingRequest = Union[RoomBookingRequest, KitchenBookingRequest, WashingMachineBookingRequest]
