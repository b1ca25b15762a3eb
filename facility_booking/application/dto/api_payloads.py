from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class TimeSlotDTO(BaseModel):
    """One entry of an availability / time-slots response."""

    model_config = ConfigDict(extra="ignore")

    waktuMulai: str
    waktuBerakhir: str
    display: str | None = None
    available: bool | None = None


class BookingRecordDTO(BaseModel):
    """A booking as listed by the backend; only the fields the overviews need."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    waktuMulai: str
    waktuBerakhir: str
    lantai: str | None = None
    idArea: str | None = None
    idFasilitas: str | None = None
    keterangan: str | None = None
    penanggungJawab: dict[str, Any] | None = None
    peminjam: dict[str, Any] | None = None

    def owner_summary(self) -> str:
        person = self.penanggungJawab or self.peminjam or {}
        name = person.get("namaLengkap") or person.get("namaPanggilan")
        return str(name) if name else "Booked"

    def resource_id(self) -> str | None:
        return self.idArea or self.idFasilitas or self.lantai
