from __future__ import annotations

from facility_booking.application.ports.session_store import SessionStorePort


class MemorySessionStore(SessionStorePort):
    def __init__(self, credential: str | None = None, user_id: str | None = None) -> None:
        self._credential = credential
        self._user_id = user_id

    def get_credential(self) -> str | None:
        return self._credential

    def get_user_id(self) -> str | None:
        return self._user_id

    def save(self, credential: str, user_id: str | None = None) -> None:
        self._credential = credential
        self._user_id = user_id

    def clear(self) -> None:
        self._credential = None
        self._user_id = None
