from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from facility_booking.application.ports.session_store import SessionStorePort


class JsonSessionStore(SessionStorePort):
    """Keeps the bearer credential and user id in a small JSON file between runs."""

    def __init__(self, path: str = "./data/session.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            self._logger.warning("Session file unreadable, ignoring it", extra={"error": str(e)})
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, Any]) -> None:
        """Write atomically through a temp file."""
        temp_path = self._path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def get_credential(self) -> str | None:
        with self._lock:
            return self._load().get("token") or None

    def get_user_id(self) -> str | None:
        with self._lock:
            return self._load().get("user_id") or None

    def save(self, credential: str, user_id: str | None = None) -> None:
        with self._lock:
            self._save({"token": credential, "user_id": user_id, "version": 1})

    def clear(self) -> None:
        with self._lock:
            if self._path.exists():
                self._path.unlink()
