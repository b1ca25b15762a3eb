from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def format_instant(instant: datetime) -> str:
    """Wire format used by the booking backend: UTC, millisecond precision, "Z" suffix."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    utc = instant.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def parse_instant(value: str) -> datetime:
    """Parse an ISO instant. Naive values are read as UTC."""
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class CivilClock:
    """
    Wall-clock arithmetic pinned to one fixed UTC offset.

    Every slot boundary is derived from a civil date and hour under this offset,
    so the same slot maps to the same instant wherever the caller runs.
    """

    def __init__(self, utc_offset_hours: int = 7, now: Callable[[], datetime] | None = None) -> None:
        self._tz = timezone(timedelta(hours=utc_offset_hours))
        self._now = now or (lambda: datetime.now(timezone.utc))

    @property
    def tzinfo(self) -> timezone:
        return self._tz

    def now(self) -> datetime:
        current = self._now()
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        return current.astimezone(self._tz)

    def today(self) -> str:
        return self.now().date().isoformat()

    def parse_date(self, value: str | None) -> date | None:
        if not isinstance(value, str) or not DATE_PATTERN.match(value):
            return None
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None

    def normalize_date(self, value: str | None) -> str:
        """Return a valid YYYY-MM-DD string, degrading malformed input to today."""
        parsed = self.parse_date(value)
        return parsed.isoformat() if parsed else self.today()

    def to_instant(self, date_string: str, hour: int) -> datetime:
        """
        Absolute instant of `hour`:00 on the civil date.
        hour == 24 yields midnight of the following day.
        """
        day = self.parse_date(date_string) or self.now().date()
        return datetime.combine(day, time(0), tzinfo=self._tz) + timedelta(hours=hour)

    def to_instant_string(self, date_string: str, hour: int) -> str:
        return format_instant(self.to_instant(date_string, hour))

    def to_civil(self, instant: datetime | str) -> datetime:
        if isinstance(instant, str):
            instant = parse_instant(instant)
        elif instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(self._tz)

    def civil_date_of(self, instant: datetime | str) -> str:
        return self.to_civil(instant).date().isoformat()

    def civil_hour_of(self, instant: datetime | str) -> int:
        return self.to_civil(instant).hour

    def weekday_of(self, date_string: str) -> int:
        return (self.parse_date(date_string) or self.now().date()).weekday()

    def shift_date(self, date_string: str, days: int) -> str:
        day = self.parse_date(date_string) or self.now().date()
        return (day + timedelta(days=days)).isoformat()

    def is_today(self, date_string: str) -> bool:
        return date_string == self.today()

    def format_instant(self, instant: datetime) -> str:
        return format_instant(instant)
