from __future__ import annotations

import re
from datetime import date, datetime, time

_HHMM = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_date_or_timestamp(value: str) -> date:
    """Calendar date from "YYYY-MM-DD" or a full ISO timestamp.

    Anything else after the date (e.g. "2025-03-10garbage") is rejected.
    """
    value = value.strip()
    if len(value) <= 10:
        return parse_iso_date(value)
    if value[10] not in "T ":
        raise ValueError(f"Invalid date string: {value!r}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value).date()


def parse_hhmm(value: str) -> time:
    """Parse a 24h "HH:MM" wall-clock string into a naive time."""
    m = _HHMM.match(value.strip())
    if not m:
        raise ValueError(f"Invalid time string: {value!r}")
    return time(hour=int(m.group(1)), minute=int(m.group(2)))


def format_hhmm(value: time | None) -> str:
    if value is None:
        return ""
    return f"{value.hour:02d}:{value.minute:02d}"


def format_12h(value: time | str | None) -> str:
    """"14:05" (or time(14, 5)) -> "2:05 PM"."""
    if isinstance(value, time):
        value = format_hhmm(value)
    if not value:
        return ""
    hours, _, minutes = value.partition(":")
    h = int(hours)
    suffix = "PM" if h >= 12 else "AM"
    return f"{h % 12 or 12}:{minutes} {suffix}"


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds")


def now_local() -> datetime:
    """Current local time.

    Wrapped so tests can patch it.
    """
    return datetime.now()
