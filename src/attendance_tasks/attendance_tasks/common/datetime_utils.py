from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (the form stored in the database).

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


def parse_iso_date(value: str) -> date:
    """Parse an ISO-8601 date (YYYY-MM-DD) or datetime string into a date.

    Datetimes with an offset (including a trailing "Z") are taken in UTC.
    """
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    if value[-1:] in ("Z", "z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def parse_duration(value: str | int) -> timedelta:
    """Parse lifetimes like '7d', '12h', '30m', '45s' or a plain number of seconds."""
    if isinstance(value, int):
        return timedelta(seconds=value)
    m = _DURATION_RE.match(str(value))
    if not m:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = m.groups()
    return timedelta(seconds=int(amount) * _DURATION_UNITS[unit])
