from __future__ import annotations

from datetime import date, datetime, time, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    A full ISO timestamp is accepted and truncated to its date part.
    """
    value = value.strip()
    if len(value) > 10 and value[10] in ("T", " "):
        value = value[:10]
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def parse_clock(value: str) -> str:
    """Normalize 'H:MM' / 'HH:MM[:SS]' into 'HH:MM'."""
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time string: {value!r}")
    return time(hour=int(parts[0]), minute=int(parts[1])).strftime("%H:%M")


def inclusive_days(start: date, end: date) -> int:
    return (end - start).days + 1


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def now_local() -> datetime:
    return datetime.now()


def clock_from_db(value) -> str:
    """MySQL TIME columns come back as ``timedelta``; expose them as 'HH:MM'."""
    if isinstance(value, timedelta):
        minutes = int(value.total_seconds()) // 60
        return f"{minutes // 60:02d}:{minutes % 60:02d}"
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return parse_clock(str(value))
