"""Date, clock and duration helpers for task fields."""

import re
from datetime import date, datetime, timedelta
from pathlib import PurePosixPath

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
PATH_DATE = re.compile(r"(\d{4}-\d{2}-\d{2})")
DURATION = re.compile(
    r"^\s*(?:(\d+)\s*h(?:ours?|rs?)?)?\s*,?\s*(?:(\d+)\s*m(?:in(?:ute)?s?)?)?\s*$",
    re.IGNORECASE,
)
CLOCK_DURATION = re.compile(r"^\s*(\d+):(\d{2})\s*$")


def is_date_iso(value: str) -> bool:
    """Check whether an ISO string is a pure calendar date (no clock time)."""
    return bool(ISO_DATE.match(value))


def parse_iso(value: str) -> date | datetime | None:
    """Parse an ISO date or date-time string.

    Returns a ``date`` for date-only strings, a ``datetime`` otherwise,
    and None when the string is not a valid ISO value.
    """
    value = value.strip()
    try:
        if is_date_iso(value):
            return date.fromisoformat(value)
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def is_valid_scheduled(value: str) -> bool:
    return parse_iso(value) is not None


def format_scheduled(value: date, is_date: bool) -> str:
    """Format a scheduled value, dropping the clock time for pure dates."""
    if is_date or not isinstance(value, datetime):
        day = value.date() if isinstance(value, datetime) else value
        return day.isoformat()
    return value.strftime("%Y-%m-%dT%H:%M")


def to_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def parse_date_from_path(path: str | None) -> date | None:
    """Get the date a daily note is named after.

    Daily notes are named like ``2024-03-01 Fri.md``; any note whose file
    name carries a ``YYYY-MM-DD`` stamp is treated as belonging to that day.
    """
    if not path:
        return None
    match = PATH_DATE.search(PurePosixPath(path).stem)
    if not match:
        return None
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        return None


def parse_clock(value: str | None) -> tuple[int, int] | None:
    """Parse ``H``, ``HH:MM`` or ``H:M`` into (hour, minute).

    Non-numeric or out-of-range components mean there is no clock time.
    """
    if not value:
        return None
    hour_str, _, minute_str = value.strip().partition(":")
    if not hour_str.isdigit() or (minute_str and not minute_str.isdigit()):
        return None
    hour = int(hour_str)
    minute = int(minute_str) if minute_str else 0
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def parse_duration(value: str | None) -> timedelta | None:
    """Parse durations such as ``1h30m``, ``45m``, ``2 hours`` or ``1:30``."""
    if not value:
        return None
    clock = CLOCK_DURATION.match(value)
    if clock:
        return timedelta(hours=int(clock.group(1)), minutes=int(clock.group(2)))
    match = DURATION.match(value)
    if not match or not any(match.groups()):
        return None
    hours, minutes = match.groups()
    return timedelta(hours=int(hours or 0), minutes=int(minutes or 0))


def clock_text(value: datetime, pad_hour: bool = True) -> str:
    """Format a clock time as ``HH:MM`` (or ``H:MM`` without hour padding)."""
    if pad_hour:
        return value.strftime("%H:%M")
    return f"{value.hour}:{value.minute:02d}"
