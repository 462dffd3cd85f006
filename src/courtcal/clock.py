"""Civil-time normalization for facility-local calendar fields.

Two encodings arrive from the booking systems:

- CourtReserve strings already hold facility-local clock digits. Program rows
  picked up a UTC marker on storage that is wrong, so any offset is stripped
  and the digits are used verbatim. Never convert these through a timezone.
- Tripleseat strings are true UTC instants and are converted with ``zoneinfo``,
  which applies daylight-saving transitions (e.g. 2026-03-08 clocks forward).
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, tzinfo
from zoneinfo import ZoneInfo

FACILITY_TIMEZONE = ZoneInfo("America/New_York")

# Trailing "Z" or numeric offset, only when it follows a clock value
_OFFSET_SUFFIX_RE = re.compile(
    r"^(?P<local>.*\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?)\s*(?:Z|[+-]\d{2}(?::?\d{2})?)$",
    re.IGNORECASE,
)
_HHMM_RE = re.compile(r"(\d{2}):(\d{2})")
_DATE_RE = re.compile(r"^\s*(\d{4}-\d{2}-\d{2})")
_AMPM_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AP]M)\s*$", re.IGNORECASE)
_24H_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def strip_offset(value: str) -> str:
    """Drop a spurious UTC marker from a local timestamp string.

    Example: "2026-02-21T13:00:00+00:00" -> "2026-02-21T13:00:00"
    """
    match = _OFFSET_SUFFIX_RE.match(value.strip())
    if match:
        return match.group("local")
    return value.strip()


def local_to_hhmm(value: str) -> str:
    """Extract the first "HH:MM" pair of a local datetime string, verbatim.

    Handles both "T" and space delimiters. Strings without a clock value
    fall back to local midnight so one bad row never aborts a bulk transform.
    """
    match = _HHMM_RE.search(value)
    if not match:
        return "00:00"
    return f"{match.group(1)}:{match.group(2)}"


def local_date(value: str) -> date | None:
    """Leading calendar date of a local datetime string, if it has one."""
    match = _DATE_RE.match(value)
    if not match:
        return None
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        return None


def parse_utc(value: str) -> datetime:
    """Parse an ISO-8601 instant. Naive values are taken as UTC.

    Raises:
        ValueError: If the string is not ISO-8601
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def utc_to_local(value: str, tz: tzinfo = FACILITY_TIMEZONE) -> tuple[date, str]:
    """Convert a UTC instant to the facility's civil date and "HH:MM".

    The date is recomputed locally too: a UTC evening can fall on the next
    local day or the previous one.
    """
    local = parse_utc(value).astimezone(tz)
    return local.date(), local.strftime("%H:%M")


def to_minutes(text: str) -> int:
    """Convert "HH:MM" (24h) or "h:MM AM/PM" to minutes from midnight.

    Example: "13:30" -> 810, "1:30 PM" -> 810

    Raises:
        ValueError: If the text matches neither form or is out of range
    """
    ampm = _AMPM_RE.match(text)
    if ampm:
        hour, minute = int(ampm.group(1)), int(ampm.group(2))
        if not 1 <= hour <= 12 or minute > 59:
            msg = f"Invalid 12-hour time: {text!r}"
            raise ValueError(msg)
        period = ampm.group(3).upper()
        if period == "AM" and hour == 12:
            hour = 0
        elif period == "PM" and hour != 12:
            hour += 12
        return hour * 60 + minute

    plain = _24H_RE.match(text)
    if plain:
        hour, minute = int(plain.group(1)), int(plain.group(2))
        if hour > 23 or minute > 59:
            msg = f"Invalid 24-hour time: {text!r}"
            raise ValueError(msg)
        return hour * 60 + minute

    msg = f"Unrecognized time format: {text!r} (expected HH:MM or h:MM AM/PM)"
    raise ValueError(msg)


def minutes_to_hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def minutes_to_ampm(minutes: int) -> str:
    """Example: 810 -> "1:30 PM", 0 -> "12:00 AM"."""
    hour, minute = divmod(minutes, 60)
    period = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {period}"


def format_duration(minutes: int) -> str:
    """Example: 45 -> "45m", 60 -> "1h", 90 -> "1h 30m"."""
    if minutes < 60:
        return f"{minutes}m"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest}m" if rest else f"{hours}h"


def facility_today(tz: tzinfo = FACILITY_TIMEZONE) -> date:
    """Today's date at the facility (not on the host running the query)."""
    return datetime.now(UTC).astimezone(tz).date()
