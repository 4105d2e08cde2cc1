# room_calendar/services/time_formatter.py
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

_AM_PM_RE = re.compile(r"am|pm", re.IGNORECASE)
_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_LABEL_RE = re.compile(r"(\d+):(\d+)\s?(AM|PM)", re.IGNORECASE)


def _twelve_hour(hour: int, minute: int) -> str:
    """
    Render an hour/minute pair as `h:mm AM/PM`.

    0 -> 12 AM, 12 -> 12 PM, 13..23 -> hour-12 PM, 1..11 -> hour AM.
    """
    suffix = "AM"
    if hour == 0:
        hour = 12
    elif hour == 12:
        suffix = "PM"
    elif hour > 12:
        hour -= 12
        suffix = "PM"
    return f"{hour}:{minute:02d} {suffix}"


def _parse_iso_utc(value: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 datetime string and normalize to UTC.

    Naive values are taken as UTC. Returns None if parsing fails.
    """
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_time(value: Optional[str]) -> str:
    """
    Normalize a stored timestamp to a 12-hour clock label (`h:mm AM/PM`).

    Accepted inputs
    ---------------
    - ISO-8601 datetimes containing `T`, rendered in UTC so the same stored
      value always reads the same regardless of the viewer's zone.
    - Bare `HH:mm` or `HH:mm:ss` clock strings.
    - Labels that already carry AM/PM, returned as-is.

    Anything else is returned unchanged; this function never raises.
    """
    if not value:
        return ""

    if _AM_PM_RE.search(value):
        return value

    if "T" in value:
        dt = _parse_iso_utc(value)
        if dt is not None:
            return _twelve_hour(dt.hour, dt.minute)

    match = _CLOCK_RE.match(value)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2))
        return _twelve_hour(hour, minute)

    return value


def minutes_since_midnight(label: str) -> Optional[int]:
    """
    Minutes since midnight for a `h:mm AM/PM` label, or None if the label
    does not have that shape.
    """
    match = _LABEL_RE.search(label or "")
    if not match:
        return None

    hour = int(match.group(1)) % 12
    if match.group(3).upper() == "PM":
        hour += 12
    return hour * 60 + int(match.group(2))
