# room_calendar/services/calendar_aggregator.py
from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List

from room_calendar.schemas.booking import Occurrence
from room_calendar.schemas.calendar import TimeSlot
from room_calendar.services.time_formatter import format_time, minutes_since_midnight


def group_by_date(occurrences: Iterable[Occurrence]) -> Dict[str, List[Occurrence]]:
    """
    Group occurrences by their ISO calendar date.

    Every occurrence ends up in exactly one group, and each group keeps the
    order in which occurrences appeared in the input.
    """
    grouped: Dict[str, List[Occurrence]] = defaultdict(list)
    for occurrence in occurrences:
        grouped[occurrence.date.isoformat()].append(occurrence)
    return dict(grouped)


def slot_label(start: str, end: str) -> str:
    return f"{start} - {end}"


def _slot_sort_key(start_label: str) -> tuple[int, int]:
    # Labels that cannot be parsed go last and keep their relative order.
    minutes = minutes_since_midnight(start_label)
    if minutes is None:
        return (1, 0)
    return (0, minutes)


def slots_for_day(occurrences: Iterable[Occurrence]) -> List[TimeSlot]:
    """
    Resolve the day-view time slots for the occurrences of one date.

    Rules
    -----
    - Start and end are formatted to 12-hour labels; occurrences with the
      same formatted pair share a slot, even if their raw timestamps differ
      within the displayed minute.
    - Slots are ordered by the true start time in minutes since midnight,
      not by label text ("9:00 AM" before "10:00 AM").
    - Malformed timestamps keep their raw text as the label and never raise.
    """
    day_occurrences = list(occurrences)

    pairs: Dict[tuple[str, str], None] = {}
    formatted: List[tuple[str, str]] = []
    for occurrence in day_occurrences:
        pair = (format_time(occurrence.start_time), format_time(occurrence.end_time))
        formatted.append(pair)
        pairs.setdefault(pair, None)

    ordered = sorted(pairs, key=lambda pair: _slot_sort_key(pair[0]))

    slots: List[TimeSlot] = []
    for start, end in ordered:
        matching = [
            occurrence
            for occurrence, pair in zip(day_occurrences, formatted)
            if pair == (start, end)
        ]
        slots.append(
            TimeSlot(
                start=start,
                end=end,
                label=slot_label(start, end),
                bookings=matching,
            )
        )
    return slots
