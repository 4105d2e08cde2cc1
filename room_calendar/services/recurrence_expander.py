# room_calendar/services/recurrence_expander.py
from __future__ import annotations

import logging
from datetime import date as date_type, timedelta
from typing import Iterable, Iterator, List, Optional

from dateutil.relativedelta import relativedelta

from room_calendar.schemas.booking import (
    BookingRecord,
    BookingStatus,
    Occurrence,
    Recurrence,
)

logger = logging.getLogger(__name__)

# Bookings in these states never reach the calendar.
HIDDEN_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.DECLINED})


def _nth_series_date(anchor: date_type, cadence: Recurrence, n: int) -> date_type:
    """
    Date of the n-th occurrence (0-based) of a series anchored at `anchor`.

    Monthly steps are computed from the anchor, so a day-of-month that does
    not exist in a target month is clamped to that month's last day without
    drifting later occurrences (Jan 31 -> Feb 29 -> Mar 31).
    """
    if cadence is Recurrence.DAILY:
        return anchor + timedelta(days=n)
    if cadence is Recurrence.WEEKLY:
        return anchor + timedelta(weeks=n)
    if cadence is Recurrence.MONTHLY:
        return anchor + relativedelta(months=n)
    raise ValueError(f"unsupported cadence: {cadence!r}")


def _next_series_date(
    anchor: date_type,
    cadence: Recurrence,
    n: int,
) -> Optional[date_type]:
    """
    Like `_nth_series_date`, but None once the series runs past `date.max`.
    """
    try:
        return _nth_series_date(anchor, cadence, n)
    except (OverflowError, ValueError):
        return None


def _first_index_on_or_after(
    anchor: date_type,
    cadence: Recurrence,
    target: date_type,
) -> int:
    """
    Smallest n such that the n-th series date is >= target.
    """
    if target <= anchor:
        return 0

    days = (target - anchor).days
    if cadence is Recurrence.DAILY:
        return days
    if cadence is Recurrence.WEEKLY:
        return -(-days // 7)

    n = (target.year - anchor.year) * 12 + (target.month - anchor.month)
    if _nth_series_date(anchor, cadence, n) < target:
        n += 1
    return n


def expand_series(
    booking: BookingRecord,
    range_start: date_type,
    range_end: date_type,
) -> Iterator[Occurrence]:
    """
    Yield the occurrences of one recurring booking inside the inclusive
    view range [range_start, range_end], in date order.

    Rules
    -----
    - An absent recurrence end date is clamped to `range_end`.
    - A series starting after `range_end` or ending before `range_start`
      yields nothing.
    - Occurrences stay on the series' own cadence (same weekday for weekly,
      same day-of-month for monthly), starting from the first series date
      on or after max(series start, range_start).
    - Both bounds are inclusive.
    """
    cadence = booking.recurring
    series_start = booking.date
    effective_end = booking.recurrence_end_date or range_end

    if series_start > range_end or effective_end < range_start:
        return

    last = min(effective_end, range_end)
    n = _first_index_on_or_after(series_start, cadence, max(series_start, range_start))
    cursor = _next_series_date(series_start, cadence, n)

    while cursor is not None and cursor <= last:
        yield Occurrence.from_booking(booking, on_date=cursor, is_recurring=True)
        if cursor == last:
            break
        n += 1
        cursor = _next_series_date(series_start, cadence, n)


def occurrences_in_range(
    bookings: Iterable[BookingRecord],
    range_start: date_type,
    range_end: date_type,
) -> List[Occurrence]:
    """
    Project bookings onto concrete dates for the given view range.

    Steps
    -----
    1) Drop bookings whose status is pending or declined.
    2) One-off bookings (and bookings with an unrecognised cadence) yield a
       single occurrence on their own date.
    3) Recurring bookings are expanded with `expand_series`.

    The result is recomputed from scratch on every call. Callers must not
    rely on its order.
    """
    occurrences: List[Occurrence] = []
    seen = 0

    for booking in bookings:
        seen += 1
        if booking.status in HIDDEN_STATUSES:
            continue

        if not booking.is_series:
            if booking.recurring is Recurrence.UNKNOWN:
                logger.debug(
                    "Booking %s has an unknown cadence; treating as one-off", booking.id
                )
            occurrences.append(
                Occurrence.from_booking(booking, on_date=booking.date, is_recurring=False)
            )
            continue

        occurrences.extend(expand_series(booking, range_start, range_end))

    logger.debug(
        "Expanded %d bookings into %d occurrences for %s..%s",
        seen,
        len(occurrences),
        range_start.isoformat(),
        range_end.isoformat(),
    )
    return occurrences
