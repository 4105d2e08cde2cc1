# room_calendar/services/calendar_view.py
from __future__ import annotations

import calendar
import logging
from datetime import date as date_type, timedelta
from typing import Dict, List, Optional

from dateutil.relativedelta import relativedelta

from room_calendar.schemas.booking import Department, Occurrence
from room_calendar.schemas.calendar import (
    DayView,
    DepartmentLegendEntry,
    MonthCell,
    MonthView,
)
from room_calendar.services.booking_api_client import BookingApiClient
from room_calendar.services.calendar_aggregator import group_by_date, slots_for_day
from room_calendar.services.recurrence_expander import occurrences_in_range
from room_calendar.services.room_directory import RoomDirectory, build_booking_records

logger = logging.getLogger(__name__)

GRID_CELLS = 42

# Month padding and prev/next navigation step one month or one day past the
# viewed date, so the outermost years of `datetime.date` cannot be viewed.
MIN_YEAR = 2
MAX_YEAR = 9998

DEPARTMENT_COLORS: Dict[Department, str] = {
    Department.ASITE: "bg-purple-200",
    Department.WSGSB: "bg-green-200",
    Department.SZGSDM: "bg-yellow-200",
    Department.SEELL: "bg-blue-200",
    Department.OTHER_UNITS: "bg-orange-200",
    Department.EXTERNAL: "bg-pink-200",
}
DEFAULT_DEPARTMENT_COLOR = "bg-gray-200"


def department_color(department: Department) -> str:
    return DEPARTMENT_COLORS.get(department, DEFAULT_DEPARTMENT_COLOR)


def department_legend() -> List[DepartmentLegendEntry]:
    return [
        DepartmentLegendEntry(department=dept.value, color=color)
        for dept, color in DEPARTMENT_COLORS.items()
    ]


def is_supported_date(day: date_type) -> bool:
    return MIN_YEAR <= day.year <= MAX_YEAR


def _check_supported_year(year: int) -> None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValueError(
            f"year {year} is outside the supported calendar range {MIN_YEAR}..{MAX_YEAR}"
        )


def month_range(year: int, month: int) -> tuple[date_type, date_type]:
    """
    Inclusive view range covering the whole month.
    """
    days_in_month = calendar.monthrange(year, month)[1]
    return date_type(year, month, 1), date_type(year, month, days_in_month)


def shift_month(first_of_month: date_type, months: int) -> date_type:
    return first_of_month.replace(day=1) + relativedelta(months=months)


def booking_count_label(count: int) -> str:
    if count == 0:
        return ""
    return f"{count} {'booking' if count == 1 else 'bookings'}"


def build_month_cells(
    year: int,
    month: int,
    bookings_by_date: Dict[str, List[Occurrence]],
    today: date_type,
    preview_limit: int = 3,
) -> List[MonthCell]:
    """
    Build the 6x7 month grid, Sunday first.

    Leading cells show the tail of the previous month, trailing cells the
    head of the next month; neither carries bookings.
    """
    first, last = month_range(year, month)
    # date.weekday() is Monday=0; the grid starts on Sunday.
    lead = (first.weekday() + 1) % 7

    cells: List[MonthCell] = []

    for offset in range(lead, 0, -1):
        padding_date = first - timedelta(days=offset)
        cells.append(
            MonthCell(
                day=padding_date.day,
                date=padding_date,
                in_month=False,
                is_today=padding_date == today,
            )
        )

    current = first
    while current <= last:
        day_bookings = bookings_by_date.get(current.isoformat(), [])
        cells.append(
            MonthCell(
                day=current.day,
                date=current,
                in_month=True,
                is_today=current == today,
                booking_count=len(day_bookings),
                booking_count_label=booking_count_label(len(day_bookings)),
                preview=day_bookings[:preview_limit],
            )
        )
        current += timedelta(days=1)

    trailing = last + timedelta(days=1)
    while len(cells) < GRID_CELLS:
        cells.append(
            MonthCell(
                day=trailing.day,
                date=trailing,
                in_month=False,
                is_today=trailing == today,
            )
        )
        trailing += timedelta(days=1)

    return cells


def build_month_view(
    year: int,
    month: int,
    occurrences: List[Occurrence],
    today: Optional[date_type] = None,
    preview_limit: int = 3,
) -> MonthView:
    """
    Assemble the month payload from already expanded occurrences.

    Raises ValueError for years outside MIN_YEAR..MAX_YEAR.
    """
    _check_supported_year(year)
    if today is None:
        today = date_type.today()

    first, last = month_range(year, month)
    bookings_by_date = group_by_date(occurrences)

    return MonthView(
        year=year,
        month=month,
        month_name=calendar.month_name[month],
        range_start=first,
        range_end=last,
        previous_month=shift_month(first, -1),
        next_month=shift_month(first, 1),
        cells=build_month_cells(year, month, bookings_by_date, today, preview_limit),
        bookings_by_date=bookings_by_date,
        legend=department_legend(),
    )


def build_day_view(day: date_type, occurrences: List[Occurrence]) -> DayView:
    """
    Assemble the single-day payload.

    `occurrences` may span several days; only those on `day` are kept.
    Raises ValueError for dates outside MIN_YEAR..MAX_YEAR.
    """
    _check_supported_year(day.year)
    day_occurrences = [occ for occ in occurrences if occ.date == day]
    return DayView(
        date=day,
        weekday=calendar.day_name[day.weekday()],
        booking_count=len(day_occurrences),
        previous_day=day - timedelta(days=1),
        next_day=day + timedelta(days=1),
        slots=slots_for_day(day_occurrences),
    )


async def load_month_occurrences(
    client: BookingApiClient,
    year: int,
    month: int,
) -> List[Occurrence]:
    """
    Fetch a fresh snapshot for the month and expand it into occurrences.

    Steps
    -----
    1) Fetch bookings for the month and the room catalogue concurrently.
    2) Resolve room/building names and validate the booking rows.
    3) Expand recurring bookings over the month's view range.
    """
    range_start, range_end = month_range(year, month)
    raw_bookings, rooms = await client.fetch_month_snapshot(range_start, range_end)

    directory = RoomDirectory.from_rooms(rooms)
    records = build_booking_records(raw_bookings, directory)
    logger.info(
        "Loaded %d bookings and %d rooms for %04d-%02d",
        len(records),
        len(rooms),
        year,
        month,
    )
    return occurrences_in_range(records, range_start, range_end)
