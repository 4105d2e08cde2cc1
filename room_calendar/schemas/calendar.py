# room_calendar/schemas/calendar.py
from datetime import date as date_type

from pydantic import BaseModel, Field

from room_calendar.schemas.booking import Occurrence


class TimeSlot(BaseModel):
    """
    A distinct displayed time range in the day view together with the
    occurrences that fall into it.
    """

    start: str = Field(..., description="Formatted start label.", examples=["9:00 AM"])
    end: str = Field(..., description="Formatted end label.", examples=["9:30 AM"])
    label: str = Field(
        ...,
        description="Combined slot label used as the row heading.",
        examples=["9:00 AM - 9:30 AM"],
    )
    bookings: list[Occurrence] = Field(
        default_factory=list,
        description="Occurrences whose formatted start and end match this slot.",
    )


class DepartmentLegendEntry(BaseModel):
    """
    One entry of the department colour legend shown above the month grid.
    """

    department: str = Field(..., examples=["ASITE"])
    color: str = Field(..., examples=["bg-purple-200"])


class MonthCell(BaseModel):
    """
    One cell of the 6x7 month grid.

    Leading and trailing cells belong to the adjacent months and never carry
    bookings.
    """

    day: int = Field(..., description="Day of month shown in the cell.", examples=[5])
    date: date_type = Field(..., description="Calendar date of the cell.", examples=["2024-03-05"])
    in_month: bool = Field(..., description="False for padding cells of adjacent months.")
    is_today: bool = Field(False, description="True for the server's current date.")
    booking_count: int = Field(0, description="Number of occurrences on this date.")
    booking_count_label: str = Field(
        "",
        description="Human readable count, e.g. '1 booking' or '3 bookings'.",
        examples=["2 bookings"],
    )
    preview: list[Occurrence] = Field(
        default_factory=list,
        description="First few occurrences of the day, in arrival order.",
    )


class MonthView(BaseModel):
    """
    Month calendar payload: view range, grid cells and day-keyed grouping.
    """

    year: int = Field(..., examples=[2024])
    month: int = Field(..., ge=1, le=12, examples=[3])
    month_name: str = Field(..., examples=["March"])
    range_start: date_type = Field(..., description="First day of the month (inclusive).")
    range_end: date_type = Field(..., description="Last day of the month (inclusive).")
    previous_month: date_type = Field(..., description="First day of the previous month.")
    next_month: date_type = Field(..., description="First day of the next month.")
    cells: list[MonthCell] = Field(..., description="42 grid cells, Sunday first.")
    bookings_by_date: dict[str, list[Occurrence]] = Field(
        ...,
        description="Occurrences grouped by ISO date string.",
    )
    legend: list[DepartmentLegendEntry] = Field(default_factory=list)


class DayView(BaseModel):
    """
    Single-day schedule payload with bookings grouped into time slots.
    """

    date: date_type = Field(..., examples=["2024-03-05"])
    weekday: str = Field(..., examples=["Tuesday"])
    booking_count: int = Field(..., examples=[2])
    previous_day: date_type
    next_day: date_type
    slots: list[TimeSlot] = Field(default_factory=list)
