# room_calendar/schemas/booking.py
from __future__ import annotations

from datetime import date as date_type, datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class BookingStatus(str, Enum):
    """
    Approval state of a booking as reported by the booking API.

    UNKNOWN absorbs any value the API may add later.
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "BookingStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.UNKNOWN


class Recurrence(str, Enum):
    """
    Recurrence cadence of a booking series.

    A booking that does not recur has `recurring=None` rather than a member
    of this enum. UNKNOWN is treated as non-recurring by the expander.
    """

    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "Recurrence | None":
        if isinstance(value, cls):
            return value
        text = str(value or "").strip()
        if not text or text.lower() in ("no", "none"):
            return None
        for member in cls:
            if member.value.lower() == text.lower():
                return member
        return cls.UNKNOWN


class Department(str, Enum):
    """
    Departments that own bookings. Used for colour coding in the month view.
    """

    ASITE = "ASITE"
    WSGSB = "WSGSB"
    SZGSDM = "SZGSDM"
    SEELL = "SEELL"
    OTHER_UNITS = "Other Units"
    EXTERNAL = "External"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "Department":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip())
        except ValueError:
            return cls.UNKNOWN


def parse_calendar_date(value: Any) -> date_type | None:
    """
    Parse a calendar date from the shapes the booking API emits.

    Accepts `date`/`datetime` objects, `YYYY-MM-DD` strings and ISO datetime
    strings (only the date part is kept). Returns None when parsing fails.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date_type):
        return value
    if not isinstance(value, str):
        return None
    try:
        return date_type.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


class BookingRecord(BaseModel):
    """
    A room booking as returned by the booking API, with room and building
    display names already resolved.

    Field aliases accept the API's camelCase keys; snake_case names are
    accepted as well.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | None = Field(
        None,
        validation_alias=AliasChoices("id", "bookingId"),
        description="Identifier of the booking in the upstream API.",
    )
    title: str = Field("", description="Free-text title of the booking.")
    department: Department = Field(
        Department.UNKNOWN,
        description="Owning department; unknown values map to 'Unknown'.",
    )
    status: BookingStatus = Field(
        BookingStatus.UNKNOWN,
        description="Approval state of the booking.",
    )
    date: date_type = Field(
        ...,
        description="Booking date, or the series anchor date for recurring bookings.",
        examples=["2024-03-05"],
    )
    start_time: str = Field(
        "",
        validation_alias=AliasChoices("start_time", "startTime"),
        description="Raw start timestamp as stored upstream.",
        examples=["2024-03-05T14:00:00Z"],
    )
    end_time: str = Field(
        "",
        validation_alias=AliasChoices("end_time", "endTime"),
        description="Raw end timestamp as stored upstream.",
        examples=["2024-03-05T15:00:00Z"],
    )
    recurring: Recurrence | None = Field(
        None,
        description="Recurrence cadence; None for one-off bookings.",
    )
    recurrence_end_date: date_type | None = Field(
        None,
        validation_alias=AliasChoices("recurrence_end_date", "recurrenceEndDate"),
        description="Inclusive last date of the series; None means open-ended.",
    )
    room_id: str | None = Field(
        None,
        validation_alias=AliasChoices("room_id", "roomId"),
    )
    room_name: str = Field(
        "",
        validation_alias=AliasChoices("room_name", "roomName"),
    )
    building_name: str = Field(
        "",
        validation_alias=AliasChoices("building_name", "buildingName", "building"),
    )
    first_name: str = Field(
        "",
        validation_alias=AliasChoices("first_name", "firstName"),
    )
    last_name: str = Field(
        "",
        validation_alias=AliasChoices("last_name", "lastName"),
    )

    @field_validator("id", "room_id", mode="before")
    @classmethod
    def _stringify_identifier(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return str(value)

    @field_validator(
        "title",
        "start_time",
        "end_time",
        "room_name",
        "building_name",
        "first_name",
        "last_name",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("department", mode="before")
    @classmethod
    def _parse_department(cls, value: Any) -> Department:
        return Department.parse(value)

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> BookingStatus:
        return BookingStatus.parse(value)

    @field_validator("recurring", mode="before")
    @classmethod
    def _parse_recurring(cls, value: Any) -> Recurrence | None:
        return Recurrence.parse(value)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> date_type:
        parsed = parse_calendar_date(value)
        if parsed is None:
            raise ValueError(f"invalid booking date: {value!r}")
        return parsed

    @field_validator("recurrence_end_date", mode="before")
    @classmethod
    def _parse_recurrence_end(cls, value: Any) -> date_type | None:
        # Malformed end dates mean the series is open-ended.
        return parse_calendar_date(value)

    @property
    def is_series(self) -> bool:
        """True when the booking recurs with a known cadence."""
        return self.recurring is not None and self.recurring is not Recurrence.UNKNOWN


class Occurrence(BookingRecord):
    """
    One concrete calendar-dated instance of a booking, either the booking
    itself or a date generated from its recurring series.
    """

    is_recurring: bool = Field(
        False,
        description="True when this occurrence was generated from a recurring series.",
    )

    @classmethod
    def from_booking(
        cls,
        booking: BookingRecord,
        on_date: date_type,
        is_recurring: bool,
    ) -> "Occurrence":
        data = booking.model_dump()
        data["date"] = on_date
        data["is_recurring"] = is_recurring
        return cls(**data)
