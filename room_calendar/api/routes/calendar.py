# room_calendar/api/routes/calendar.py
from datetime import date as date_type
from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Query

from room_calendar.core.config import get_settings
from room_calendar.schemas.calendar import DayView, MonthView
from room_calendar.services.booking_api_client import (
    BookingApiClient,
    BookingApiError,
    get_booking_api_client,
)
from room_calendar.services.calendar_view import (
    MAX_YEAR,
    MIN_YEAR,
    build_day_view,
    build_month_view,
    is_supported_date,
    load_month_occurrences,
)

router = APIRouter(
    prefix="/calendar",
    tags=["Calendar"],
)


@router.get(
    "/month",
    response_model=MonthView,
    status_code=HTTPStatus.OK,
    summary="Get the month calendar with recurring bookings expanded",
    description=(
        "Fetch bookings and rooms for the requested month from the booking API, "
        "expand recurring bookings over the month and return the 42-cell grid.\n\n"
        "Pending and declined bookings are not shown. Recurring series are "
        "clamped to the month, including open-ended ones.\n\n"
        "The response also contains the bookings grouped by ISO date and the "
        "department colour legend."
    ),
    responses={
        502: {"description": "The booking API failed or returned an unexpected payload."},
        422: {"description": "Validation error (e.g. month outside 1..12)."},
    },
)
async def get_month_view(
    year: int = Query(..., ge=MIN_YEAR, le=MAX_YEAR, description="Calendar year.", examples=[2024]),
    month: int = Query(..., ge=1, le=12, description="Calendar month (1-12).", examples=[3]),
    client: BookingApiClient = Depends(get_booking_api_client),
) -> MonthView:
    """
    Build the month view for (year, month).
    """
    try:
        occurrences = await load_month_occurrences(client, year, month)
    except BookingApiError as exc:
        raise HTTPException(status_code=HTTPStatus.BAD_GATEWAY, detail=str(exc)) from exc

    return build_month_view(
        year,
        month,
        occurrences,
        preview_limit=get_settings().MONTH_PREVIEW_LIMIT,
    )


@router.get(
    "/day",
    response_model=DayView,
    status_code=HTTPStatus.OK,
    summary="Get the schedule of a single day grouped into time slots",
    description=(
        "Return the bookings of one date grouped by displayed time range "
        "(`h:mm AM - h:mm PM`), ordered by start time.\n\n"
        "Recurring bookings are expanded over the month containing the date."
    ),
    responses={
        502: {"description": "The booking API failed or returned an unexpected payload."},
        422: {"description": "Validation error (e.g. malformed or out-of-range date)."},
    },
)
async def get_day_view(
    day: date_type = Query(
        ...,
        alias="date",
        description="Calendar date in ISO format (YYYY-MM-DD).",
        examples=["2024-03-05"],
    ),
    client: BookingApiClient = Depends(get_booking_api_client),
) -> DayView:
    """
    Build the day view for the given date.
    """
    if not is_supported_date(day):
        raise HTTPException(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            detail=f"date must fall within years {MIN_YEAR}..{MAX_YEAR}",
        )

    try:
        occurrences = await load_month_occurrences(client, day.year, day.month)
    except BookingApiError as exc:
        raise HTTPException(status_code=HTTPStatus.BAD_GATEWAY, detail=str(exc)) from exc

    return build_day_view(day, occurrences)
