# room_calendar/api/routes/health.py
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from room_calendar.core.config import get_settings


router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """
    Response schema for the health check endpoint.
    """

    status: str = Field(
        ...,
        description="Overall health status of the Room Calendar service.",
        examples=["ok"],
    )
    app_name: str = Field(
        ...,
        description="Human-friendly name of the running application.",
        examples=["Room Calendar"],
    )
    environment: str = Field(
        ...,
        description="Current deployment environment (local/dev/stage/prod).",
        examples=["local"],
    )
    booking_api_base_url: str = Field(
        ...,
        description="Booking API the calendar reads from.",
        examples=["http://localhost:5000/api"],
    )
    timestamp_utc: datetime = Field(
        ...,
        description="Server-side timestamp (UTC) at which this health check was generated.",
        examples=["2024-03-01T10:30:00Z"],
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check for the Room Calendar service",
    description=(
        "Lightweight endpoint to verify that the calendar service is up and "
        "responding.\n\n"
        "It does not call the booking API, so it stays green while the "
        "upstream is degraded."
    ),
)
async def health_check() -> HealthResponse:
    """
    Returns the current health status of the service.
    """
    settings = get_settings()
    return HealthResponse(
        status="ok",
        app_name=settings.APP_NAME,
        environment=settings.APP_ENV,
        booking_api_base_url=settings.BOOKING_API_BASE_URL,
        timestamp_utc=datetime.now(tz=timezone.utc),
    )
