# room_calendar/main.py
from fastapi import FastAPI

from room_calendar.api.routes import calendar, health
from room_calendar.core.config import get_settings
from room_calendar.core.logging_config import configure_logging


def create_app() -> FastAPI:
    """
    Application factory for the Room Calendar service.
    """
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Read-only calendar service for the room-booking administration tool.\n"
            "Fetches bookings and rooms from the booking API, expands recurring\n"
            "bookings and serves month and day calendar views."
        ),
        version="0.1.0",
    )

    # Routers
    app.include_router(health.router)
    app.include_router(calendar.router)

    return app


app = create_app()
