# room_calendar/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Global application configuration.

    Values are loaded from environment variables at runtime.

    These settings are used for:
    - Booking API base URL and bearer token
    - HTTP timeouts towards the booking API
    - Logging level
    - Month view presentation limits
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    APP_NAME: str = "Room Calendar"
    APP_ENV: str = Field("local", description="Environment name: local/dev/stage/prod")

    BOOKING_API_BASE_URL: str = Field(
        "http://localhost:5000/api",
        description="Base URL of the upstream booking REST API.",
    )
    BOOKING_API_TOKEN: str | None = Field(
        default=None,
        description="Bearer token forwarded to the booking API, if required.",
    )
    BOOKING_API_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Timeout applied to every booking API request.",
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root logging level (DEBUG/INFO/WARNING/ERROR).",
    )

    MONTH_PREVIEW_LIMIT: int = Field(
        default=3,
        description="Number of bookings previewed inside each month grid cell.",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached accessor for application settings.

    Using LRU cache ensures settings are read and validated only once,
    while still being easily importable across the app.
    """
    return Settings()
