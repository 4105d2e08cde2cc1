# room_calendar/core/logging_config.py
import logging

from room_calendar.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Configure the root logger once for the whole service.

    The level defaults to LOG_LEVEL from settings. Unknown level names fall
    back to INFO.
    """
    if level is None:
        level = get_settings().LOG_LEVEL

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger("room_calendar").setLevel(numeric_level)
