# tests/test_time_formatter.py
import pytest

from room_calendar.services.time_formatter import format_time, minutes_since_midnight


def test_bare_clock_and_iso_utc_render_the_same_label():
    assert format_time("14:00:00") == "2:00 PM"
    assert format_time("2024-03-05T14:00:00Z") == "2:00 PM"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("00:15", "12:15 AM"),
        ("12:00", "12:00 PM"),
        ("09:05", "9:05 AM"),
        ("23:59:59", "11:59 PM"),
        ("7:30", "7:30 AM"),
    ],
)
def test_twelve_hour_conversion_rules(value, expected):
    assert format_time(value) == expected


def test_iso_with_offset_is_rendered_in_utc():
    # 09:30 at +02:00 is 07:30 UTC
    assert format_time("2024-03-05T09:30:00+02:00") == "7:30 AM"


def test_naive_iso_is_taken_as_utc():
    assert format_time("2024-03-05T18:45:00") == "6:45 PM"


def test_existing_am_pm_label_passes_through():
    assert format_time("9:00 AM") == "9:00 AM"
    assert format_time("10:15 pm") == "10:15 pm"


def test_unrecognised_values_pass_through_unchanged():
    assert format_time("noon") == "noon"
    assert format_time("2024-03-05Tgarbage") == "2024-03-05Tgarbage"


def test_empty_values_become_empty_string():
    assert format_time("") == ""
    assert format_time(None) == ""


def test_minutes_since_midnight_handles_noon_and_midnight():
    assert minutes_since_midnight("12:00 AM") == 0
    assert minutes_since_midnight("12:30 PM") == 12 * 60 + 30
    assert minutes_since_midnight("9:00 AM") == 9 * 60
    assert minutes_since_midnight("1:05 PM") == 13 * 60 + 5
    assert minutes_since_midnight("garbage") is None
