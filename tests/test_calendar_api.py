# tests/test_calendar_api.py
from http import HTTPStatus

from room_calendar.services.booking_api_client import BookingApiError, get_booking_api_client

ROOMS = [{"roomId": 1, "roomName": "Aurora", "building": "North Wing"}]

BOOKINGS = [
    {
        "bookingId": 1,
        "title": "Weekly standup",
        "department": "SEELL",
        "status": "confirmed",
        "date": "2024-03-05",
        "startTime": "2024-03-05T10:00:00Z",
        "endTime": "2024-03-05T10:30:00Z",
        "recurring": "Weekly",
        "roomId": 1,
    },
    {
        "bookingId": 2,
        "title": "Review",
        "department": "External",
        "status": "confirmed",
        "date": "2024-03-05",
        "startTime": "09:00:00",
        "endTime": "09:30:00",
        "recurring": "No",
        "roomId": 1,
    },
    {
        "bookingId": 3,
        "title": "Awaiting approval",
        "status": "pending",
        "date": "2024-03-05",
        "startTime": "08:00:00",
        "endTime": "08:30:00",
        "roomId": 1,
    },
]


class FakeBookingApiClient:
    """
    Stand-in for BookingApiClient used as a dependency override.
    """

    def __init__(self, bookings=None, rooms=None, error: str | None = None):
        self.bookings = bookings or []
        self.rooms = rooms or []
        self.error = error

    async def fetch_month_snapshot(self, start_date, end_date):
        if self.error:
            raise BookingApiError(self.error)
        return self.bookings, self.rooms


def _override(app, fake):
    app.dependency_overrides[get_booking_api_client] = lambda: fake


def test_month_view_expands_recurring_bookings(app, client):
    _override(app, FakeBookingApiClient(BOOKINGS, ROOMS))

    resp = client.get("/calendar/month?year=2024&month=3")
    assert resp.status_code == HTTPStatus.OK

    data = resp.json()
    assert data["range_start"] == "2024-03-01"
    assert data["range_end"] == "2024-03-31"
    assert len(data["cells"]) == 42
    assert set(data["bookings_by_date"]) == {
        "2024-03-05",
        "2024-03-12",
        "2024-03-19",
        "2024-03-26",
    }
    first_day = data["bookings_by_date"]["2024-03-05"]
    assert [b["title"] for b in first_day] == ["Weekly standup", "Review"]
    assert first_day[0]["is_recurring"] is True
    assert first_day[0]["room_name"] == "Aurora"

    cell = next(c for c in data["cells"] if c["date"] == "2024-03-05")
    assert cell["booking_count"] == 2
    assert cell["booking_count_label"] == "2 bookings"


def test_month_view_rejects_invalid_month(client):
    resp = client.get("/calendar/month?year=2024&month=13")
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_month_view_maps_upstream_failure_to_502(app, client):
    _override(app, FakeBookingApiClient(error="Booking API GET failed (status=500)"))

    resp = client.get("/calendar/month?year=2024&month=3")

    assert resp.status_code == HTTPStatus.BAD_GATEWAY
    assert "status=500" in resp.json()["detail"]


def test_day_view_sorts_slots_chronologically(app, client):
    _override(app, FakeBookingApiClient(BOOKINGS, ROOMS))

    resp = client.get("/calendar/day?date=2024-03-05")
    assert resp.status_code == HTTPStatus.OK

    data = resp.json()
    assert data["weekday"] == "Tuesday"
    assert data["booking_count"] == 2
    assert [slot["label"] for slot in data["slots"]] == [
        "9:00 AM - 9:30 AM",
        "10:00 AM - 10:30 AM",
    ]
    assert data["slots"][1]["bookings"][0]["title"] == "Weekly standup"


def test_day_view_for_recurring_only_day(app, client):
    _override(app, FakeBookingApiClient(BOOKINGS, ROOMS))

    resp = client.get("/calendar/day?date=2024-03-19")
    assert resp.status_code == HTTPStatus.OK

    data = resp.json()
    assert data["booking_count"] == 1
    assert data["slots"][0]["label"] == "10:00 AM - 10:30 AM"


def test_day_view_rejects_malformed_date(client):
    resp = client.get("/calendar/day?date=2024-13-45")
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_month_view_rejects_outermost_years(app, client):
    _override(app, FakeBookingApiClient(BOOKINGS, ROOMS))

    for year, month in ((9999, 12), (1, 1)):
        resp = client.get(f"/calendar/month?year={year}&month={month}")
        assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_month_view_at_last_supported_month(app, client):
    _override(app, FakeBookingApiClient([], ROOMS))

    resp = client.get("/calendar/month?year=9998&month=12")
    assert resp.status_code == HTTPStatus.OK

    data = resp.json()
    assert data["next_month"] == "9999-01-01"
    assert len(data["cells"]) == 42


def test_day_view_rejects_outermost_dates(app, client):
    _override(app, FakeBookingApiClient(BOOKINGS, ROOMS))

    for day in ("9999-12-31", "0001-01-01"):
        resp = client.get(f"/calendar/day?date={day}")
        assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
        assert "9998" in resp.json()["detail"]
