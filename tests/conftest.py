# tests/conftest.py
from datetime import date
from typing import Any

import pytest
from fastapi.testclient import TestClient

from room_calendar.main import create_app
from room_calendar.schemas.booking import BookingRecord


@pytest.fixture(scope="session")
def app():
    return create_app()


@pytest.fixture()
def client(app) -> TestClient:
    """
    TestClient built from the application factory.

    Dependency overrides installed by a test are cleared afterwards.
    """
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_booking():
    """
    Factory for BookingRecord objects with sensible defaults.
    """

    def _make(**overrides: Any) -> BookingRecord:
        data: dict[str, Any] = {
            "id": "b1",
            "title": "Team sync",
            "department": "ASITE",
            "status": "confirmed",
            "date": date(2024, 3, 5),
            "start_time": "2024-03-05T14:00:00Z",
            "end_time": "2024-03-05T15:00:00Z",
            "recurring": None,
            "recurrence_end_date": None,
            "room_id": "r1",
            "room_name": "Room 101",
            "building_name": "Main Hall",
        }
        data.update(overrides)
        return BookingRecord(**data)

    return _make
