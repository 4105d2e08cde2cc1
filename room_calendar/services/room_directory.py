# room_calendar/services/room_directory.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from room_calendar.schemas.booking import BookingRecord

logger = logging.getLogger(__name__)


def _building_of(room: Dict[str, Any]) -> str:
    nested = room.get("Building") or {}
    if not isinstance(nested, dict):
        nested = {}
    return (
        room.get("building")
        or nested.get("buildingName")
        or room.get("buildingName")
        or ""
    )


@dataclass
class RoomDirectory:
    """
    Lookup from room identifier to room and building display names.

    Sub-rooms of a room are registered under `"{roomName}-sub-{index}"` and
    inherit the parent's building.
    """

    room_names: Dict[str, str] = field(default_factory=dict)
    building_names: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_rooms(cls, rooms: Iterable[Dict[str, Any]]) -> "RoomDirectory":
        directory = cls()
        for room in rooms:
            if not isinstance(room, dict):
                logger.warning("Skipping room entry with unexpected shape: %r", room)
                continue

            room_id = room.get("roomId")
            room_name = room.get("roomName") or ""
            building = _building_of(room)

            if room_id is not None:
                directory.room_names[str(room_id)] = room_name
                directory.building_names[str(room_id)] = building

            for idx, sub in enumerate(room.get("subRooms") or []):
                if not isinstance(sub, dict):
                    continue
                key = f"{room_name}-sub-{idx}"
                directory.room_names[key] = sub.get("roomName") or ""
                directory.building_names[key] = building
        return directory

    def resolve(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        """
        Return a copy of a raw booking payload with `roomName` and
        `buildingName` filled in from the directory.

        Directory names win; otherwise the booking's own values are kept, and
        the room id itself is the last resort for the room name.
        """
        resolved = dict(raw)
        room_key = raw.get("roomId")
        key = str(room_key) if room_key is not None else None

        resolved["roomName"] = (
            (self.room_names.get(key) if key else None)
            or raw.get("roomName")
            or key
            or ""
        )
        resolved["buildingName"] = (
            (self.building_names.get(key) if key else None)
            or raw.get("building")
            or raw.get("buildingName")
            or ""
        )
        return resolved


def build_booking_records(
    raw_bookings: Iterable[Dict[str, Any]],
    directory: RoomDirectory,
) -> List[BookingRecord]:
    """
    Validate raw booking payloads into BookingRecord objects with room and
    building names resolved.

    Rows that cannot be validated (e.g. a missing or malformed date) are
    skipped and logged rather than failing the whole batch.
    """
    records: List[BookingRecord] = []
    for raw in raw_bookings:
        if not isinstance(raw, dict):
            logger.warning("Skipping booking entry with unexpected shape: %r", raw)
            continue
        try:
            records.append(BookingRecord.model_validate(directory.resolve(raw)))
        except ValidationError as exc:
            logger.warning(
                "Skipping malformed booking %s: %s",
                raw.get("bookingId", raw.get("id")),
                exc.errors(include_url=False),
            )
    return records
