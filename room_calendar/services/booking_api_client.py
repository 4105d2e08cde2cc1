# room_calendar/services/booking_api_client.py
from __future__ import annotations

import asyncio
import logging
from datetime import date as date_type
from typing import Any, Dict, List, Optional

import httpx

from room_calendar.core.config import get_settings

logger = logging.getLogger(__name__)


class BookingApiError(RuntimeError):
    """
    Raised when the booking API cannot be reached, answers with a non-2xx
    status, or returns a payload of an unexpected shape.
    """


class BookingApiClient:
    """
    Minimal read-only client for the upstream booking REST API.

    Responsibilities
    ----------------
    - Fetch bookings for an inclusive date range (`GET /bookings`).
    - Fetch the room catalogue (`GET /rooms`).
    - Forward the configured bearer token, if any.
    - Avoid leaking HTTP client details into the rest of the codebase.

    Notes
    -----
    - The client holds no state beyond its configuration; each call opens a
      short-lived `httpx.AsyncClient`.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        if not base_url:
            raise ValueError("base_url is required")

        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout_seconds = timeout_seconds

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def get_json(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Issue a GET request to the booking API and return the JSON payload.

        Raises BookingApiError on transport errors and non-2xx responses.
        """
        url = f"{self._base_url}/{path.lstrip('/')}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                resp = await client.request(
                    method="GET",
                    url=url,
                    headers=self._headers(),
                    params=params,
                )
        except httpx.HTTPError as exc:
            logger.error("Booking API request to %s failed: %s", url, exc)
            raise BookingApiError(f"Booking API request failed: {exc}") from exc

        if resp.status_code // 100 != 2:
            logger.warning(
                "Booking API GET %s returned status %s", url, resp.status_code
            )
            raise BookingApiError(
                f"Booking API GET failed (status={resp.status_code}): {resp.text}"
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise BookingApiError(f"Booking API returned invalid JSON for {url}") from exc

    async def fetch_bookings(
        self,
        start_date: date_type,
        end_date: date_type,
    ) -> List[Dict[str, Any]]:
        """
        Fetch raw booking payloads for the inclusive range [start_date, end_date].

        The API answers either with a bare list or with `{"bookings": [...]}`.
        """
        payload = await self.get_json(
            "/bookings",
            params={
                "startDate": start_date.isoformat(),
                "endDate": end_date.isoformat(),
            },
        )

        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            bookings = payload.get("bookings") or []
            if isinstance(bookings, list):
                return bookings

        raise BookingApiError("Unexpected bookings payload from booking API")

    async def fetch_rooms(self) -> List[Dict[str, Any]]:
        """
        Fetch the raw room catalogue.
        """
        payload = await self.get_json("/rooms")
        if not isinstance(payload, list):
            raise BookingApiError("Unexpected rooms payload from booking API")
        return payload

    async def fetch_month_snapshot(
        self,
        start_date: date_type,
        end_date: date_type,
    ) -> tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
        """
        Fetch bookings and rooms concurrently, returning (bookings, rooms).
        """
        bookings, rooms = await asyncio.gather(
            self.fetch_bookings(start_date, end_date),
            self.fetch_rooms(),
        )
        return bookings, rooms


def get_booking_api_client() -> BookingApiClient:
    """
    Construct a BookingApiClient from application settings.

    Used as a FastAPI dependency so tests can override it.
    """
    settings = get_settings()
    return BookingApiClient(
        base_url=settings.BOOKING_API_BASE_URL,
        token=settings.BOOKING_API_TOKEN,
        timeout_seconds=settings.BOOKING_API_TIMEOUT_SECONDS,
    )
