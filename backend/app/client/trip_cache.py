"""
In-memory cache of the caller's trips

Not authoritative: it mirrors the last successful list fetch and patches
itself after each successful mutation. A failed refresh keeps the stale
list and only sets `error`.
"""

from app.client.trip_client import TripApiClient, TripApiError
from app.core.logging import get_logger

logger = get_logger(__name__)


class TripCache:
    def __init__(self, api: TripApiClient):
        self.api = api
        self.trips: list[dict] = []
        self.loading: bool = False
        self.error: str | None = None

    async def __aenter__(self) -> "TripCache":
        await self.mount()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.api.aclose()

    async def mount(self) -> None:
        """Initial load."""
        await self.fetch_trips()

    async def fetch_trips(self) -> None:
        self.loading = True
        try:
            trips = await self.api.get_trips()
        except TripApiError as e:
            self.error = f"Error: {e.message}"
            logger.warning("trip_cache_refresh_failed", error=e.message, cached=len(self.trips))
        else:
            self.trips = list(trips)
            self.error = None
        finally:
            self.loading = False

    async def get_trip(self, trip_id: str) -> dict:
        self.loading = True
        try:
            trip = await self.api.get_trip(trip_id)
        except TripApiError as e:
            self.error = f"Error: {e.message}"
            raise
        finally:
            self.loading = False
        self.error = None
        return trip

    async def create_trip(self, trip_data: dict) -> dict:
        """Create on the server, then append the stored record."""
        self.loading = True
        try:
            created = await self.api.create_trip(trip_data)
        except TripApiError as e:
            self.error = f"Error: {e.message}"
            raise
        finally:
            self.loading = False
        self.trips = [*self.trips, created]
        self.error = None
        return created

    async def update_trip(self, trip_id: str, trip_data: dict) -> dict:
        """Update on the server, then shallow-merge the returned record by id."""
        self.loading = True
        try:
            updated = await self.api.update_trip(trip_id, trip_data)
        except TripApiError as e:
            self.error = e.message
            raise
        finally:
            self.loading = False
        self.trips = [
            {**trip, **updated} if trip.get("_id") == trip_id else trip for trip in self.trips
        ]
        self.error = None
        return updated

    async def delete_trip(self, trip_id: str) -> None:
        self.loading = True
        try:
            await self.api.delete_trip(trip_id)
        except TripApiError:
            self.error = "Failed to delete trip"
            raise
        finally:
            self.loading = False
        self.trips = [trip for trip in self.trips if trip.get("_id") != trip_id]
        self.error = None

    def find(self, trip_id: str) -> dict | None:
        return next((trip for trip in self.trips if trip.get("_id") == trip_id), None)
