"""
Tests for the client-side trip cache, run against the real app through
httpx's ASGI transport
"""

import asyncio

import httpx
import pytest

from app.client.trip_cache import TripCache
from app.client.trip_client import TripApiClient, TripApiError
from app.core.security import create_access_token
from app.main import app
from app.router.trip import get_collection


@pytest.fixture
def api_factory(trips_collection):
    app.dependency_overrides[get_collection] = lambda: trips_collection

    def factory(owner_id: str = "user_alice", transport=None) -> TripApiClient:
        return TripApiClient(
            base_url="http://testserver/api",
            token=create_access_token(owner_id),
            transport=transport or httpx.ASGITransport(app=app),
        )

    yield factory
    app.dependency_overrides.clear()


def test_mount_loads_trips(api_factory, paris_payload):
    async def scenario():
        async with api_factory() as api:
            await api.create_trip(paris_payload)

        async with TripCache(api_factory()) as cache:
            assert cache.loading is False
            assert cache.error is None
            assert [t["destination"] for t in cache.trips] == ["Paris"]

    asyncio.run(scenario())


def test_mutations_patch_the_cached_list(api_factory, paris_payload):
    async def scenario():
        async with TripCache(api_factory()) as cache:
            assert cache.trips == []

            paris = await cache.create_trip(paris_payload)
            rome = await cache.create_trip({**paris_payload, "destination": "Rome", "country": "Italy"})
            # create appends, it does not re-sort
            assert [t["destination"] for t in cache.trips] == ["Paris", "Rome"]

            await cache.update_trip(paris["_id"], {"status": "completed"})
            assert cache.find(paris["_id"])["status"] == "completed"
            assert cache.find(paris["_id"])["destination"] == "Paris"
            assert cache.find(rome["_id"])["status"] == "planned"

            await cache.delete_trip(rome["_id"])
            assert [t["_id"] for t in cache.trips] == [paris["_id"]]
            assert cache.error is None

    asyncio.run(scenario())


def test_failed_create_surfaces_field_errors(api_factory, paris_payload):
    async def scenario():
        async with TripCache(api_factory()) as cache:
            with pytest.raises(TripApiError) as exc_info:
                await cache.create_trip({**paris_payload, "destination": ""})

            assert exc_info.value.status_code == 400
            assert "destination" in exc_info.value.errors
            assert cache.error == "Error: Validation error"
            assert cache.trips == []
            assert cache.loading is False

    asyncio.run(scenario())


def test_get_trip_of_other_owner_raises_not_found(api_factory, paris_payload):
    async def scenario():
        async with api_factory("user_alice") as api:
            created = await api.create_trip(paris_payload)

        async with TripCache(api_factory("user_bob")) as cache:
            with pytest.raises(TripApiError) as exc_info:
                await cache.get_trip(created["_id"])
            assert exc_info.value.status_code == 404
            assert cache.error == "Error: Trip not found"

    asyncio.run(scenario())


def test_failed_refresh_keeps_stale_trips(api_factory):
    stale = [{"_id": "abc", "destination": "Paris"}]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"detail": "Error fetching trips"})

    async def scenario():
        cache = TripCache(api_factory(transport=httpx.MockTransport(handler)))
        cache.trips = list(stale)

        await cache.fetch_trips()

        assert cache.trips == stale
        assert cache.error == "Error: Error fetching trips"
        assert cache.loading is False
        await cache.api.aclose()

    asyncio.run(scenario())


def test_transport_failure_becomes_api_error(api_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario():
        async with api_factory(transport=httpx.MockTransport(handler)) as api:
            with pytest.raises(TripApiError) as exc_info:
                await api.get_trips()
            assert exc_info.value.status_code is None
            assert "connection refused" in exc_info.value.message

    asyncio.run(scenario())
