"""Tests for the trip store."""

import asyncio
import copy

import httpx
import pytest

from trip_tracker.client.cache import LRUCache
from trip_tracker.client.errors import CreateError, DeleteError, FetchError, UpdateError
from trip_tracker.client.store import TripStore, create_trip_store
from trip_tracker.config import Settings
from trip_tracker.models import Trip, TripDraft
from trip_tracker.tracking.tracker import ActivityStatusTracker


class FakeTripsClient:
    """In-memory stand-in for TripsClient with call counting and failure switches."""

    def __init__(self, trips: dict[str, dict]) -> None:
        self.payloads = trips
        self.get_calls: list[str] = []
        self.updated: list[Trip] = []
        self.fail_list = False
        self.fail_create = False
        self.fail_update = False
        self.fail_delete = False
        self.gates: dict[str, asyncio.Event] = {}

    async def get_trip(self, trip_id: str) -> Trip | None:
        self.get_calls.append(trip_id)
        if trip_id in self.gates:
            await self.gates[trip_id].wait()
        payload = self.payloads.get(trip_id)
        return Trip.model_validate(copy.deepcopy(payload)) if payload else None

    async def list_user_trips(self, user_id: str) -> list[Trip]:
        if self.fail_list:
            raise FetchError("list_user_trips failed with HTTP 500", status_code=500)
        return [Trip.model_validate(copy.deepcopy(p)) for p in self.payloads.values()]

    async def create_trip(self, draft: TripDraft) -> Trip:
        if self.fail_create:
            raise CreateError("create_trip failed with HTTP 422", status_code=422)
        return Trip(**draft.model_dump(), id="new-trip")

    async def update_trip(self, trip_id: str, trip: Trip) -> Trip:
        if self.fail_update:
            raise UpdateError("update_trip failed with HTTP 500", status_code=500)
        self.updated.append(trip.model_copy(deep=True))
        return trip

    async def delete_trip(self, trip_id: str) -> None:
        if self.fail_delete:
            raise DeleteError("delete_trip failed with HTTP 500", status_code=500)


@pytest.fixture
def fake_client(trip_payload: dict) -> FakeTripsClient:
    second = copy.deepcopy(trip_payload)
    second["_id"] = "trip-2"
    second["tripTitle"] = "Galle Day"
    return FakeTripsClient({"trip-1": trip_payload, "trip-2": second})


@pytest.mark.asyncio
async def test_open_sets_current(fake_client: FakeTripsClient) -> None:
    """Test open fetches and sets the current trip."""
    store = TripStore(fake_client)

    trip = await store.open("trip-1")

    assert trip is not None
    assert store.current is trip
    assert await store.open("missing") is None
    assert store.current is None


@pytest.mark.asyncio
async def test_open_uses_cache(fake_client: FakeTripsClient) -> None:
    """Test a cached trip is served without refetching, as an independent copy."""
    store = TripStore(fake_client, cache=LRUCache(max_size=4))

    first = await store.open("trip-1")
    assert first is not None
    first.title = "Edited locally"
    second = await store.open("trip-1")

    assert fake_client.get_calls == ["trip-1"]
    assert second is not None
    assert second.title == "Kandy Weekend"


@pytest.mark.asyncio
async def test_open_seeds_tracker(
    fake_client: FakeTripsClient, tracker: ActivityStatusTracker
) -> None:
    """Test visited flags in the payload seed the tracker."""
    fake_client.payloads["trip-1"]["dailyPlans"][1]["activities"][0]["isVisited"] = True
    store = TripStore(fake_client, tracker=tracker)

    await store.open("trip-1")

    assert tracker.get_activity_status("trip-1", 1, 0) is True


@pytest.mark.asyncio
async def test_latest_open_wins(fake_client: FakeTripsClient) -> None:
    """Test a slow earlier open does not overwrite a later one."""
    gate = asyncio.Event()
    fake_client.gates["trip-1"] = gate
    store = TripStore(fake_client)

    slow = asyncio.create_task(store.open("trip-1"))
    await asyncio.sleep(0)
    await store.open("trip-2")
    gate.set()
    await slow

    assert store.current is not None
    assert store.current.id == "trip-2"


@pytest.mark.asyncio
async def test_load_user_trips(fake_client: FakeTripsClient) -> None:
    """Test trips are loaded, and a failure yields an empty list."""
    store = TripStore(fake_client)

    loaded = await store.load_user_trips("user-1")
    assert [t.id for t in loaded] == ["trip-1", "trip-2"]
    assert store.trips == loaded

    fake_client.fail_list = True
    assert await store.load_user_trips("user-1") == []
    assert len(store.trips) == 2


@pytest.mark.asyncio
async def test_create_prepends(fake_client: FakeTripsClient) -> None:
    """Test created trips go to the front of the list."""
    store = TripStore(fake_client, cache=LRUCache(max_size=4))
    await store.load_user_trips("user-1")

    trip = await store.create(TripDraft(title="Ella", destination="Ella"))

    assert trip.id == "new-trip"
    assert store.trips[0] is trip
    assert len(store.trips) == 3
    await store.open("new-trip")
    assert "new-trip" not in fake_client.get_calls


@pytest.mark.asyncio
async def test_save_sends_current_and_refreshes_list(fake_client: FakeTripsClient) -> None:
    """Test save pushes the whole current trip and replaces the list entry."""
    store = TripStore(fake_client)
    await store.load_user_trips("user-1")
    trip = await store.open("trip-1")
    assert trip is not None
    trip.title = "Kandy Long Weekend"

    await store.save()

    assert fake_client.updated[0].title == "Kandy Long Weekend"
    assert store.trips[0].title == "Kandy Long Weekend"


@pytest.mark.asyncio
async def test_save_without_open_trip_raises(fake_client: FakeTripsClient) -> None:
    """Test save requires an open, persisted trip."""
    store = TripStore(fake_client)

    with pytest.raises(UpdateError, match="No saved trip"):
        await store.save()


@pytest.mark.asyncio
async def test_save_failure_leaves_state(fake_client: FakeTripsClient) -> None:
    """Test a rejected save leaves the list, the cache entry and current as they were."""
    cache: LRUCache[str, Trip] = LRUCache(max_size=4)
    store = TripStore(fake_client, cache=cache)
    await store.load_user_trips("user-1")
    trip = await store.open("trip-1")
    assert trip is not None
    trip.title = "Unsaved edit"
    fake_client.fail_update = True

    with pytest.raises(UpdateError) as exc_info:
        await store.save()

    assert exc_info.value.status_code == 500
    assert [t.title for t in store.trips] == ["Kandy Weekend", "Galle Day"]
    cached = cache.get("trip-1")
    assert cached is not None
    assert cached.title == "Kandy Weekend"
    assert store.current is trip
    assert store.current.title == "Unsaved edit"


@pytest.mark.asyncio
async def test_create_failure_leaves_list(fake_client: FakeTripsClient) -> None:
    """Test a rejected create adds nothing to the list."""
    store = TripStore(fake_client)
    await store.load_user_trips("user-1")
    fake_client.fail_create = True

    with pytest.raises(CreateError):
        await store.create(TripDraft(title="Ella", destination="Ella"))

    assert [t.id for t in store.trips] == ["trip-1", "trip-2"]

@pytest.mark.asyncio
async def test_delete_failure_leaves_state(fake_client: FakeTripsClient) -> None:
    """Test a rejected delete changes nothing locally."""
    fake_client.fail_delete = True
    store = TripStore(fake_client)
    await store.load_user_trips("user-1")
    await store.open("trip-1")

    with pytest.raises(DeleteError):
        await store.delete("trip-1")

    assert [t.id for t in store.trips] == ["trip-1", "trip-2"]
    assert store.current is not None


@pytest.mark.asyncio
async def test_delete_success_clears_local_state(
    fake_client: FakeTripsClient, tracker: ActivityStatusTracker
) -> None:
    """Test a confirmed delete drops the trip, its cache entry and its statuses."""
    cache: LRUCache[str, Trip] = LRUCache(max_size=4)
    store = TripStore(fake_client, cache=cache, tracker=tracker)
    await store.load_user_trips("user-1")
    await store.open("trip-1")
    tracker.toggle_activity_status("trip-1", 0, 0)

    await store.delete("trip-1")

    assert [t.id for t in store.trips] == ["trip-2"]
    assert store.current is None
    assert "trip-1" not in cache
    assert tracker.get_activity_status("trip-1", 0, 0) is False


@pytest.mark.asyncio
async def test_create_trip_store_from_settings(trip_payload: dict) -> None:
    """Test the factory wires cache, tracker prefix and client from settings."""
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        return httpx.Response(200, json=trip_payload)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    settings = Settings(
        api_base_url="http://configured.test",
        status_key_prefix="device-1",
        trip_cache_size=2,
        redis_url=None,
        local_state_url=None,
    )
    store = create_trip_store(settings, client=http_client)

    await store.open("trip-1")
    await store.open("trip-1")

    assert calls == ["http://configured.test/api/trips/trip-1"]
    assert store.tracker is not None
    assert store.tracker.storage_key("trip-1") == "device-1:trip-1"

    await http_client.aclose()


def test_create_trip_store_without_cache() -> None:
    """Test a zero cache size disables caching."""
    store = create_trip_store(Settings(trip_cache_size=0, redis_url=None, local_state_url=None))

    assert store._cache is None
