"""Shared pytest fixtures for all test suites."""

from collections.abc import AsyncGenerator, Iterator

import httpx
import pytest
import pytest_asyncio

from trip_tracker.api.main import app
from trip_tracker.api.routes.trips import get_trip_repository
from trip_tracker.client.trips import TripsClient
from trip_tracker.db.inmemory import InMemoryTripRepository
from trip_tracker.models import Trip
from trip_tracker.tracking.storage import InMemoryKeyValueStorage
from trip_tracker.tracking.tracker import ActivityStatusTracker


def make_trip_payload(trip_id: str | None = "trip-1") -> dict:
    """Two-day trip: day 1 has two activities, day 2 has one."""
    payload = {
        "tripTitle": "Kandy Weekend",
        "destination": "Kandy",
        "duration": "2 days",
        "userId": "user-1",
        "dailyPlans": [
            {
                "day": 1,
                "title": "Arrival",
                "activities": [
                    {
                        "activityTitle": "Temple of the Tooth",
                        "timeOfDay": "Morning",
                        "duration": "1 hr",
                        "estimatedCost": "$10",
                        "type": "activity",
                    },
                    {
                        "activityTitle": "Lake walk",
                        "timeOfDay": "Afternoon",
                        "duration": "30 min",
                        "estimatedCost": "$5",
                        "type": "activity",
                    },
                ],
            },
            {
                "day": 2,
                "title": "Gardens",
                "activities": [
                    {
                        "activityTitle": "Royal Botanical Garden",
                        "timeOfDay": "Morning",
                        "duration": "2 hr",
                        "estimatedCost": "$20",
                        "type": "activity",
                    },
                ],
            },
        ],
        "totalEstimatedCost": "$35",
        "estimatedWalkingDistance": "6 km",
    }
    if trip_id is not None:
        payload["_id"] = trip_id
    return payload


@pytest.fixture
def trip_payload() -> dict:
    """Wire payload of the sample trip, as the API returns it."""
    return make_trip_payload()


@pytest.fixture
def sample_trip() -> Trip:
    """Trip with 2 days and 3 activities (1hr/$10, 30min/$5 | 2hr/$20)."""
    return Trip.model_validate(make_trip_payload())


@pytest.fixture
def tracker() -> ActivityStatusTracker:
    """Status tracker over in-memory storage."""
    return ActivityStatusTracker(InMemoryKeyValueStorage())


@pytest.fixture
def trip_repository() -> Iterator[InMemoryTripRepository]:
    """Fresh repository wired into the API for one test."""
    repo = InMemoryTripRepository()
    app.dependency_overrides[get_trip_repository] = lambda: repo
    yield repo
    app.dependency_overrides.pop(get_trip_repository, None)


@pytest_asyncio.fixture
async def api_trips_client(
    trip_repository: InMemoryTripRepository,
) -> AsyncGenerator[TripsClient, None]:
    """TripsClient talking to the in-process API over ASGI."""
    http_client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app))
    yield TripsClient(base_url="http://testserver", client=http_client)
    await http_client.aclose()
