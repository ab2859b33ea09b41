"""Trip store - the trip being viewed plus the locally held trip list."""

import logging

import httpx

from trip_tracker.client.cache import LRUCache
from trip_tracker.client.errors import FetchError, UpdateError
from trip_tracker.client.trips import TripsClient, create_trips_client
from trip_tracker.config import Settings, get_settings
from trip_tracker.models.trip import Trip, TripDraft
from trip_tracker.tracking.storage import create_storage
from trip_tracker.tracking.tracker import ActivityStatusTracker

logger = logging.getLogger(__name__)


class TripStore:
    """Mediates trip CRUD between in-memory state and the trip API.

    Writes are never applied optimistically: local state only changes after
    the API confirms, so a failed call leaves everything as it was.
    """

    def __init__(
        self,
        client: TripsClient,
        cache: LRUCache[str, Trip] | None = None,
        tracker: ActivityStatusTracker | None = None,
    ) -> None:
        """Initialize store.

        Args:
            client: Trip API client
            cache: Optional cache of fetched trips keyed by id
            tracker: Optional status tracker, seeded from every opened trip
        """
        self._client = client
        self._cache = cache
        self._tracker = tracker
        self._open_seq = 0
        self.current: Trip | None = None
        self.trips: list[Trip] = []

    async def open(self, trip_id: str) -> Trip | None:
        """Fetch a trip and make it the current one.

        When several opens overlap, only the most recently issued one sets
        `current`.

        Returns:
            Trip, or None if it does not exist

        Raises:
            FetchError: On network errors or non-2xx responses
        """
        self._open_seq += 1
        seq = self._open_seq

        trip = self._cached(trip_id)
        if trip is None:
            trip = await self._client.get_trip(trip_id)
            if trip is not None and self._cache is not None:
                self._cache.put(trip_id, trip.model_copy(deep=True))

        if trip is not None and self._tracker is not None:
            self._tracker.seed_from_trip(trip)

        if seq == self._open_seq:
            self.current = trip
        return trip

    async def load_user_trips(self, user_id: str) -> list[Trip]:
        """Load a user's trips into `trips`.

        Returns:
            The loaded trips, or an empty list if the API call failed
        """
        try:
            trips = await self._client.list_user_trips(user_id)
        except FetchError as e:
            logger.warning(f"Could not load trips for user {user_id}: {e}")
            return []

        self.trips = trips
        return trips

    async def create(self, draft: TripDraft) -> Trip:
        """Create a trip and prepend it to `trips`.

        Raises:
            CreateError: If the API rejects the draft
        """
        trip = await self._client.create_trip(draft)
        self.trips.insert(0, trip)
        if trip.id is not None and self._cache is not None:
            self._cache.put(trip.id, trip.model_copy(deep=True))
        return trip

    async def save(self) -> Trip:
        """Send the full current trip to the API.

        Raises:
            UpdateError: If no trip with an id is open, or the API rejects it
        """
        trip = self.current
        if trip is None or trip.id is None:
            raise UpdateError("No saved trip is open")

        await self._client.update_trip(trip.id, trip)

        self.trips = [trip if t.id == trip.id else t for t in self.trips]
        if self._cache is not None:
            self._cache.put(trip.id, trip.model_copy(deep=True))
        return trip

    async def delete(self, trip_id: str) -> None:
        """Delete a trip and drop it from local state once the API confirms.

        Raises:
            DeleteError: If the API call fails; `trips` is left unchanged
        """
        await self._client.delete_trip(trip_id)

        self.trips = [t for t in self.trips if t.id != trip_id]
        if self.current is not None and self.current.id == trip_id:
            self.current = None
        if self._cache is not None:
            self._cache.invalidate(trip_id)
        if self._tracker is not None:
            self._tracker.clear(trip_id)

    def _cached(self, trip_id: str) -> Trip | None:
        if self._cache is None:
            return None
        cached = self._cache.get(trip_id)
        return cached.model_copy(deep=True) if cached is not None else None

    @property
    def tracker(self) -> ActivityStatusTracker | None:
        """Status tracker seeded by this store, if any."""
        return self._tracker


def create_trip_store(
    settings: Settings | None = None, client: httpx.AsyncClient | None = None
) -> TripStore:
    """Factory wiring a TripStore, its cache and its tracker from settings."""
    settings = settings or get_settings()
    cache: LRUCache[str, Trip] | None = None
    if settings.trip_cache_size > 0:
        cache = LRUCache(max_size=settings.trip_cache_size)
    tracker = ActivityStatusTracker(
        create_storage(settings), key_prefix=settings.status_key_prefix
    )
    return TripStore(create_trips_client(settings, client=client), cache=cache, tracker=tracker)
