"""Activity status tracker - authoritative visited/pending state per activity.

State for a trip lives under a single storage key, "{prefix}:{trip_id}", as
JSON: {"statuses": {"<day>:<activity>": bool}, "notes": str}. Every mutation
writes the whole entry back immediately. Remote sync is opt-in and never
happens on toggle.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from pydantic import BaseModel, Field, ValidationError

from trip_tracker.client.errors import UpdateError
from trip_tracker.client.trips import TripsClient
from trip_tracker.models.trip import Trip
from trip_tracker.tracking.storage import KeyValueStorage

logger = logging.getLogger(__name__)

StatusKey = tuple[int, int]


class TripLocalState(BaseModel):
    """Serialized local state for one trip."""

    statuses: dict[str, bool] = Field(default_factory=dict)
    notes: str = ""


def _encode_key(day_index: int, activity_index: int) -> str:
    return f"{day_index}:{activity_index}"


def _decode_key(raw: str) -> StatusKey | None:
    day, sep, activity = raw.partition(":")
    if not sep:
        return None
    try:
        return int(day), int(activity)
    except ValueError:
        return None


@dataclass(frozen=True)
class StatusSnapshot:
    """Immutable view of a trip's visited keys at one point in time."""

    trip_id: str
    visited: frozenset[StatusKey]

    def is_visited(self, day_index: int, activity_index: int) -> bool:
        """Check whether an activity is marked visited."""
        return (day_index, activity_index) in self.visited


class ActivityStatusTracker:
    """Records visited state per (trip, day index, activity index).

    Absence of an entry means not visited. Once the tracker has an entry for
    a key, any isVisited flag on the trip payload is ignored.
    """

    def __init__(self, storage: KeyValueStorage, key_prefix: str = "trip-state") -> None:
        """Initialize tracker.

        Args:
            storage: Device-local key-value storage
            key_prefix: Namespace for per-trip storage keys
        """
        self._storage = storage
        self._key_prefix = key_prefix

    def storage_key(self, trip_id: str) -> str:
        """Storage key holding all state for a trip."""
        return f"{self._key_prefix}:{trip_id}"

    def get_activity_status(self, trip_id: str, day_index: int, activity_index: int) -> bool:
        """Return True if the activity is visited, False if pending or unknown."""
        state = self._load(trip_id)
        return state.statuses.get(_encode_key(day_index, activity_index), False)

    def toggle_activity_status(self, trip_id: str, day_index: int, activity_index: int) -> bool:
        """Flip the visited flag and persist it locally.

        Returns:
            The new visited value
        """
        state = self._load(trip_id)
        key = _encode_key(day_index, activity_index)
        new_value = not state.statuses.get(key, False)
        state.statuses[key] = new_value
        self._save(trip_id, state)
        return new_value

    def set_activity_status(
        self, trip_id: str, day_index: int, activity_index: int, is_visited: bool
    ) -> None:
        """Set the visited flag explicitly and persist it locally."""
        state = self._load(trip_id)
        state.statuses[_encode_key(day_index, activity_index)] = is_visited
        self._save(trip_id, state)

    def entries(self, trip_id: str) -> dict[StatusKey, bool]:
        """All recorded entries for a trip, visited or not."""
        state = self._load(trip_id)
        result: dict[StatusKey, bool] = {}
        for raw, value in state.statuses.items():
            key = _decode_key(raw)
            if key is not None:
                result[key] = value
        return result

    def snapshot(self, trip_id: str) -> StatusSnapshot:
        """Capture the visited keys of a trip."""
        visited = frozenset(key for key, value in self.entries(trip_id).items() if value)
        return StatusSnapshot(trip_id=trip_id, visited=visited)

    def replace_statuses(self, trip_id: str, statuses: Mapping[StatusKey, bool]) -> None:
        """Replace every status entry of a trip, keeping its notes."""
        state = self._load(trip_id)
        state.statuses = {
            _encode_key(day, activity): value for (day, activity), value in statuses.items()
        }
        self._save(trip_id, state)

    def seed_from_trip(self, trip: Trip) -> int:
        """Import isVisited flags from a fetched trip for keys with no entry yet.

        Returns:
            Number of entries imported
        """
        if trip.id is None:
            return 0

        state = self._load(trip.id)
        seeded = 0
        for day_index, day_plan in enumerate(trip.daily_plans):
            for activity_index, activity in enumerate(day_plan.activities):
                key = _encode_key(day_index, activity_index)
                if activity.is_visited is None or key in state.statuses:
                    continue
                state.statuses[key] = activity.is_visited
                seeded += 1

        if seeded:
            self._save(trip.id, state)
        return seeded

    def get_notes(self, trip_id: str) -> str:
        """Free-text notes stored for a trip."""
        return self._load(trip_id).notes

    def set_notes(self, trip_id: str, notes: str) -> None:
        """Store free-text notes for a trip."""
        state = self._load(trip_id)
        state.notes = notes
        self._save(trip_id, state)

    def clear(self, trip_id: str) -> None:
        """Drop all local state for a trip."""
        self._storage.delete(self.storage_key(trip_id))

    async def sync_to_remote(self, trip_id: str, client: TripsClient) -> int:
        """Push every recorded entry to the trip API.

        Failures are logged and skipped; local state stays authoritative.

        Returns:
            Number of entries the API accepted
        """
        pushed = 0
        for (day_index, activity_index), is_visited in sorted(self.entries(trip_id).items()):
            try:
                await client.update_activity_status(trip_id, day_index, activity_index, is_visited)
                pushed += 1
            except UpdateError as e:
                logger.warning(
                    f"Activity status sync failed for trip {trip_id} "
                    f"({day_index}, {activity_index}): {e}"
                )
        return pushed

    def _load(self, trip_id: str) -> TripLocalState:
        raw = self._storage.get(self.storage_key(trip_id))
        if raw is None:
            return TripLocalState()
        try:
            return TripLocalState.model_validate_json(raw)
        except ValidationError:
            logger.warning(f"Discarding unreadable local state for trip {trip_id}")
            return TripLocalState()

    def _save(self, trip_id: str, state: TripLocalState) -> None:
        self._storage.set(self.storage_key(trip_id), state.model_dump_json())
