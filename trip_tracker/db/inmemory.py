"""In-memory implementations of repository interfaces."""

import uuid
from datetime import datetime, timezone

from trip_tracker.models.trip import Trip, TripDraft


class InMemoryTripRepository:
    """In-memory implementation of TripRepository."""

    def __init__(self) -> None:
        self._trips: dict[str, Trip] = {}
        self._statuses: dict[str, dict[tuple[int, int], bool]] = {}

    def create_trip(self, draft: TripDraft) -> Trip:
        """Store a new trip."""
        trip_id = uuid.uuid4().hex
        trip = Trip(
            **draft.model_dump(),
            id=trip_id,
            created_at=datetime.now(timezone.utc),
        )
        self._trips[trip_id] = trip
        self._statuses[trip_id] = {}
        return trip

    def get_trip(self, trip_id: str) -> Trip | None:
        """Get trip by ID."""
        return self._trips.get(trip_id)

    def replace_trip(self, trip_id: str, trip: Trip) -> Trip | None:
        """Replace a stored trip."""
        existing = self._trips.get(trip_id)
        if existing is None:
            return None

        stored = trip.model_copy(
            update={
                "id": trip_id,
                "user_id": trip.user_id or existing.user_id,
                "created_at": existing.created_at,
            }
        )
        self._trips[trip_id] = stored

        # Drop statuses that no longer address an activity
        statuses = self._statuses.setdefault(trip_id, {})
        for day_index, activity_index in list(statuses):
            if day_index >= len(stored.daily_plans) or activity_index >= len(
                stored.daily_plans[day_index].activities
            ):
                del statuses[(day_index, activity_index)]

        return stored

    def delete_trip(self, trip_id: str) -> bool:
        """Delete a trip."""
        self._statuses.pop(trip_id, None)
        return self._trips.pop(trip_id, None) is not None

    def list_user_trips(self, user_id: str) -> list[Trip]:
        """List a user's trips, newest first."""
        results = [trip for trip in self._trips.values() if trip.user_id == user_id]
        results.sort(
            key=lambda t: t.created_at or datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )
        return results

    def set_activity_status(
        self, trip_id: str, day_index: int, activity_index: int, is_visited: bool
    ) -> None:
        """Record the visited flag of one activity."""
        self._statuses.setdefault(trip_id, {})[(day_index, activity_index)] = is_visited

    def get_activity_statuses(self, trip_id: str) -> dict[tuple[int, int], bool]:
        """All recorded visited flags for a trip."""
        return dict(self._statuses.get(trip_id, {}))
