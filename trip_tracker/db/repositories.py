"""Repository protocol interfaces for trip data access."""

from typing import Protocol

from trip_tracker.models.trip import Trip, TripDraft


class TripRepository(Protocol):
    """Repository for stored trips and their remotely synced activity status."""

    def create_trip(self, draft: TripDraft) -> Trip:
        """Store a new trip, assigning id and created_at.

        Args:
            draft: Trip payload without id

        Returns:
            The stored trip
        """
        ...

    def get_trip(self, trip_id: str) -> Trip | None:
        """Get trip by ID, None if absent."""
        ...

    def replace_trip(self, trip_id: str, trip: Trip) -> Trip | None:
        """Replace a stored trip wholesale, keeping its id, owner and created_at.

        Returns:
            The stored trip, or None if no trip has this id
        """
        ...

    def delete_trip(self, trip_id: str) -> bool:
        """Delete a trip and its activity status.

        Returns:
            True if a trip was deleted
        """
        ...

    def list_user_trips(self, user_id: str) -> list[Trip]:
        """List a user's trips, newest first."""
        ...

    def set_activity_status(
        self, trip_id: str, day_index: int, activity_index: int, is_visited: bool
    ) -> None:
        """Record the visited flag of one activity."""
        ...

    def get_activity_statuses(self, trip_id: str) -> dict[tuple[int, int], bool]:
        """All recorded visited flags for a trip."""
        ...
