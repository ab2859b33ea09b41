"""Itinerary reordering - move, shift, add and remove activities in place.

Indices are 0-based. For `move_activity`, `target_index` is the position the
activity occupies once the move is done, so a same-day move from 0 to 2 ends
with the activity at index 2. Every operation validates first and only then
mutates, so an invalid call leaves the trip untouched.

Status tracker entries are keyed by position. When a tracker is passed, its
entries are rewritten so that visited flags stay with their activities, and
every position of the edited trip gets an explicit entry. Positional isVisited
flags still held by the server are stale after a reorder, so no position may
be left for them to seed.
"""

from collections.abc import Callable
from typing import Literal

from trip_tracker.models.trip import Activity, Trip
from trip_tracker.tracking.tracker import ActivityStatusTracker

StatusGrid = list[list[bool | None]]


class InvalidMoveError(IndexError):
    """Day or activity index outside the itinerary."""

    pass


def _check_day(trip: Trip, day_index: int) -> None:
    if not 0 <= day_index < len(trip.daily_plans):
        raise InvalidMoveError(
            f"day index {day_index} out of range for {len(trip.daily_plans)} days"
        )


def _check_activity(trip: Trip, day_index: int, activity_index: int) -> None:
    _check_day(trip, day_index)
    count = len(trip.daily_plans[day_index].activities)
    if not 0 <= activity_index < count:
        raise InvalidMoveError(
            f"activity index {activity_index} out of range for day {day_index} "
            f"with {count} activities"
        )


def _remap_statuses(
    trip: Trip,
    tracker: ActivityStatusTracker | None,
    edit: Callable[[StatusGrid], None],
) -> None:
    """Apply the same positional edit to the tracker's entries for this trip.

    Positions without an entry after the edit are written as not visited.
    """
    if tracker is None or trip.id is None:
        return

    entries = tracker.entries(trip.id)
    grid: StatusGrid = [
        [entries.get((day_index, activity_index)) for activity_index in range(len(day.activities))]
        for day_index, day in enumerate(trip.daily_plans)
    ]
    edit(grid)
    tracker.replace_statuses(
        trip.id,
        {
            (day_index, activity_index): bool(value)
            for day_index, row in enumerate(grid)
            for activity_index, value in enumerate(row)
        },
    )


def move_activity(
    trip: Trip,
    source_day: int,
    source_index: int,
    target_day: int,
    target_index: int,
    *,
    tracker: ActivityStatusTracker | None = None,
) -> Activity:
    """Move an activity to another position, within a day or across days.

    Args:
        trip: Trip mutated in place
        source_day: Day index holding the activity
        source_index: Activity index within source_day
        target_day: Day index receiving the activity
        target_index: Final position within target_day
        tracker: Optional tracker whose entries follow the move

    Returns:
        The moved activity

    Raises:
        InvalidMoveError: If any index is out of range
    """
    _check_activity(trip, source_day, source_index)
    _check_day(trip, target_day)

    target_len = len(trip.daily_plans[target_day].activities)
    if source_day == target_day:
        target_len -= 1
    if not 0 <= target_index <= target_len:
        raise InvalidMoveError(
            f"target index {target_index} out of range 0..{target_len} for day {target_day}"
        )

    def edit(grid: StatusGrid) -> None:
        grid[target_day].insert(target_index, grid[source_day].pop(source_index))

    _remap_statuses(trip, tracker, edit)

    activity = trip.daily_plans[source_day].activities.pop(source_index)
    trip.daily_plans[target_day].activities.insert(target_index, activity)
    return activity


def shift_activity(
    trip: Trip,
    day_index: int,
    activity_index: int,
    direction: Literal["up", "down"],
    *,
    tracker: ActivityStatusTracker | None = None,
) -> bool:
    """Swap an activity with its neighbour within the same day.

    Returns:
        True if the activity moved, False if it was already at the edge
    """
    _check_activity(trip, day_index, activity_index)

    new_index = activity_index - 1 if direction == "up" else activity_index + 1
    if not 0 <= new_index < len(trip.daily_plans[day_index].activities):
        return False

    move_activity(trip, day_index, activity_index, day_index, new_index, tracker=tracker)
    return True


def add_activity(
    trip: Trip,
    day_index: int,
    activity: Activity,
    index: int | None = None,
    *,
    tracker: ActivityStatusTracker | None = None,
) -> int:
    """Insert an activity into a day, appending when index is None.

    Returns:
        The index the activity was inserted at

    Raises:
        InvalidMoveError: If the day or index is out of range
    """
    _check_day(trip, day_index)

    activities = trip.daily_plans[day_index].activities
    position = len(activities) if index is None else index
    if not 0 <= position <= len(activities):
        raise InvalidMoveError(
            f"insert index {position} out of range 0..{len(activities)} for day {day_index}"
        )

    def edit(grid: StatusGrid) -> None:
        grid[day_index].insert(position, None)

    _remap_statuses(trip, tracker, edit)

    activities.insert(position, activity)
    return position


def remove_activity(
    trip: Trip,
    day_index: int,
    activity_index: int,
    *,
    tracker: ActivityStatusTracker | None = None,
) -> Activity:
    """Remove an activity from a day, closing the gap.

    Returns:
        The removed activity

    Raises:
        InvalidMoveError: If the day or activity index is out of range
    """
    _check_activity(trip, day_index, activity_index)

    def edit(grid: StatusGrid) -> None:
        grid[day_index].pop(activity_index)

    _remap_statuses(trip, tracker, edit)

    return trip.daily_plans[day_index].activities.pop(activity_index)
