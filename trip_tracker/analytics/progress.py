"""Progress aggregation over a trip and a visited-state snapshot.

Pure functions: no I/O and no caching. Recompute after every trip or status
change; cost is linear in the number of activities.
"""

from decimal import Decimal

from trip_tracker.models.progress import DayProgress, TripProgress
from trip_tracker.models.trip import Trip
from trip_tracker.tracking.tracker import StatusSnapshot


def completion_percent(visited: int, total: int) -> int:
    """Percentage of visited activities, rounded half up; 0 when total is 0."""
    if total <= 0:
        return 0
    return (visited * 200 + total) // (2 * total)


def ceil_hours(minutes: int) -> int:
    """Whole hours needed to cover the given minutes."""
    return -(-minutes // 60)


def day_progress(trip: Trip, snapshot: StatusSnapshot) -> list[DayProgress]:
    """Visited/total counts for each day, in day order."""
    result: list[DayProgress] = []
    for day_index, day_plan in enumerate(trip.daily_plans):
        visited = sum(
            1
            for activity_index in range(len(day_plan.activities))
            if snapshot.is_visited(day_index, activity_index)
        )
        result.append(
            DayProgress(
                day=day_plan.day,
                total_activities=len(day_plan.activities),
                visited_activities=visited,
            )
        )
    return result


def compute_progress(trip: Trip, snapshot: StatusSnapshot) -> TripProgress:
    """Compute completion, duration and cost aggregates for a trip.

    Only snapshot keys that address an existing activity count as visited,
    so visited + pending always equals total.

    Args:
        trip: Trip whose activities are aggregated
        snapshot: Visited state captured from the status tracker

    Returns:
        TripProgress with totals and pending (not yet visited) remainders
    """
    total_activities = 0
    visited_activities = 0
    total_minutes = 0
    pending_minutes = 0
    total_cost = Decimal(0)
    pending_cost = Decimal(0)

    for day_index, day_plan in enumerate(trip.daily_plans):
        for activity_index, activity in enumerate(day_plan.activities):
            minutes = activity.duration.minutes
            cost = activity.estimated_cost.amount

            total_activities += 1
            total_minutes += minutes
            total_cost += cost

            if snapshot.is_visited(day_index, activity_index):
                visited_activities += 1
            else:
                pending_minutes += minutes
                pending_cost += cost

    days_completed = sum(1 for day in day_progress(trip, snapshot) if day.is_complete)

    return TripProgress(
        total_activities=total_activities,
        visited_activities=visited_activities,
        pending_activities=total_activities - visited_activities,
        completion_rate=completion_percent(visited_activities, total_activities),
        total_minutes=total_minutes,
        pending_minutes=pending_minutes,
        total_hours=ceil_hours(total_minutes),
        pending_hours=ceil_hours(pending_minutes),
        total_cost=float(total_cost),
        pending_cost=float(pending_cost),
        days_completed=days_completed,
    )
