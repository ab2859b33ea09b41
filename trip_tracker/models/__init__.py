"""Models package - re-exports for convenience."""

from trip_tracker.models.common import (
    ActivityCategory,
    ActivityType,
    Currency,
    Duration,
    Money,
    categorize_activity,
    detect_currency,
    format_minutes,
    parse_cost_amount,
    parse_duration_minutes,
)
from trip_tracker.models.progress import DayProgress, TripProgress
from trip_tracker.models.trip import Activity, DayPlan, Trip, TripDraft

__all__ = [
    # Common
    "ActivityCategory",
    "ActivityType",
    "Currency",
    "Duration",
    "Money",
    "categorize_activity",
    "detect_currency",
    "format_minutes",
    "parse_cost_amount",
    "parse_duration_minutes",
    # Trip
    "Trip",
    "TripDraft",
    "DayPlan",
    "Activity",
    # Progress
    "TripProgress",
    "DayProgress",
]
