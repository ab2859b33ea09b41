"""Tests for trip model validation and wire serialization."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from trip_tracker.models import Activity, ActivityCategory, ActivityType, Trip, TripDraft


def test_trip_accepts_original_field_aliases(trip_payload: dict) -> None:
    """Test _id, tripTitle and activityTitle are accepted on input."""
    trip = Trip.model_validate(trip_payload)

    assert trip.id == "trip-1"
    assert trip.title == "Kandy Weekend"
    assert trip.user_id == "user-1"
    assert trip.daily_plans[0].activities[0].title == "Temple of the Tooth"
    assert trip.activity_count() == 3


def test_activity_parses_duration_and_cost_at_ingestion(sample_trip: Trip) -> None:
    """Test durations and costs are parsed once into value types."""
    activity = sample_trip.daily_plans[0].activities[1]

    assert activity.duration.minutes == 30
    assert activity.duration.text == "30 min"
    assert activity.estimated_cost.amount == Decimal("5")


def test_to_wire_uses_camel_case_and_original_text(sample_trip: Trip) -> None:
    """Test wire payload is camelCase with duration/cost as display text."""
    body = sample_trip.to_wire()

    assert body["id"] == "trip-1"
    assert body["title"] == "Kandy Weekend"
    assert "dailyPlans" in body
    assert body["totalEstimatedCost"] == "$35"

    activity = body["dailyPlans"][0]["activities"][0]
    assert activity["timeOfDay"] == "Morning"
    assert activity["duration"] == "1 hr"
    assert activity["estimatedCost"] == "$10"
    assert activity["category"] == "Religious Site"


def test_is_visited_is_read_but_never_serialized() -> None:
    """Test isVisited from the API is kept for seeding but stripped on output."""
    activity = Activity.model_validate(
        {"activityTitle": "Fort walk", "duration": "1 hr", "estimatedCost": "$0", "isVisited": True}
    )

    assert activity.is_visited is True
    assert "isVisited" not in activity.to_wire()
    assert "is_visited" not in activity.model_dump()


def test_activity_defaults() -> None:
    """Test an activity with only a title gets safe defaults."""
    activity = Activity(title="Sunset cruise")

    assert activity.duration.minutes == 60
    assert activity.estimated_cost.amount == Decimal("0")
    assert activity.type == ActivityType.activity
    assert activity.category == ActivityCategory.attraction
    assert activity.to_wire()["duration"] == "1 hour"


def test_explicit_category_is_kept() -> None:
    """Test a known category from the API is not overwritten."""
    activity = Activity.model_validate({"title": "Temple visit", "category": "Museum"})
    assert activity.category == ActivityCategory.museum


def test_unknown_type_and_category_are_tolerated() -> None:
    """Test unrecognized type maps to other and unknown category is re-derived."""
    activity = Activity.model_validate(
        {"title": "Spice market", "type": "shopping", "category": "Shops"}
    )

    assert activity.type == ActivityType.other
    assert activity.category == ActivityCategory.market


def test_days_must_be_contiguous(trip_payload: dict) -> None:
    """Test non-contiguous day numbering is rejected."""
    trip_payload["dailyPlans"][1]["day"] = 3

    with pytest.raises(ValidationError, match="numbered 1..2"):
        Trip.model_validate(trip_payload)


def test_days_must_be_in_order(trip_payload: dict) -> None:
    """Test out-of-order days are rejected."""
    trip_payload["dailyPlans"].reverse()

    with pytest.raises(ValidationError):
        Trip.model_validate(trip_payload)


def test_draft_has_no_id() -> None:
    """Test drafts serialize without id and accept an empty day skeleton."""
    draft = TripDraft(title="Ella", destination="Ella", duration="3 days")
    body = draft.to_wire()

    assert "id" not in body
    assert body["dailyPlans"] == []
    assert body["destination"] == "Ella"


def test_rating_bounds() -> None:
    """Test rating must be within 0-5."""
    with pytest.raises(ValidationError):
        Activity(title="Museum", rating=7.5)


def test_numeric_duration_is_clamped_to_zero(trip_payload: dict) -> None:
    """Test negative numeric durations never produce negative minutes."""
    trip_payload["dailyPlans"][0]["activities"][0]["duration"] = -30
    trip_payload["dailyPlans"][0]["activities"][1]["duration"] = 45

    trip = Trip.model_validate(trip_payload)

    assert trip.daily_plans[0].activities[0].duration.minutes == 0
    assert trip.daily_plans[0].activities[1].duration.minutes == 45
