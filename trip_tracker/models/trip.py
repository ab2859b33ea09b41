"""Trip models - the itinerary as exchanged with the remote trip API."""

from datetime import datetime
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from trip_tracker.models.common import (
    ActivityCategory,
    ActivityType,
    Duration,
    DurationText,
    Money,
    MoneyText,
    categorize_activity,
)


class WireModel(BaseModel):
    """Base for models serialized as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON body sent to the trip API."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Activity(WireModel):
    """Single planned activity within a day."""

    title: str = Field(validation_alias=AliasChoices("title", "activityTitle"))
    description: str = ""
    time_of_day: str = ""
    duration: DurationText = Field(default_factory=lambda: Duration.from_minutes(60))
    estimated_cost: MoneyText = Field(default_factory=lambda: Money.from_text("$0"))
    location: str | None = None
    address: str | None = None
    type: ActivityType = ActivityType.activity
    category: ActivityCategory | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    practical_tip: str | None = None
    google_place_id: str | None = None

    # Read once to seed the status tracker, never sent back
    is_visited: bool | None = Field(default=None, alias="isVisited", exclude=True)

    @field_validator("type", mode="before")
    @classmethod
    def coerce_unknown_type(cls, v: Any) -> Any:
        """Map unrecognized activity types to `other`."""
        if isinstance(v, str) and v not in {t.value for t in ActivityType}:
            return ActivityType.other
        return v

    @field_validator("category", mode="before")
    @classmethod
    def coerce_unknown_category(cls, v: Any) -> Any:
        """Drop unrecognized categories so they are re-derived from the title."""
        if isinstance(v, str) and v not in {c.value for c in ActivityCategory}:
            return None
        return v

    @model_validator(mode="after")
    def derive_category(self) -> "Activity":
        """Derive category from title keywords when absent."""
        if self.category is None:
            self.category = categorize_activity(self.title)
        return self


class DayPlan(WireModel):
    """Ordered activities for one day of a trip."""

    day: int = Field(..., ge=1)
    title: str = ""
    date: str | None = None
    theme: str | None = None
    activities: list[Activity] = Field(default_factory=list)
    day_estimated_cost: str | None = None
    day_walking_distance: str | None = None


class TripDraft(WireModel):
    """Trip payload before the remote API assigns an id."""

    user_id: str | None = None
    title: str = Field(validation_alias=AliasChoices("title", "tripTitle"))
    destination: str
    duration: str = ""
    introduction: str = ""
    conclusion: str = ""
    daily_plans: list[DayPlan] = Field(default_factory=list)
    total_estimated_cost: str | None = None
    estimated_walking_distance: str | None = None

    @model_validator(mode="after")
    def validate_contiguous_days(self) -> "TripDraft":
        """Ensure days are numbered 1..n in order."""
        for i, day_plan in enumerate(self.daily_plans):
            if day_plan.day != i + 1:
                raise ValueError(
                    f"daily_plans must be numbered 1..{len(self.daily_plans)} in order, "
                    f"got day {day_plan.day} at position {i}"
                )
        return self


class Trip(TripDraft):
    """Trip as stored by the remote API."""

    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    created_at: datetime | None = None

    def activity_count(self) -> int:
        """Total number of activities across all days."""
        return sum(len(day_plan.activities) for day_plan in self.daily_plans)
