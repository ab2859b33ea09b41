"""Progress models - derived statistics for a trip and its visited state."""

from pydantic import BaseModel, Field


class DayProgress(BaseModel):
    """Visited progress for a single day."""

    day: int
    total_activities: int
    visited_activities: int

    @property
    def is_complete(self) -> bool:
        """A day is complete when it has activities and all are visited."""
        return self.total_activities > 0 and self.visited_activities == self.total_activities


class TripProgress(BaseModel):
    """Completion, time and cost aggregates for a trip."""

    total_activities: int = Field(..., ge=0)
    visited_activities: int = Field(..., ge=0)
    pending_activities: int = Field(..., ge=0)
    completion_rate: int = Field(..., ge=0, le=100)
    total_minutes: int = Field(..., ge=0)
    pending_minutes: int = Field(..., ge=0)
    total_hours: int = Field(..., ge=0)
    pending_hours: int = Field(..., ge=0)
    total_cost: float = Field(..., ge=0)
    pending_cost: float = Field(..., ge=0)
    days_completed: int = Field(..., ge=0)
