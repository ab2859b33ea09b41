"""Trip endpoints - CRUD, per-user listing and activity-status sync."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from trip_tracker.db.inmemory import InMemoryTripRepository
from trip_tracker.db.repositories import TripRepository
from trip_tracker.models.trip import Trip, TripDraft

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["trips"])

# Process-wide repository for the reference server
_trip_repository: InMemoryTripRepository | None = None


def get_trip_repository() -> TripRepository:
    """FastAPI dependency for the trip repository."""
    global _trip_repository
    if _trip_repository is None:
        _trip_repository = InMemoryTripRepository()
    return _trip_repository


class ActivityStatusRequest(BaseModel):
    """Request body for PUT /api/trips/{trip_id}/activity-status."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    day_index: int = Field(..., ge=0)
    activity_index: int = Field(..., ge=0)
    is_visited: bool


def _trip_body(trip: Trip, repo: TripRepository) -> dict[str, Any]:
    """Serialize a trip, annotating activities with their recorded isVisited flag."""
    body = trip.to_wire()
    statuses = repo.get_activity_statuses(trip.id) if trip.id else {}
    for day_index, day_plan in enumerate(body.get("dailyPlans", [])):
        for activity_index, activity in enumerate(day_plan.get("activities", [])):
            visited = statuses.get((day_index, activity_index))
            if visited is not None:
                activity["isVisited"] = visited
    return body


def _get_or_404(repo: TripRepository, trip_id: str) -> Trip:
    trip = repo.get_trip(trip_id)
    if trip is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
    return trip


@router.post("/trips", status_code=status.HTTP_201_CREATED, response_model=None)
async def create_trip(
    draft: TripDraft,
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
) -> dict[str, Any]:
    """Create a trip and return it with its assigned id."""
    trip = repo.create_trip(draft)
    logger.info(f"Created trip {trip.id} for user {trip.user_id}")
    return _trip_body(trip, repo)


@router.get("/trips/{trip_id}", response_model=None)
async def get_trip(
    trip_id: str,
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
) -> dict[str, Any]:
    """Get a trip by id."""
    return _trip_body(_get_or_404(repo, trip_id), repo)


@router.put("/trips/{trip_id}", response_model=None)
async def replace_trip(
    trip_id: str,
    trip: Trip,
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
) -> dict[str, Any]:
    """Replace a trip with the full payload. Last write wins."""
    stored = repo.replace_trip(trip_id, trip)
    if stored is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
    return _trip_body(stored, repo)


@router.delete("/trips/{trip_id}")
async def delete_trip(
    trip_id: str,
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
) -> dict[str, bool]:
    """Delete a trip."""
    if not repo.delete_trip(trip_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
    logger.info(f"Deleted trip {trip_id}")
    return {"success": True}


@router.get("/users/{user_id}/trips", response_model=None)
async def list_user_trips(
    user_id: str,
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
) -> list[dict[str, Any]]:
    """List a user's trips, newest first."""
    return [_trip_body(trip, repo) for trip in repo.list_user_trips(user_id)]


@router.put("/trips/{trip_id}/activity-status", status_code=status.HTTP_204_NO_CONTENT)
async def update_activity_status(
    trip_id: str,
    request: ActivityStatusRequest,
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
) -> Response:
    """Record one activity's visited flag."""
    trip = _get_or_404(repo, trip_id)

    if request.day_index >= len(trip.daily_plans) or request.activity_index >= len(
        trip.daily_plans[request.day_index].activities
    ):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activity not found")

    repo.set_activity_status(trip_id, request.day_index, request.activity_index, request.is_visited)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
