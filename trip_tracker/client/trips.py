"""Async client for the remote trip API.

Every operation maps one REST call:
- GET    /api/trips/{id}
- POST   /api/trips
- PUT    /api/trips/{id}
- DELETE /api/trips/{id}
- GET    /api/users/{user_id}/trips
- PUT    /api/trips/{id}/activity-status

Failures surface as typed `TripApiError` subclasses. Nothing is retried.
"""

import time
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from trip_tracker.client.errors import (
    CreateError,
    DeleteError,
    FetchError,
    TripApiError,
    UpdateError,
)
from trip_tracker.config import Settings, get_settings
from trip_tracker.models.trip import Trip, TripDraft


# Metrics interface (to be implemented by actual metrics system)
class ApiMetrics:
    """Interface for trip API metrics."""

    def record_latency(self, operation: str, outcome: str, latency_ms: float) -> None:
        """Record call latency."""
        pass

    def inc_error(self, operation: str, reason: str) -> None:
        """Increment error counter."""
        pass


# Logging interface
class ApiLogger:
    """Interface for structured logging."""

    def log_call(
        self,
        operation: str,
        outcome: str,
        latency_ms: float,
        trip_id: str | None = None,
        status_code: int | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log a trip API call."""
        pass


def _error_detail(response: httpx.Response) -> str:
    """Extract the server's error detail, falling back to the raw body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict):
        for key in ("detail", "error", "message"):
            if key in body:
                return str(body[key])
    return str(body)[:200]


class TripsClient:
    """HTTP client for trip CRUD and activity-status sync."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        metrics: ApiMetrics | None = None,
        logger: ApiLogger | None = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: Trip API base URL (e.g. http://localhost:8000)
            timeout: Per-request timeout in seconds
            client: Optional httpx client (for testing with mocks)
            metrics: Metrics recorder (optional, defaults to no-op)
            logger: Structured logger (optional, defaults to no-op)
        """
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._metrics = metrics or ApiMetrics()
        self._logger = logger or ApiLogger()

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "TripsClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def get_trip(self, trip_id: str) -> Trip | None:
        """Fetch a trip by id.

        Returns:
            Trip, or None if the API reports 404

        Raises:
            FetchError: On network errors, non-2xx responses or malformed payloads
        """
        response = await self._request(
            "get_trip",
            "GET",
            f"/api/trips/{quote(trip_id, safe='')}",
            FetchError,
            trip_id=trip_id,
            allow_not_found=True,
        )
        if response is None:
            return None
        return self._parse_trip(response, FetchError)

    async def list_user_trips(self, user_id: str) -> list[Trip]:
        """Fetch all trips belonging to a user.

        Raises:
            FetchError: On network errors, non-2xx responses or malformed payloads
        """
        response = await self._request(
            "list_user_trips",
            "GET",
            f"/api/users/{quote(user_id, safe='')}/trips",
            FetchError,
        )
        assert response is not None
        try:
            items = response.json()
            if not isinstance(items, list):
                raise FetchError("Expected a JSON list of trips", status_code=response.status_code)
            return [Trip.model_validate(item) for item in items]
        except (ValueError, ValidationError) as e:
            raise FetchError(
                f"Malformed trip list payload: {type(e).__name__}",
                status_code=response.status_code,
            ) from e

    async def create_trip(self, draft: TripDraft) -> Trip:
        """Create a trip from a draft and return it with its assigned id.

        Raises:
            CreateError: If the API rejects the draft or is unreachable
        """
        response = await self._request(
            "create_trip", "POST", "/api/trips", CreateError, json=draft.to_wire()
        )
        assert response is not None
        return self._parse_trip(response, CreateError)

    async def update_trip(self, trip_id: str, trip: Trip) -> Trip:
        """Replace a stored trip with the full in-memory trip.

        Raises:
            UpdateError: If the API rejects the trip or is unreachable
        """
        response = await self._request(
            "update_trip",
            "PUT",
            f"/api/trips/{quote(trip_id, safe='')}",
            UpdateError,
            trip_id=trip_id,
            json=trip.to_wire(),
        )
        assert response is not None
        return self._parse_trip(response, UpdateError)

    async def delete_trip(self, trip_id: str) -> None:
        """Delete a trip. Any 2xx response counts as success.

        Raises:
            DeleteError: On non-2xx responses or network errors
        """
        await self._request(
            "delete_trip",
            "DELETE",
            f"/api/trips/{quote(trip_id, safe='')}",
            DeleteError,
            trip_id=trip_id,
        )

    async def update_activity_status(
        self, trip_id: str, day_index: int, activity_index: int, is_visited: bool
    ) -> None:
        """Push one activity's visited flag to the API.

        Raises:
            UpdateError: On non-2xx responses or network errors
        """
        await self._request(
            "update_activity_status",
            "PUT",
            f"/api/trips/{quote(trip_id, safe='')}/activity-status",
            UpdateError,
            trip_id=trip_id,
            json={
                "dayIndex": day_index,
                "activityIndex": activity_index,
                "isVisited": is_visited,
            },
        )

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        error_cls: type[TripApiError],
        *,
        trip_id: str | None = None,
        json: dict[str, Any] | None = None,
        allow_not_found: bool = False,
    ) -> httpx.Response | None:
        """Send a request, recording metrics and logs, and map failures to error_cls."""
        start = time.perf_counter()

        try:
            response = await self._client.request(method, f"{self._base_url}{path}", json=json)
        except httpx.HTTPError as e:
            latency_ms = (time.perf_counter() - start) * 1000
            reason = type(e).__name__
            self._metrics.record_latency(operation, "network_error", latency_ms)
            self._metrics.inc_error(operation, reason)
            self._logger.log_call(
                operation, "network_error", latency_ms, trip_id=trip_id, error_reason=reason
            )
            raise error_cls(f"{operation} failed: {reason}") from e

        latency_ms = (time.perf_counter() - start) * 1000

        if allow_not_found and response.status_code == 404:
            self._metrics.record_latency(operation, "not_found", latency_ms)
            self._logger.log_call(
                operation, "not_found", latency_ms, trip_id=trip_id, status_code=404
            )
            return None

        if not response.is_success:
            detail = _error_detail(response)
            self._metrics.record_latency(operation, "http_error", latency_ms)
            self._metrics.inc_error(operation, f"http_{response.status_code}")
            self._logger.log_call(
                operation,
                "http_error",
                latency_ms,
                trip_id=trip_id,
                status_code=response.status_code,
                error_reason=detail,
            )
            raise error_cls(
                f"{operation} failed with HTTP {response.status_code}: {detail}",
                status_code=response.status_code,
                detail=detail,
            )

        self._metrics.record_latency(operation, "success", latency_ms)
        self._logger.log_call(
            operation, "success", latency_ms, trip_id=trip_id, status_code=response.status_code
        )
        return response

    @staticmethod
    def _parse_trip(response: httpx.Response, error_cls: type[TripApiError]) -> Trip:
        """Validate a trip payload, mapping malformed bodies to error_cls."""
        try:
            return Trip.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise error_cls(
                f"Malformed trip payload: {type(e).__name__}",
                status_code=response.status_code,
            ) from e


def create_trips_client(
    settings: Settings | None = None, client: httpx.AsyncClient | None = None
) -> TripsClient:
    """Factory wiring a TripsClient with Prometheus metrics and structured logging."""
    from trip_tracker.utils.logging import StructuredApiLogger
    from trip_tracker.utils.metrics import PrometheusApiMetrics

    settings = settings or get_settings()
    return TripsClient(
        base_url=settings.api_base_url,
        timeout=settings.api_timeout_seconds,
        client=client,
        metrics=PrometheusApiMetrics(),
        logger=StructuredApiLogger(),
    )
