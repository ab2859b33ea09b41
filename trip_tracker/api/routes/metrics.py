"""Prometheus scrape endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

# Registers the trip client collectors so they are scraped before the first call
from trip_tracker.utils import metrics as trip_api_metrics  # noqa: F401

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Scrape trip_api_latency_ms and trip_api_errors_total with process defaults."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
