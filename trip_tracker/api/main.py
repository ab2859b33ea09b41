"""FastAPI application - reference trip API served over an in-memory repository."""

from fastapi import FastAPI

from trip_tracker.api.routes.health import router as health_router
from trip_tracker.api.routes.metrics import router as metrics_router
from trip_tracker.api.routes.trips import router as trips_router

API_TITLE = "Trip Tracker API"
API_VERSION = "0.1.0"


def create_app() -> FastAPI:
    """Build the app with health, metrics and trip routes."""
    application = FastAPI(title=API_TITLE, version=API_VERSION)
    application.include_router(health_router, tags=["health"])
    application.include_router(metrics_router, tags=["metrics"])
    application.include_router(trips_router)

    @application.get("/")
    async def root() -> dict[str, str]:
        """Service name, version and trip route prefix."""
        return {"message": API_TITLE, "version": API_VERSION, "trips": trips_router.prefix}

    return application


app = create_app()
