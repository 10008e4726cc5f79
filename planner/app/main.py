"""FastAPI application."""

from fastapi import FastAPI

from planner.app.api.errors import planner_error_handler
from planner.app.api.routes.catalog import router as catalog_router
from planner.app.api.routes.health import router as health_router
from planner.app.api.routes.itineraries import router as itineraries_router
from planner.app.api.routes.metrics import router as metrics_router
from planner.app.config import get_settings
from planner.app.models.errors import PlannerError
from planner.app.utils.logging import configure_logging

configure_logging(get_settings().log_level)

app = FastAPI(title="Itinerary Planner API", version="0.1.0")

app.add_exception_handler(PlannerError, planner_error_handler)  # type: ignore[arg-type]

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(catalog_router)
app.include_router(itineraries_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Itinerary Planner API", "version": "0.1.0"}
