"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint.

    Exposes all registered Prometheus metrics including:
    - planner_allocations_total{outcome}
    - planner_wizard_transitions_total{action, outcome}
    - planner_bookings_total{outcome}
    - planner_checkout_latency_ms
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
