"""Mapping of planner errors onto HTTP responses."""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from planner.app.models.errors import PlannerError


class SessionNotFound(PlannerError):
    """No planning session with that id."""

    code = "SESSION_NOT_FOUND"


STATUS_BY_CODE: dict[str, int] = {
    "SESSION_NOT_FOUND": 404,
    "DAY_NOT_FOUND": 404,
    "SERVICE_NOT_FOUND": 404,
    "SLOT_CONFLICT": 409,
    "CANNOT_REMOVE_ONLY_DAY": 409,
    "INVALID_STATE_TRANSITION": 409,
    "MAX_DAYS_REACHED": 409,
    "SLOT_OUT_OF_RANGE": 422,
    "INVALID_PRICE_INPUT": 422,
    "PERSISTENCE_ERROR": 503,
}


def status_for(error: PlannerError) -> int:
    """HTTP status for a planner error (409 when unmapped)."""
    return STATUS_BY_CODE.get(error.code, 409)


def error_response(
    error: PlannerError,
    state: dict[str, Any] | None = None,
    signal: str | None = None,
) -> JSONResponse:
    """JSON body ``{"error": {...}, "state": ...}`` with the mapped status.

    ``signal`` is included when a placement surface stays open after the error.
    """
    content: dict[str, Any] = {"error": error.to_dict(), "state": state}
    if signal is not None:
        content["signal"] = signal
    return JSONResponse(status_code=status_for(error), content=content)


async def planner_error_handler(request: Request, exc: PlannerError) -> JSONResponse:
    """Exception handler for PlannerErrors raised out of a route."""
    return error_response(exc)
