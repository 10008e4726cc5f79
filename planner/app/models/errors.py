"""Domain error kinds.

All planner errors are recoverable by a user action: the caller shows the
message and lets the user pick again. None of them invalidate the session.
"""

from typing import Any


class PlannerError(Exception):
    """Base class for recoverable planner errors."""

    code = "PLANNER_ERROR"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses and structured logs."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class SlotOutOfRange(PlannerError):
    """Slot index (or the end of a slot range) falls outside the daily grid."""

    code = "SLOT_OUT_OF_RANGE"


class SlotConflict(PlannerError):
    """Requested slot range overlaps an existing allocation on the same day."""

    code = "SLOT_CONFLICT"


class CannotRemoveOnlyDay(PlannerError):
    """The last remaining day of an itinerary cannot be removed."""

    code = "CANNOT_REMOVE_ONLY_DAY"


class InvalidPriceInput(PlannerError):
    """Negative, non-finite, or unresolvable pricing input."""

    code = "INVALID_PRICE_INPUT"


class InvalidStateTransition(PlannerError):
    """Wizard or placement transition not legal from the current state."""

    code = "INVALID_STATE_TRANSITION"


class DayNotFound(PlannerError):
    """Day index does not exist in the itinerary."""

    code = "DAY_NOT_FOUND"


class ServiceNotFound(PlannerError):
    """Service id is not in the catalog."""

    code = "SERVICE_NOT_FOUND"


class MaxDaysReached(PlannerError):
    """Itinerary already holds the configured maximum number of days."""

    code = "MAX_DAYS_REACHED"


class PersistenceError(PlannerError):
    """Booking gateway failed to store the itinerary snapshot."""

    code = "PERSISTENCE_ERROR"
