"""Structured logging for planner events."""

import logging
from typing import Any

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the application process."""
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT)


class PlannerEventLogger:
    """Structured logger for itinerary events."""

    def log_allocation(
        self,
        itinerary_id: str,
        day_index: int,
        service_id: str,
        start_slot: int,
        outcome: str,
        price: float | None = None,
        error_code: str | None = None,
    ) -> None:
        """Log an allocation attempt with structured data."""
        log_data: dict[str, Any] = {
            "itinerary_id": itinerary_id,
            "day_index": day_index,
            "service_id": service_id,
            "start_slot": start_slot,
            "outcome": outcome,
        }
        if price is not None:
            log_data["price"] = price
        if error_code:
            log_data["error_code"] = error_code

        log_msg = f"Allocation: {service_id} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

    def log_removal(self, itinerary_id: str, day_index: int, service_id: str, removed: int) -> None:
        """Log a deallocation (including no-op removals)."""
        logger.info(
            f"Deallocation: {service_id} - removed {removed}",
            extra={
                "structured": {
                    "itinerary_id": itinerary_id,
                    "day_index": day_index,
                    "service_id": service_id,
                    "removed": removed,
                }
            },
        )

    def log_transition(
        self,
        itinerary_id: str,
        action: str,
        from_state: str,
        to_state: str,
        error_code: str | None = None,
    ) -> None:
        """Log a wizard or placement transition."""
        log_data: dict[str, Any] = {
            "itinerary_id": itinerary_id,
            "action": action,
            "from": from_state,
            "to": to_state,
        }
        if error_code:
            log_data["error_code"] = error_code
            logger.warning(f"Transition rejected: {action}", extra={"structured": log_data})
        else:
            logger.info(f"Transition: {action}", extra={"structured": log_data})

    def log_booking(
        self,
        itinerary_id: str,
        outcome: str,
        latency_ms: float,
        booking_id: str | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log a booking hand-off."""
        log_data: dict[str, Any] = {
            "itinerary_id": itinerary_id,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }
        if booking_id:
            log_data["booking_id"] = booking_id
        if error_reason:
            log_data["error_reason"] = error_reason

        if outcome == "success":
            logger.info(f"Booking stored: {booking_id}", extra={"structured": log_data})
        else:
            logger.warning("Booking failed", extra={"structured": log_data})
