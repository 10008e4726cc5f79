"""Checkout hand-off from a finished planning session to the booking gateway."""

import time

from planner.app.config import Settings, get_settings
from planner.app.db.repositories import PersistenceGateway
from planner.app.models.booking import BookingReceipt, ClientContact, ItinerarySnapshot
from planner.app.models.common import WizardStep
from planner.app.models.errors import InvalidStateTransition, PersistenceError
from planner.app.pricing.calculator import apply_tax
from planner.app.utils.logging import PlannerEventLogger
from planner.app.utils.metrics import NullPlannerMetrics, PlannerMetrics
from planner.app.wizard.controller import WizardController


def build_snapshot(
    controller: WizardController,
    contact: ClientContact | None = None,
    notes: str | None = None,
    settings: Settings | None = None,
) -> ItinerarySnapshot:
    """Freeze the controller's itinerary and its totals."""
    settings = settings or get_settings()
    itinerary = controller.itinerary
    trip_total = controller.engine.trip_total()
    taxed = apply_tax(trip_total, settings.tax_rate_percent)

    return ItinerarySnapshot(
        itinerary_id=itinerary.itinerary_id,
        profile=itinerary.profile,
        package_type=itinerary.package_type,
        days=[day.model_copy(deep=True) for day in itinerary.days],
        trip_total=trip_total,
        tax=taxed.tax,
        total_with_tax=taxed.total,
        contact=contact,
        notes=notes,
    )


def submit_itinerary(
    controller: WizardController,
    gateway: PersistenceGateway,
    contact: ClientContact | None = None,
    notes: str | None = None,
    *,
    settings: Settings | None = None,
    metrics: PlannerMetrics | None = None,
    event_logger: PlannerEventLogger | None = None,
) -> BookingReceipt:
    """Hand a finished itinerary to the booking gateway.

    The gateway is called exactly once. Failures are not retried and the
    wizard stays on the summary step either way.

    Args:
        controller: Session whose itinerary is being booked
        gateway: Booking persistence
        contact: Who the booking is for
        notes: Free-form notes for the operator

    Returns:
        Receipt with the booking id

    Raises:
        InvalidStateTransition: If the session is not on the summary step
        PersistenceError: If the gateway fails
    """
    metrics = metrics or NullPlannerMetrics()
    events = event_logger or PlannerEventLogger()
    itinerary_id = controller.itinerary.itinerary_id

    if controller.step is not WizardStep.SUMMARY:
        raise InvalidStateTransition(
            "Checkout is only possible from the summary step",
            action="checkout",
            step=controller.step.name,
        )

    snapshot = build_snapshot(controller, contact, notes, settings)

    start_time = time.perf_counter()
    try:
        receipt = gateway.save_booking(snapshot)
    except PersistenceError as e:
        latency_ms = (time.perf_counter() - start_time) * 1000
        metrics.record_booking("error", latency_ms)
        events.log_booking(itinerary_id, "error", latency_ms, error_reason=e.message)
        raise

    latency_ms = (time.perf_counter() - start_time) * 1000
    metrics.record_booking("success", latency_ms)
    events.log_booking(itinerary_id, "success", latency_ms, booking_id=receipt.booking_id)
    return receipt
