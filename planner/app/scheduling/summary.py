"""Read-only itinerary projection for the review step."""

from planner.app.config import Settings, get_settings
from planner.app.models.itinerary import DayPlan
from planner.app.models.summary import AllocationLine, DaySummary, ItinerarySummary
from planner.app.pricing.calculator import apply_tax
from planner.app.scheduling.engine import SchedulingEngine
from planner.app.scheduling.slots import TimeSlotCatalog


class ItinerarySummaryProjection:
    """Aggregates day plans into counts, totals and a sorted per-day breakdown."""

    def __init__(self, slots: TimeSlotCatalog, settings: Settings | None = None) -> None:
        self._slots = slots
        self._settings = settings or get_settings()

    def project(self, engine: SchedulingEngine) -> ItinerarySummary:
        """Compute the summary on demand; never mutates the itinerary."""
        itinerary = engine.itinerary
        days = [
            DaySummary(
                day_number=i + 1,
                date=plan.date,
                day_total=engine.day_total(i),
                items=self._lines(plan),
            )
            for i, plan in enumerate(itinerary.days)
        ]

        trip_total = engine.trip_total()
        taxed = apply_tax(trip_total, self._settings.tax_rate_percent)

        return ItinerarySummary(
            itinerary_id=itinerary.itinerary_id,
            profile=itinerary.profile,
            package_type=itinerary.package_type,
            total_days=len(itinerary.days),
            total_services=itinerary.service_count,
            trip_total=trip_total,
            tax_rate_percent=self._settings.tax_rate_percent,
            tax=taxed.tax,
            total_with_tax=taxed.total,
            days=days,
        )

    def _lines(self, plan: DayPlan) -> list[AllocationLine]:
        return [
            AllocationLine(
                allocation_id=a.allocation_id,
                service_id=a.service_id,
                service_name=a.service_name,
                start_slot_index=a.start_slot_index,
                duration_slots=a.duration_slots,
                start_label=self._slots.label_of(a.start_slot_index),
                end_label=self._slots.end_label_of(a.start_slot_index, a.duration_slots),
                price=a.price,
                configuration_label=a.configuration_label,
            )
            for a in plan.sorted_allocations()
        ]

    def format_day_schedule(self, plan: DayPlan) -> str:
        """Plain-text schedule of a day, one service per line."""
        if not plan.allocations:
            return "No services scheduled"

        return "\n".join(
            f"{line.start_label} - {line.end_label}: {line.service_name}"
            for line in self._lines(plan)
        )
