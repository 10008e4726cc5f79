"""Scheduling engine - owns day plans and enforces non-overlapping allocations."""

from collections.abc import Sequence
from datetime import date, timedelta

from planner.app.models.catalog import OptionSelection, ServiceCatalogEntry
from planner.app.models.common import PackageType
from planner.app.models.errors import (
    CannotRemoveOnlyDay,
    DayNotFound,
    PlannerError,
    SlotConflict,
    SlotOutOfRange,
)
from planner.app.models.itinerary import DayPlan, Itinerary, ServiceAllocation
from planner.app.pricing.calculator import describe_selections, price, sum_money
from planner.app.scheduling.slots import TimeSlotCatalog
from planner.app.utils.logging import PlannerEventLogger
from planner.app.utils.metrics import NullPlannerMetrics, PlannerMetrics


def new_itinerary(
    start_date: date,
    days: int = 1,
    package_type: PackageType = PackageType.standard,
) -> Itinerary:
    """Create an itinerary with ``days`` contiguous, empty day plans.

    Args:
        start_date: Date of day 1
        days: Number of days to create (>= 1)
        package_type: Catalog tier the trip is planned against

    Returns:
        Itinerary with empty day plans
    """
    if days < 1:
        raise ValueError(f"an itinerary needs at least one day, got {days}")
    return Itinerary(
        package_type=package_type,
        days=[DayPlan(date=start_date + timedelta(days=i)) for i in range(days)],
    )


def new_itinerary_for_range(
    start_date: date,
    end_date: date,
    package_type: PackageType = PackageType.standard,
) -> Itinerary:
    """Create one empty day plan per date from ``start_date`` to ``end_date`` inclusive."""
    if end_date < start_date:
        raise ValueError(f"end date {end_date} is before start date {start_date}")
    return new_itinerary(start_date, (end_date - start_date).days + 1, package_type)


class SchedulingEngine:
    """Mutable owner of an itinerary's day plans.

    Every mutating operation validates fully before touching state, so a
    rejected call leaves the itinerary exactly as it was.
    """

    def __init__(
        self,
        itinerary: Itinerary,
        slots: TimeSlotCatalog,
        *,
        metrics: PlannerMetrics | None = None,
        event_logger: PlannerEventLogger | None = None,
    ) -> None:
        self._itinerary = itinerary
        self._slots = slots
        self._metrics = metrics or NullPlannerMetrics()
        self._events = event_logger or PlannerEventLogger()
        self._active_day = 0

    @property
    def itinerary(self) -> Itinerary:
        return self._itinerary

    @property
    def slots(self) -> TimeSlotCatalog:
        return self._slots

    @property
    def days(self) -> list[DayPlan]:
        return self._itinerary.days

    @property
    def active_day_index(self) -> int:
        """Index of the day currently being planned."""
        return self._active_day

    def day(self, day_index: int) -> DayPlan:
        """Day plan at index.

        Raises:
            DayNotFound: If the index does not address a day
        """
        if not 0 <= day_index < len(self.days):
            raise DayNotFound(
                f"Day index {day_index} does not exist (itinerary has {len(self.days)} days)",
                day_index=day_index,
            )
        return self.days[day_index]

    def set_active_day(self, day_index: int) -> DayPlan:
        """Point the planner at another day."""
        plan = self.day(day_index)
        self._active_day = day_index
        return plan

    # Days

    def add_day(self) -> DayPlan:
        """Append an empty day dated one day after the current last day."""
        last = self.days[-1]
        plan = DayPlan(date=last.date + timedelta(days=1))
        self.days.append(plan)
        return plan

    def remove_last_day(self) -> DayPlan:
        """Drop the trailing day.

        Raises:
            CannotRemoveOnlyDay: If exactly one day remains
        """
        if len(self.days) <= 1:
            raise CannotRemoveOnlyDay("An itinerary must keep at least one day")

        removed = self.days.pop()
        if self._active_day >= len(self.days):
            self._active_day = len(self.days) - 1
        return removed

    # Slots

    def is_slot_range_free(self, day_index: int, start_slot: int, duration_slots: int) -> bool:
        """True iff no allocation on the day overlaps [start, start+duration)."""
        plan = self.day(day_index)
        return not any(a.overlaps(start_slot, duration_slots) for a in plan.allocations)

    def find_conflicts(self, day_index: int) -> list[tuple[ServiceAllocation, ServiceAllocation]]:
        """Pairs of overlapping allocations on a day (empty while the invariant holds)."""
        allocations = self.day(day_index).allocations
        conflicts = []
        for i, first in enumerate(allocations):
            for second in allocations[i + 1 :]:
                if first.overlaps(second.start_slot_index, second.duration_slots):
                    conflicts.append((first, second))
        return conflicts

    def allocate(
        self,
        day_index: int,
        service: ServiceCatalogEntry,
        start_slot: int,
        selections: Sequence[OptionSelection] = (),
    ) -> ServiceAllocation:
        """Price and place a service on a day.

        Args:
            day_index: Target day
            service: Catalog entry being placed
            start_slot: First slot the service occupies
            selections: Chosen options for the service

        Returns:
            The appended allocation

        Raises:
            DayNotFound: Unknown day
            SlotOutOfRange: Start slot outside the grid, or range runs past the last slot
            InvalidPriceInput: Selections cannot be priced
            SlotConflict: Range overlaps an existing allocation
        """
        try:
            plan = self.day(day_index)
            self._slots.label_of(start_slot)

            allocation_price = price(service.base_price, selections, service.option_groups)

            if not self.is_slot_range_free(day_index, start_slot, service.duration_slots):
                raise SlotConflict(
                    f"{service.name} at {self._slots.label_of(start_slot)} overlaps "
                    f"an existing service",
                    day_index=day_index,
                    start_slot=start_slot,
                    duration_slots=service.duration_slots,
                )

            if start_slot + service.duration_slots > self._slots.count():
                raise SlotOutOfRange(
                    f"{service.name} needs {service.duration_slots} slots and does not fit "
                    f"after {self._slots.label_of(start_slot)}",
                    start_slot=start_slot,
                    duration_slots=service.duration_slots,
                    slot_count=self._slots.count(),
                )
        except PlannerError as e:
            self._metrics.inc_allocation(e.code.lower())
            self._events.log_allocation(
                self._itinerary.itinerary_id,
                day_index,
                service.id,
                start_slot,
                outcome="rejected",
                error_code=e.code,
            )
            raise

        allocation = ServiceAllocation(
            service_id=service.id,
            service_name=service.name,
            start_slot_index=start_slot,
            duration_slots=service.duration_slots,
            price=allocation_price,
            selected_options=list(selections),
            configuration_label=describe_selections(selections, service.option_groups),
        )
        plan.allocations.append(allocation)

        self._metrics.inc_allocation("success")
        self._events.log_allocation(
            self._itinerary.itinerary_id,
            day_index,
            service.id,
            start_slot,
            outcome="success",
            price=allocation_price,
        )
        return allocation

    def deallocate(self, day_index: int, service_id: str) -> int:
        """Remove a service from a day; absent services are a no-op.

        Returns:
            Number of allocations removed
        """
        plan = self.day(day_index)
        kept = [a for a in plan.allocations if a.service_id != service_id]
        removed = len(plan.allocations) - len(kept)
        if removed:
            plan.allocations[:] = kept
        self._events.log_removal(self._itinerary.itinerary_id, day_index, service_id, removed)
        return removed

    # Totals

    def day_total(self, day_index: int) -> float:
        """Sum of a day's allocation prices."""
        return sum_money(a.price for a in self.day(day_index).allocations)

    def trip_total(self) -> float:
        """Sum of all day totals."""
        return sum_money(self.day_total(i) for i in range(len(self.days)))
