"""Itinerary models - day plans and the allocations they own."""

import uuid
from datetime import date

from pydantic import BaseModel, Field, model_validator

from planner.app.models.catalog import OptionSelection
from planner.app.models.common import PackageType, TravelerProfile


def ranges_overlap(a_start: int, a_duration: int, b_start: int, b_duration: int) -> bool:
    """Half-open ranges [a, a+da) and [b, b+db) overlap iff a < b+db and b < a+da."""
    return a_start < b_start + b_duration and b_start < a_start + a_duration


class ServiceAllocation(BaseModel):
    """A service placed at a starting slot for consecutive slots."""

    allocation_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    service_id: str
    service_name: str
    start_slot_index: int = Field(..., ge=0)
    duration_slots: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    selected_options: list[OptionSelection] = Field(default_factory=list)
    configuration_label: str = ""

    @property
    def end_slot_index(self) -> int:
        """Exclusive end of the occupied range."""
        return self.start_slot_index + self.duration_slots

    def overlaps(self, start: int, duration: int) -> bool:
        """Whether this allocation intersects [start, start+duration)."""
        return ranges_overlap(self.start_slot_index, self.duration_slots, start, duration)


class DayPlan(BaseModel):
    """Plan for a single day."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    date: date
    allocations: list[ServiceAllocation] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_non_overlapping_allocations(self) -> "DayPlan":
        """Ensure allocations do not overlap."""
        if len(self.allocations) < 2:
            return self

        sorted_allocs = sorted(self.allocations, key=lambda a: a.start_slot_index)
        for i in range(len(sorted_allocs) - 1):
            current_end = sorted_allocs[i].end_slot_index
            next_start = sorted_allocs[i + 1].start_slot_index
            if current_end > next_start:
                raise ValueError(
                    f"Overlapping allocations: slot {current_end} > {next_start} on {self.date}"
                )
        return self

    def sorted_allocations(self) -> list[ServiceAllocation]:
        """Allocations in display order (by start slot, insertion order on ties)."""
        return sorted(self.allocations, key=lambda a: a.start_slot_index)


class Itinerary(BaseModel):
    """Ordered set of day plans for one trip."""

    itinerary_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    package_type: PackageType = PackageType.standard
    profile: TravelerProfile | None = None
    days: list[DayPlan] = Field(..., min_length=1)

    @property
    def service_count(self) -> int:
        """Number of allocations across all days."""
        return sum(len(day.allocations) for day in self.days)
