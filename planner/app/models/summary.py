"""Read models for the itinerary review step and price breakdowns."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

from planner.app.models.common import PackageType, TravelerProfile

LineKind = Literal["base", "addon", "discount", "multiplier", "tiered"]


class PriceLine(BaseModel):
    """One line of a price breakdown."""

    label: str
    amount: float
    kind: LineKind


class PriceBreakdown(BaseModel):
    """Subtotal, tax and total with the lines that produced them."""

    subtotal: float
    tax: float = 0.0
    total: float
    details: list[PriceLine] = Field(default_factory=list)


class AllocationLine(BaseModel):
    """Single allocation as shown in the summary."""

    allocation_id: str
    service_id: str
    service_name: str
    start_slot_index: int
    duration_slots: int
    start_label: str
    end_label: str
    price: float
    configuration_label: str = ""


class DaySummary(BaseModel):
    """Per-day breakdown, allocations sorted by start slot."""

    day_number: int = Field(..., ge=1, description="1-based display index ('Day 1')")
    date: date
    day_total: float
    items: list[AllocationLine] = Field(default_factory=list)


class ItinerarySummary(BaseModel):
    """Aggregated view over the whole itinerary."""

    itinerary_id: str
    profile: TravelerProfile | None
    package_type: PackageType
    total_days: int
    total_services: int
    trip_total: float
    tax_rate_percent: float
    tax: float
    total_with_tax: float
    days: list[DaySummary] = Field(default_factory=list)
