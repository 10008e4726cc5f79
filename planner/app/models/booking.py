"""Booking hand-off models - what the core gives the persistence gateway."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from planner.app.models.common import PackageType, TravelerProfile
from planner.app.models.itinerary import DayPlan

BookingStatus = Literal["pending", "approved", "cancelled"]


class ClientContact(BaseModel):
    """Who the booking is for."""

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone: str | None = None


class ItinerarySnapshot(BaseModel):
    """Frozen copy of a finished itinerary."""

    itinerary_id: str
    profile: TravelerProfile | None
    package_type: PackageType
    days: list[DayPlan]
    trip_total: float
    tax: float
    total_with_tax: float
    contact: ClientContact | None = None
    notes: str | None = None


class BookingReceipt(BaseModel):
    """Gateway acknowledgement for a stored snapshot."""

    booking_id: str
    status: BookingStatus = "pending"
    created_at: datetime
