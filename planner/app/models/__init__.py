"""Models package - re-exports for convenience."""

from planner.app.models.booking import BookingReceipt, ClientContact, ItinerarySnapshot
from planner.app.models.catalog import (
    AdditiveAdjustment,
    DoublingAdjustment,
    OptionChoice,
    OptionGroup,
    OptionSelection,
    ServiceCatalogEntry,
    ThresholdTieredAdjustment,
)
from planner.app.models.common import (
    PackageType,
    PlacementSignal,
    PlacementState,
    ServiceCategory,
    TravelerProfile,
    WizardStep,
)
from planner.app.models.errors import (
    CannotRemoveOnlyDay,
    DayNotFound,
    InvalidPriceInput,
    InvalidStateTransition,
    MaxDaysReached,
    PersistenceError,
    PlannerError,
    ServiceNotFound,
    SlotConflict,
    SlotOutOfRange,
)
from planner.app.models.itinerary import DayPlan, Itinerary, ServiceAllocation
from planner.app.models.summary import (
    AllocationLine,
    DaySummary,
    ItinerarySummary,
    PriceBreakdown,
    PriceLine,
)

__all__ = [
    # Common
    "TravelerProfile",
    "PackageType",
    "ServiceCategory",
    "WizardStep",
    "PlacementState",
    "PlacementSignal",
    # Catalog
    "ServiceCatalogEntry",
    "OptionGroup",
    "OptionChoice",
    "OptionSelection",
    "AdditiveAdjustment",
    "DoublingAdjustment",
    "ThresholdTieredAdjustment",
    # Itinerary
    "Itinerary",
    "DayPlan",
    "ServiceAllocation",
    # Summary
    "ItinerarySummary",
    "DaySummary",
    "AllocationLine",
    "PriceBreakdown",
    "PriceLine",
    # Booking
    "ItinerarySnapshot",
    "ClientContact",
    "BookingReceipt",
    # Errors
    "PlannerError",
    "SlotOutOfRange",
    "SlotConflict",
    "CannotRemoveOnlyDay",
    "InvalidPriceInput",
    "InvalidStateTransition",
    "DayNotFound",
    "ServiceNotFound",
    "MaxDaysReached",
    "PersistenceError",
]
