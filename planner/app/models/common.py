"""Common types and enums shared across all models."""

from enum import Enum, IntEnum


class TravelerProfile(str, Enum):
    """Trip purpose used to query recommendations."""

    family = "family"
    couple = "couple"
    friends = "friends"
    relax = "relax"


class PackageType(str, Enum):
    """Tier a catalog entry is sold under."""

    standard = "standard"
    premium = "premium"


class ServiceCategory(str, Enum):
    """Catalog grouping for services."""

    water_activities = "water-activities"
    tours = "tours"
    transportation = "transportation"
    wellness = "wellness"
    food_drinks = "food-drinks"
    leisure = "leisure"


class WizardStep(IntEnum):
    """Top-level planning steps, numbered 1..5."""

    WELCOME = 1
    PURPOSE_SELECTION = 2
    RECOMMENDATIONS = 3
    DAY_PLANNING = 4
    SUMMARY = 5


class PlacementState(str, Enum):
    """State of the "place a service" sub-flow."""

    idle = "idle"
    slot_chosen = "slot_chosen"
    service_chosen = "service_chosen"
    confirmed = "confirmed"


class PlacementSignal(str, Enum):
    """Surface the presentation layer should open after a placement step."""

    catalog_open = "catalog_open"
    options_open = "options_open"
    closed = "closed"
