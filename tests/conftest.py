"""Shared pytest fixtures for all test suites."""

from collections.abc import Iterator
from datetime import date

import pytest

from planner.app.catalog.recommendations import PurposeRecommendationProvider
from planner.app.catalog.seed import default_catalog
from planner.app.catalog.service_catalog import InMemoryServiceCatalog
from planner.app.config import Settings, get_settings
from planner.app.models.catalog import (
    AdditiveAdjustment,
    DoublingAdjustment,
    OptionChoice,
    OptionGroup,
    ServiceCatalogEntry,
    ThresholdTieredAdjustment,
)
from planner.app.models.common import ServiceCategory
from planner.app.scheduling.engine import SchedulingEngine, new_itinerary
from planner.app.scheduling.slots import TimeSlotCatalog
from planner.app.wizard.controller import WizardController

TRIP_START = date(2025, 6, 10)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Re-read settings for every test so env overrides never leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Default settings."""
    return Settings()


@pytest.fixture
def slots() -> TimeSlotCatalog:
    """Default 9-slot grid, 9:00 AM .. 5:00 PM."""
    return TimeSlotCatalog.from_settings(Settings())


@pytest.fixture
def dinner_service() -> ServiceCatalogEntry:
    """Two-slot service priced with a meal choice and a guest-count tier."""
    return ServiceCatalogEntry(
        id="chef-dinner",
        name="Chef Dinner",
        base_price=100,
        duration_slots=2,
        category=ServiceCategory.food_drinks,
        option_groups=[
            OptionGroup(
                id="mealType",
                label="Meal",
                choices=[
                    OptionChoice(value="lunch", label="Lunch", adjustment=AdditiveAdjustment(amount=20)),
                    OptionChoice(value="dinner", label="Dinner", adjustment=AdditiveAdjustment(amount=30)),
                ],
            ),
            OptionGroup(
                id="guestCount",
                label="Guests",
                tiered=ThresholdTieredAdjustment(threshold=4, per_unit_amount=10),
            ),
        ],
    )


@pytest.fixture
def transfer_service() -> ServiceCatalogEntry:
    """One-slot service with a round-trip doubling option."""
    return ServiceCatalogEntry(
        id="transfer",
        name="Transfer",
        base_price=40,
        duration_slots=1,
        category=ServiceCategory.transportation,
        option_groups=[
            OptionGroup(
                id="tripType",
                label="Trip",
                choices=[
                    OptionChoice(value="oneWay", label="One way"),
                    OptionChoice(value="roundTrip", label="Round trip", adjustment=DoublingAdjustment()),
                ],
            ),
        ],
    )


@pytest.fixture
def one_slot_service() -> ServiceCatalogEntry:
    """Plain one-slot service without options."""
    return ServiceCatalogEntry(
        id="yoga",
        name="Yoga",
        base_price=80,
        duration_slots=1,
        category=ServiceCategory.wellness,
    )


@pytest.fixture
def engine(slots: TimeSlotCatalog) -> SchedulingEngine:
    """Engine over a fresh one-day itinerary."""
    return SchedulingEngine(new_itinerary(TRIP_START), slots)


@pytest.fixture
def catalog() -> InMemoryServiceCatalog:
    """Seeded default catalog."""
    return default_catalog()


@pytest.fixture
def controller(
    engine: SchedulingEngine, catalog: InMemoryServiceCatalog, settings: Settings
) -> WizardController:
    """Wizard over the fixture engine and the default catalog."""
    return WizardController(
        engine, catalog, PurposeRecommendationProvider(), settings=settings
    )
