"""Default catalog of bookable services."""

from planner.app.catalog.service_catalog import InMemoryServiceCatalog
from planner.app.models.catalog import (
    AdditiveAdjustment,
    DoublingAdjustment,
    OptionChoice,
    OptionGroup,
    ServiceCatalogEntry,
    ThresholdTieredAdjustment,
)
from planner.app.models.common import PackageType, ServiceCategory

STANDARD = [PackageType.standard]
PREMIUM = [PackageType.premium]
BOTH = [PackageType.standard, PackageType.premium]


def _choice(value: str, label: str, amount: float | None = None) -> OptionChoice:
    adjustment = AdditiveAdjustment(amount=amount) if amount is not None else None
    return OptionChoice(value=value, label=label, adjustment=adjustment)


def _guests(threshold: int, per_unit: float) -> OptionGroup:
    return OptionGroup(
        id="guestCount",
        label="Guests",
        tiered=ThresholdTieredAdjustment(threshold=threshold, per_unit_amount=per_unit),
    )


def _round_trip() -> OptionGroup:
    return OptionGroup(
        id="tripType",
        label="Trip",
        choices=[
            OptionChoice(value="oneWay", label="One way"),
            OptionChoice(value="roundTrip", label="Round trip", adjustment=DoublingAdjustment()),
        ],
    )


DEFAULT_SERVICES: list[ServiceCatalogEntry] = [
    ServiceCatalogEntry(
        id="private-chef",
        name="Private Chef",
        base_price=200,
        duration_slots=3,
        category=ServiceCategory.food_drinks,
        package_types=STANDARD,
        option_groups=[
            OptionGroup(
                id="cuisineType",
                label="Cuisine",
                choices=[
                    _choice("italian", "Italian"),
                    _choice("mexican", "Mexican"),
                    _choice("dominican", "Dominican"),
                ],
            ),
            OptionGroup(
                id="mealType",
                label="Meal",
                choices=[
                    _choice("breakfast", "Breakfast", 40),
                    _choice("lunch", "Lunch", 60),
                    _choice("dinner", "Dinner", 80),
                    _choice("fullDay", "Full day", 150),
                ],
            ),
            _guests(threshold=4, per_unit=10),
        ],
    ),
    ServiceCatalogEntry(
        id="golf-cart-rentals",
        name="Golf Cart Rental",
        base_price=65,
        duration_slots=1,
        category=ServiceCategory.transportation,
        package_types=STANDARD,
        option_groups=[
            OptionGroup(
                id="cartType",
                label="Cart",
                choices=[
                    _choice("standard", "Standard"),
                    _choice("luxury", "Luxury", 25),
                    _choice("sixSeater", "Six seater", 30),
                ],
            ),
            OptionGroup(
                id="insurance",
                label="Insurance",
                choices=[_choice("basic", "Basic", 5), _choice("full", "Full", 10)],
            ),
        ],
    ),
    ServiceCatalogEntry(
        id="airport-transfers",
        name="Airport Transfer",
        base_price=60,
        duration_slots=1,
        category=ServiceCategory.transportation,
        package_types=BOTH,
        option_groups=[_round_trip(), _guests(threshold=4, per_unit=15)],
    ),
    ServiceCatalogEntry(
        id="point-to-point-transfers",
        name="Point to Point Transfer",
        base_price=45,
        duration_slots=1,
        category=ServiceCategory.transportation,
        package_types=STANDARD,
        option_groups=[_round_trip()],
    ),
    ServiceCatalogEntry(
        id="yoga-standard",
        name="Yoga Session",
        base_price=50,
        duration_slots=1,
        category=ServiceCategory.wellness,
        package_types=STANDARD,
        option_groups=[
            OptionGroup(
                id="yogaStyle",
                label="Style",
                choices=[
                    _choice("hatha", "Hatha"),
                    _choice("vinyasa", "Vinyasa"),
                    _choice("restorative", "Restorative"),
                    _choice("meditation", "Meditation", -10),
                ],
            ),
            OptionGroup(
                id="location",
                label="Location",
                choices=[
                    _choice("beach", "Beach", 15),
                    _choice("pool", "Pool"),
                    _choice("indoors", "Indoors"),
                ],
            ),
        ],
    ),
    ServiceCatalogEntry(
        id="personal-training",
        name="Personal Trainer",
        base_price=70,
        duration_slots=1,
        category=ServiceCategory.wellness,
        package_types=STANDARD,
    ),
    ServiceCatalogEntry(
        id="standard-massage",
        name="Massage",
        base_price=120,
        duration_slots=1,
        category=ServiceCategory.wellness,
        package_types=STANDARD,
        option_groups=[
            OptionGroup(
                id="length",
                label="Length",
                choices=[_choice("60", "60 minutes"), _choice("90", "90 minutes", 50)],
            )
        ],
    ),
    ServiceCatalogEntry(
        id="karaoke",
        name="Karaoke Night",
        base_price=150,
        duration_slots=2,
        category=ServiceCategory.leisure,
        package_types=STANDARD,
        option_groups=[_guests(threshold=10, per_unit=8)],
    ),
    ServiceCatalogEntry(
        id="bike-rentals",
        name="Bike Rental",
        base_price=35,
        duration_slots=1,
        category=ServiceCategory.transportation,
        package_types=STANDARD,
    ),
    ServiceCatalogEntry(
        id="babysitter",
        name="Babysitter",
        base_price=40,
        duration_slots=2,
        category=ServiceCategory.leisure,
        package_types=STANDARD,
        option_groups=[_guests(threshold=1, per_unit=20)],
    ),
    ServiceCatalogEntry(
        id="catamaran-trips",
        name="Catamaran Trip",
        base_price=95,
        duration_slots=4,
        category=ServiceCategory.water_activities,
        package_types=STANDARD,
        option_groups=[_guests(threshold=2, per_unit=85)],
    ),
    ServiceCatalogEntry(
        id="saona-island-tour",
        name="Saona Island Tour",
        base_price=110,
        duration_slots=6,
        category=ServiceCategory.tours,
        package_types=STANDARD,
    ),
    ServiceCatalogEntry(
        id="horseback-riding",
        name="Horseback Riding",
        base_price=85,
        duration_slots=2,
        category=ServiceCategory.tours,
        package_types=STANDARD,
        option_groups=[
            OptionGroup(
                id="schedule",
                label="Schedule",
                choices=[_choice("morning", "Morning"), _choice("sunset", "Sunset", 20)],
            )
        ],
    ),
    ServiceCatalogEntry(
        id="deep-sea-fishing",
        name="Deep Sea Fishing",
        base_price=180,
        duration_slots=4,
        category=ServiceCategory.water_activities,
        package_types=STANDARD,
    ),
    ServiceCatalogEntry(
        id="adventure-excursions",
        name="Adventure Excursion",
        base_price=100,
        duration_slots=4,
        category=ServiceCategory.tours,
        package_types=STANDARD,
    ),
    ServiceCatalogEntry(
        id="live-music",
        name="Live Music",
        base_price=250,
        duration_slots=2,
        category=ServiceCategory.leisure,
        package_types=STANDARD,
    ),
    ServiceCatalogEntry(
        id="luxe-yoga",
        name="Luxe Yoga Experience",
        base_price=120,
        duration_slots=1,
        category=ServiceCategory.wellness,
        package_types=PREMIUM,
    ),
    ServiceCatalogEntry(
        id="luxe-masseuse",
        name="Luxe Masseuse",
        base_price=180,
        duration_slots=2,
        category=ServiceCategory.wellness,
        package_types=PREMIUM,
        option_groups=[_guests(threshold=1, per_unit=150)],
    ),
    ServiceCatalogEntry(
        id="private-catamaran",
        name="Private Catamaran",
        base_price=900,
        duration_slots=5,
        category=ServiceCategory.water_activities,
        package_types=PREMIUM,
        option_groups=[_guests(threshold=10, per_unit=45)],
    ),
    ServiceCatalogEntry(
        id="private-yacht-experience",
        name="Private Yacht Experience",
        base_price=1200,
        duration_slots=4,
        category=ServiceCategory.water_activities,
        package_types=PREMIUM,
    ),
    ServiceCatalogEntry(
        id="luxe-yacht",
        name="Luxe Yacht",
        base_price=1500,
        duration_slots=8,
        category=ServiceCategory.water_activities,
        package_types=PREMIUM,
    ),
    ServiceCatalogEntry(
        id="luxe-culinary",
        name="Luxe Culinary Experience",
        base_price=350,
        duration_slots=3,
        category=ServiceCategory.food_drinks,
        package_types=PREMIUM,
        option_groups=[_guests(threshold=2, per_unit=95)],
    ),
    ServiceCatalogEntry(
        id="luxe-arrival",
        name="Luxe Arrival",
        base_price=220,
        duration_slots=1,
        category=ServiceCategory.transportation,
        package_types=PREMIUM,
        option_groups=[_round_trip()],
    ),
]


def default_catalog() -> InMemoryServiceCatalog:
    """Catalog seeded with the default services."""
    return InMemoryServiceCatalog(DEFAULT_SERVICES)
