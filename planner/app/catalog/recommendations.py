"""Purpose-based recommendation provider."""

from collections.abc import Mapping, Sequence

from planner.app.models.catalog import ServiceCatalogEntry
from planner.app.models.common import PackageType, TravelerProfile

# Ranked service ids per trip purpose
DEFAULT_RECOMMENDATIONS: dict[TravelerProfile, tuple[str, ...]] = {
    TravelerProfile.family: (
        "catamaran-trips",
        "golf-cart-rentals",
        "bike-rentals",
        "babysitter",
        "adventure-excursions",
    ),
    TravelerProfile.couple: (
        "private-chef",
        "luxe-masseuse",
        "private-yacht-experience",
        "luxe-culinary",
        "horseback-riding",
    ),
    TravelerProfile.friends: (
        "catamaran-trips",
        "adventure-excursions",
        "karaoke",
        "live-music",
        "private-catamaran",
    ),
    TravelerProfile.relax: (
        "yoga-standard",
        "luxe-masseuse",
        "luxe-yoga",
        "personal-training",
        "private-chef",
    ),
}


def _fallback_key(entry: ServiceCatalogEntry) -> tuple[int, float, str]:
    # premium first, then cheapest; id keeps ties deterministic
    premium_rank = 0 if PackageType.premium in entry.package_types else 1
    return (premium_rank, entry.base_price, entry.id)


class PurposeRecommendationProvider:
    """Recommends services from a fixed purpose -> service ranking.

    When ``min_results`` is set and the ranking yields fewer matches, the
    remaining catalog entries pad the list (premium first, then by price).
    """

    def __init__(
        self,
        table: Mapping[TravelerProfile, Sequence[str]] | None = None,
        min_results: int = 0,
    ) -> None:
        self._table = dict(table) if table is not None else dict(DEFAULT_RECOMMENDATIONS)
        self._min_results = max(0, min_results)

    def recommend(
        self, profile: TravelerProfile, catalog: Sequence[ServiceCatalogEntry]
    ) -> list[ServiceCatalogEntry]:
        """Ordered, de-duplicated subset of the catalog for a profile."""
        by_id: dict[str, ServiceCatalogEntry] = {}
        for entry in catalog:
            by_id.setdefault(entry.id, entry)

        ranked: list[ServiceCatalogEntry] = []
        seen: set[str] = set()
        for service_id in self._table.get(profile, ()):
            entry = by_id.get(service_id)
            if entry is not None and service_id not in seen:
                ranked.append(entry)
                seen.add(service_id)

        if len(ranked) < self._min_results:
            rest = sorted((e for e in by_id.values() if e.id not in seen), key=_fallback_key)
            ranked.extend(rest[: self._min_results - len(ranked)])

        return ranked
