"""Protocol interfaces for catalog collaborators."""

from collections.abc import Sequence
from typing import Protocol

from planner.app.models.catalog import ServiceCatalogEntry
from planner.app.models.common import PackageType, TravelerProfile


class ServiceCatalog(Protocol):
    """Read-only lookup over bookable services."""

    def by_id(self, service_id: str) -> ServiceCatalogEntry | None:
        """Get a service by id.

        Args:
            service_id: Catalog identifier

        Returns:
            Entry or None if not found
        """
        ...

    def by_package_type(self, package_type: PackageType) -> list[ServiceCatalogEntry]:
        """List services sold under a package tier, in declaration order."""
        ...

    def category_of(self, service_id: str) -> str:
        """Category of a service.

        Raises:
            ServiceNotFound: If the id is unknown
        """
        ...


class RecommendationProvider(Protocol):
    """Ranks catalog entries for a traveler profile."""

    def recommend(
        self, profile: TravelerProfile, catalog: Sequence[ServiceCatalogEntry]
    ) -> list[ServiceCatalogEntry]:
        """Ordered, de-duplicated subset of ``catalog`` for ``profile``.

        Must be deterministic for identical inputs.
        """
        ...
