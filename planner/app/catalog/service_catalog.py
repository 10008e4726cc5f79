"""In-memory service catalog."""

from collections.abc import Iterable

from planner.app.models.catalog import ServiceCatalogEntry
from planner.app.models.common import PackageType
from planner.app.models.errors import ServiceNotFound


class InMemoryServiceCatalog:
    """In-memory implementation of ServiceCatalog."""

    def __init__(self, entries: Iterable[ServiceCatalogEntry]) -> None:
        self._entries: dict[str, ServiceCatalogEntry] = {}
        for entry in entries:
            if entry.id in self._entries:
                raise ValueError(f"duplicate service id {entry.id!r}")
            self._entries[entry.id] = entry

    def all(self) -> list[ServiceCatalogEntry]:
        """Every entry, in declaration order."""
        return list(self._entries.values())

    def by_id(self, service_id: str) -> ServiceCatalogEntry | None:
        """Get a service by id."""
        return self._entries.get(service_id)

    def require(self, service_id: str) -> ServiceCatalogEntry:
        """Get a service by id or raise ServiceNotFound."""
        entry = self._entries.get(service_id)
        if entry is None:
            raise ServiceNotFound(f"Service '{service_id}' is not in the catalog", service_id=service_id)
        return entry

    def by_package_type(self, package_type: PackageType) -> list[ServiceCatalogEntry]:
        """Services sold under a package tier."""
        return [e for e in self._entries.values() if package_type in e.package_types]

    def category_of(self, service_id: str) -> str:
        """Category value of a service."""
        return self.require(service_id).category.value
