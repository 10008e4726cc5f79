"""FastAPI dependencies - shared catalog, sessions and booking gateway."""

import uuid
from collections.abc import Iterator
from datetime import date
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session, sessionmaker

from planner.app.api.errors import SessionNotFound
from planner.app.catalog.recommendations import PurposeRecommendationProvider
from planner.app.catalog.seed import default_catalog
from planner.app.catalog.service_catalog import InMemoryServiceCatalog
from planner.app.config import Settings, get_settings
from planner.app.db.engine import create_engine_from_settings, create_session_factory, init_db
from planner.app.db.inmemory import InMemoryPersistenceGateway
from planner.app.db.repositories import PersistenceGateway
from planner.app.db.sql_repositories import SqlPersistenceGateway
from planner.app.models.common import PackageType
from planner.app.scheduling.engine import SchedulingEngine, new_itinerary
from planner.app.scheduling.slots import TimeSlotCatalog
from planner.app.utils.logging import PlannerEventLogger
from planner.app.utils.metrics import PlannerMetrics, PrometheusPlannerMetrics
from planner.app.wizard.controller import WizardController


class SessionRegistry:
    """In-memory map of session id -> WizardController.

    Sessions are independent; nothing is shared between them but the
    read-only catalog.
    """

    def __init__(
        self,
        catalog: InMemoryServiceCatalog,
        settings: Settings,
        metrics: PlannerMetrics,
    ) -> None:
        self._catalog = catalog
        self._settings = settings
        self._metrics = metrics
        self._events = PlannerEventLogger()
        self._slots = TimeSlotCatalog.from_settings(settings)
        self._recommender = PurposeRecommendationProvider(
            min_results=settings.min_recommendations
        )
        self._sessions: dict[str, WizardController] = {}

    @property
    def slots(self) -> TimeSlotCatalog:
        return self._slots

    def __len__(self) -> int:
        return len(self._sessions)

    def create(
        self,
        start_date: date,
        days: int = 1,
        package_type: PackageType | None = None,
    ) -> tuple[str, WizardController]:
        """Start a new planning session.

        Args:
            start_date: Date of day 1
            days: Number of days to start with
            package_type: Catalog tier; defaults to ``Settings.default_package_type``

        Returns:
            (session_id, controller)
        """
        tier = package_type or PackageType(self._settings.default_package_type)
        itinerary = new_itinerary(start_date, days, tier)
        engine = SchedulingEngine(
            itinerary, self._slots, metrics=self._metrics, event_logger=self._events
        )
        controller = WizardController(
            engine,
            self._catalog,
            self._recommender,
            settings=self._settings,
            metrics=self._metrics,
            event_logger=self._events,
        )
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = controller
        return session_id, controller

    def get(self, session_id: str) -> WizardController:
        """Look up a session.

        Raises:
            SessionNotFound: If the id is unknown
        """
        controller = self._sessions.get(session_id)
        if controller is None:
            raise SessionNotFound(
                f"Planning session '{session_id}' does not exist", session_id=session_id
            )
        return controller

    def discard(self, session_id: str) -> bool:
        """Forget a session; returns whether it existed."""
        return self._sessions.pop(session_id, None) is not None


@lru_cache
def get_catalog() -> InMemoryServiceCatalog:
    """Shared read-only service catalog."""
    return default_catalog()


@lru_cache
def get_metrics() -> PlannerMetrics:
    """Process-wide Prometheus metrics sink."""
    return PrometheusPlannerMetrics()


@lru_cache
def get_registry() -> SessionRegistry:
    """Process-wide session registry."""
    return SessionRegistry(get_catalog(), get_settings(), get_metrics())


@lru_cache
def get_memory_gateway() -> InMemoryPersistenceGateway:
    """Booking store used when no database is configured."""
    return InMemoryPersistenceGateway()


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    """Session factory for the configured database; tables are created on first use."""
    engine = create_engine_from_settings(get_settings())
    init_db(engine)
    return create_session_factory(engine)


def get_gateway(
    settings: Annotated[Settings, Depends(get_settings)],
) -> Iterator[PersistenceGateway]:
    """Booking gateway for one request.

    Yields:
        SQL gateway when ``database_url`` is set, in-memory gateway otherwise
    """
    if not settings.database_url:
        yield get_memory_gateway()
        return

    with get_session_factory()() as session:
        yield SqlPersistenceGateway(session)


def get_controller(
    session_id: str,
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> WizardController:
    """Resolve the ``session_id`` path parameter to its controller."""
    return registry.get(session_id)
