"""Top-level planning wizard.

Steps run ``WELCOME -> PURPOSE_SELECTION -> RECOMMENDATIONS -> DAY_PLANNING
-> SUMMARY``. Every call returns a WizardResult carrying a fresh state
snapshot; a rejected call carries the error and leaves the session exactly
as it was.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from planner.app.catalog.protocols import RecommendationProvider, ServiceCatalog
from planner.app.config import Settings, get_settings
from planner.app.models.catalog import OptionSelection, ServiceCatalogEntry
from planner.app.models.common import PlacementState, TravelerProfile, WizardStep
from planner.app.models.errors import (
    InvalidStateTransition,
    MaxDaysReached,
    PlannerError,
    ServiceNotFound,
)
from planner.app.models.itinerary import Itinerary
from planner.app.scheduling.engine import SchedulingEngine
from planner.app.utils.logging import PlannerEventLogger
from planner.app.utils.metrics import NullPlannerMetrics, PlannerMetrics
from planner.app.wizard.placement import PlacementFlow, PlacementResult


@dataclass(frozen=True)
class WizardState:
    """Snapshot of where a planning session stands."""

    step: WizardStep
    profile: TravelerProfile | None
    active_day_index: int
    day_count: int
    placement: PlacementState
    placement_day_index: int | None = None
    placement_slot_index: int | None = None
    placement_service_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "step": int(self.step),
            "step_name": self.step.name,
            "profile": self.profile.value if self.profile else None,
            "active_day_index": self.active_day_index,
            "day_count": self.day_count,
            "placement": {
                "state": self.placement.value,
                "day_index": self.placement_day_index,
                "slot_index": self.placement_slot_index,
                "service_id": self.placement_service_id,
            },
        }


@dataclass
class WizardResult:
    """Outcome of one wizard call."""

    state: WizardState
    error: PlannerError | None = None
    payload: Any = None
    placement: PlacementResult | None = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None


class WizardController:
    """Drives one planning session over a single itinerary."""

    def __init__(
        self,
        engine: SchedulingEngine,
        catalog: ServiceCatalog,
        recommender: RecommendationProvider,
        *,
        settings: Settings | None = None,
        metrics: PlannerMetrics | None = None,
        event_logger: PlannerEventLogger | None = None,
    ) -> None:
        self._engine = engine
        self._catalog = catalog
        self._recommender = recommender
        self._settings = settings or get_settings()
        self._metrics = metrics or NullPlannerMetrics()
        self._events = event_logger or PlannerEventLogger()
        self._placement = PlacementFlow(engine, metrics=self._metrics, event_logger=self._events)
        self._step = WizardStep.WELCOME
        self._recommendations: list[ServiceCatalogEntry] = []

    @property
    def engine(self) -> SchedulingEngine:
        return self._engine

    @property
    def itinerary(self) -> Itinerary:
        return self._engine.itinerary

    @property
    def step(self) -> WizardStep:
        return self._step

    @property
    def profile(self) -> TravelerProfile | None:
        return self.itinerary.profile

    @property
    def recommendations(self) -> list[ServiceCatalogEntry]:
        return list(self._recommendations)

    @property
    def placement(self) -> PlacementFlow:
        return self._placement

    @property
    def state(self) -> WizardState:
        service = self._placement.service
        return WizardState(
            step=self._step,
            profile=self.itinerary.profile,
            active_day_index=self._engine.active_day_index,
            day_count=len(self._engine.days),
            placement=self._placement.state,
            placement_day_index=self._placement.day_index,
            placement_slot_index=self._placement.slot_index,
            placement_service_id=service.id if service else None,
        )

    # Navigation

    def advance(self) -> WizardResult:
        """Move one step forward."""

        def run() -> None:
            if self._step is WizardStep.SUMMARY:
                raise self._illegal("advance", "the summary is the last step")
            if self._step is WizardStep.PURPOSE_SELECTION and self.itinerary.profile is None:
                raise self._illegal("advance", "choose a trip purpose first")
            self._move_to(WizardStep(self._step + 1))

        return self._run("advance", run)

    def back(self) -> WizardResult:
        """Move one step back."""

        def run() -> None:
            if self._step is WizardStep.WELCOME:
                raise self._illegal("back", "already at the first step")
            self._move_to(WizardStep(self._step - 1))

        return self._run("back", run)

    def choose_profile(self, profile: TravelerProfile) -> WizardResult:
        """Set (or overwrite) the trip purpose and fetch recommendations.

        Returns:
            Result whose payload is the recommended catalog entries
        """

        def run() -> list[ServiceCatalogEntry]:
            candidates = self._catalog.by_package_type(self.itinerary.package_type)
            recommended = self._recommender.recommend(profile, candidates)
            self.itinerary.profile = profile
            self._recommendations = list(recommended)
            self._move_to(WizardStep.RECOMMENDATIONS)
            return self.recommendations

        return self._run("choose_profile", run, WizardStep.PURPOSE_SELECTION)

    def go_to_summary(self) -> WizardResult:
        """Jump from day planning to the summary; allocations are not required."""
        return self._run(
            "go_to_summary",
            lambda: self._move_to(WizardStep.SUMMARY),
            WizardStep.DAY_PLANNING,
        )

    def edit(self) -> WizardResult:
        """Return from the summary to day planning with every allocation intact."""
        return self._run(
            "edit",
            lambda: self._move_to(WizardStep.DAY_PLANNING),
            WizardStep.SUMMARY,
        )

    # Placement

    def select_slot(self, slot_index: int, day_index: int | None = None) -> WizardResult:
        """Start placing a service at a slot of the active (or given) day."""
        target = self._engine.active_day_index if day_index is None else day_index
        return self._delegate(
            "select_slot", lambda: self._placement.select_slot(target, slot_index)
        )

    def choose_service(self, service_id: str) -> WizardResult:
        """Pick the catalog service to place at the chosen slot."""

        def run() -> PlacementResult:
            service = self._catalog.by_id(service_id)
            if service is None:
                raise ServiceNotFound(
                    f"Service '{service_id}' is not in the catalog", service_id=service_id
                )
            return self._placement.choose_service(service)

        return self._delegate("choose_service", run)

    def confirm(self, selections: Sequence[OptionSelection] = ()) -> WizardResult:
        """Price and place the configured service."""
        return self._delegate("confirm", lambda: self._placement.confirm(selections))

    def cancel_placement(self) -> WizardResult:
        """Abandon the placement in progress."""
        return self._delegate("cancel_placement", self._placement.cancel)

    # Day plans

    def remove_service(self, service_id: str, day_index: int | None = None) -> WizardResult:
        """Remove a service from the active (or given) day.

        Returns:
            Result whose payload is the number of allocations removed
        """
        target = self._engine.active_day_index if day_index is None else day_index
        return self._run(
            "remove_service",
            lambda: self._engine.deallocate(target, service_id),
            WizardStep.DAY_PLANNING,
        )

    def add_day(self) -> WizardResult:
        """Append an empty day, bounded by ``Settings.max_days``."""

        def run():
            if len(self._engine.days) >= self._settings.max_days:
                raise MaxDaysReached(
                    f"An itinerary can hold at most {self._settings.max_days} days",
                    max_days=self._settings.max_days,
                )
            return self._engine.add_day()

        return self._run("add_day", run, WizardStep.DAY_PLANNING)

    def remove_last_day(self) -> WizardResult:
        """Drop the trailing day; a placement aimed at it is cancelled."""

        def run():
            last_index = len(self._engine.days) - 1
            removed = self._engine.remove_last_day()
            if self._placement.day_index == last_index:
                self._placement.reset()
            return removed

        return self._run("remove_last_day", run, WizardStep.DAY_PLANNING)

    def set_active_day(self, day_index: int) -> WizardResult:
        """Switch the day being planned."""
        return self._run(
            "set_active_day",
            lambda: self._switch_day(day_index),
            WizardStep.DAY_PLANNING,
        )

    def next_day(self) -> WizardResult:
        """Move to the next day; on the last day, move on to the summary."""

        def run():
            nxt = self._engine.active_day_index + 1
            if nxt < len(self._engine.days):
                return self._switch_day(nxt)
            self._move_to(WizardStep.SUMMARY)
            return None

        return self._run("next_day", run, WizardStep.DAY_PLANNING)

    def previous_day(self) -> WizardResult:
        """Move to the previous day."""

        def run():
            if self._engine.active_day_index == 0:
                raise self._illegal("previous_day", "already on the first day")
            return self._switch_day(self._engine.active_day_index - 1)

        return self._run("previous_day", run, WizardStep.DAY_PLANNING)

    # Internals

    def _switch_day(self, day_index: int):
        previous = self._engine.active_day_index
        plan = self._engine.set_active_day(day_index)
        if day_index != previous:
            self._placement.reset()
        return plan

    def _move_to(self, step: WizardStep) -> None:
        if self._step is WizardStep.DAY_PLANNING and step is not WizardStep.DAY_PLANNING:
            self._placement.reset()
        self._step = step

    def _illegal(self, action: str, reason: str) -> InvalidStateTransition:
        return InvalidStateTransition(
            f"Cannot {action.replace('_', ' ')}: {reason}",
            action=action,
            step=self._step.name,
        )

    def _run(
        self, action: str, fn: Callable[[], Any], *allowed: WizardStep
    ) -> WizardResult:
        before = self._step
        if allowed and self._step not in allowed:
            allowed_names = ", ".join(s.name for s in allowed)
            return self._reject(
                action, self._illegal(action, f"only allowed during {allowed_names}")
            )

        try:
            payload = fn()
        except PlannerError as e:
            return self._reject(action, e)

        self._metrics.inc_transition(action, "success")
        self._events.log_transition(
            self.itinerary.itinerary_id, action, before.name, self._step.name
        )
        return WizardResult(state=self.state, payload=payload)

    def _delegate(self, action: str, fn: Callable[[], PlacementResult]) -> WizardResult:
        if self._step is not WizardStep.DAY_PLANNING:
            return self._reject(
                action, self._illegal(action, "only allowed during DAY_PLANNING")
            )

        try:
            result = fn()
        except PlannerError as e:
            return self._reject(action, e)

        return WizardResult(
            state=self.state,
            error=result.error,
            payload=result.allocation,
            placement=result,
        )

    def _reject(self, action: str, error: PlannerError) -> WizardResult:
        self._metrics.inc_transition(action, "rejected")
        self._events.log_transition(
            self.itinerary.itinerary_id,
            action,
            self._step.name,
            self._step.name,
            error_code=error.code,
        )
        return WizardResult(state=self.state, error=error)
