"""The "place a service" sub-flow.

States move ``idle -> slot_chosen -> service_chosen -> confirmed -> idle``.
A service is either fully configured, priced and placed on ``confirm`` or
nothing is written to the day plan. Illegal calls never raise: they return
the unchanged state together with the error.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from planner.app.models.catalog import OptionSelection, ServiceCatalogEntry
from planner.app.models.common import PlacementSignal, PlacementState
from planner.app.models.errors import InvalidStateTransition, PlannerError, SlotConflict
from planner.app.models.itinerary import ServiceAllocation
from planner.app.scheduling.engine import SchedulingEngine
from planner.app.utils.logging import PlannerEventLogger
from planner.app.utils.metrics import NullPlannerMetrics, PlannerMetrics

# Surface left open while a placement is in progress
_OPEN_SURFACE: dict[PlacementState, PlacementSignal] = {
    PlacementState.slot_chosen: PlacementSignal.catalog_open,
    PlacementState.service_chosen: PlacementSignal.options_open,
}


@dataclass
class PlacementResult:
    """Outcome of one placement call."""

    state: PlacementState
    error: PlannerError | None = None
    allocation: ServiceAllocation | None = None
    signal: PlacementSignal | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PlacementFlow:
    """State machine for placing one service on one day."""

    def __init__(
        self,
        engine: SchedulingEngine,
        *,
        metrics: PlannerMetrics | None = None,
        event_logger: PlannerEventLogger | None = None,
    ) -> None:
        self._engine = engine
        self._metrics = metrics or NullPlannerMetrics()
        self._events = event_logger or PlannerEventLogger()
        self._state = PlacementState.idle
        self._day_index: int | None = None
        self._slot_index: int | None = None
        self._service: ServiceCatalogEntry | None = None

    @property
    def state(self) -> PlacementState:
        return self._state

    @property
    def day_index(self) -> int | None:
        return self._day_index

    @property
    def slot_index(self) -> int | None:
        return self._slot_index

    @property
    def service(self) -> ServiceCatalogEntry | None:
        return self._service

    def select_slot(self, day_index: int, slot_index: int) -> PlacementResult:
        """Pick a free starting slot; re-picking from slot_chosen is allowed."""
        action = "select_slot"
        if self._state not in (PlacementState.idle, PlacementState.slot_chosen):
            return self._reject(action, self._illegal(action))

        try:
            self._engine.slots.label_of(slot_index)
            if not self._engine.is_slot_range_free(day_index, slot_index, 1):
                raise SlotConflict(
                    f"{self._engine.slots.label_of(slot_index)} is already taken",
                    day_index=day_index,
                    start_slot=slot_index,
                )
        except PlannerError as e:
            return self._reject(action, e)

        previous = self._state
        self._day_index = day_index
        self._slot_index = slot_index
        self._state = PlacementState.slot_chosen
        return self._accept(action, previous, signal=PlacementSignal.catalog_open)

    def choose_service(self, service: ServiceCatalogEntry) -> PlacementResult:
        """Record the service to configure for the chosen slot."""
        action = "choose_service"
        if self._state is not PlacementState.slot_chosen:
            return self._reject(action, self._illegal(action))

        previous = self._state
        self._service = service
        self._state = PlacementState.service_chosen
        return self._accept(action, previous, signal=PlacementSignal.options_open)

    def confirm(self, selections: Sequence[OptionSelection] = ()) -> PlacementResult:
        """Price and place the chosen service.

        Domain errors from the engine keep the flow in ``service_chosen`` so
        the caller can show the reason and let the user adjust.
        """
        action = "confirm"
        if self._state is not PlacementState.service_chosen:
            return self._reject(action, self._illegal(action))

        assert self._day_index is not None and self._slot_index is not None
        assert self._service is not None
        try:
            allocation = self._engine.allocate(
                self._day_index, self._service, self._slot_index, selections
            )
        except PlannerError as e:
            return self._reject(action, e)

        previous = self._state
        self._state = PlacementState.confirmed
        self._events.log_transition(
            self._engine.itinerary.itinerary_id, action, previous.value, self._state.value
        )
        self._reset()
        self._metrics.inc_transition(action, "success")
        return PlacementResult(
            state=self._state, allocation=allocation, signal=PlacementSignal.closed
        )

    def cancel(self) -> PlacementResult:
        """Discard the selection in progress; the day plan is untouched."""
        action = "cancel"
        if self._state is PlacementState.idle:
            return self._reject(action, self._illegal(action))

        previous = self._state
        self._reset()
        return self._accept(action, previous, signal=PlacementSignal.closed)

    def reset(self) -> None:
        """Silently drop any selection in progress (used when leaving the step)."""
        if self._state is not PlacementState.idle:
            self._events.log_transition(
                self._engine.itinerary.itinerary_id,
                "reset",
                self._state.value,
                PlacementState.idle.value,
            )
        self._reset()

    def _reset(self) -> None:
        self._state = PlacementState.idle
        self._day_index = None
        self._slot_index = None
        self._service = None

    def _illegal(self, action: str) -> InvalidStateTransition:
        return InvalidStateTransition(
            f"Cannot {action.replace('_', ' ')} while placement is {self._state.value}",
            action=action,
            state=self._state.value,
        )

    def _accept(
        self, action: str, previous: PlacementState, signal: PlacementSignal
    ) -> PlacementResult:
        self._metrics.inc_transition(action, "success")
        self._events.log_transition(
            self._engine.itinerary.itinerary_id, action, previous.value, self._state.value
        )
        return PlacementResult(state=self._state, signal=signal)

    def _reject(self, action: str, error: PlannerError) -> PlacementResult:
        self._metrics.inc_transition(action, "rejected")
        self._events.log_transition(
            self._engine.itinerary.itinerary_id,
            action,
            self._state.value,
            self._state.value,
            error_code=error.code,
        )
        return PlacementResult(
            state=self._state, error=error, signal=_OPEN_SURFACE.get(self._state)
        )
