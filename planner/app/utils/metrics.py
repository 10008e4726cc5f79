"""Prometheus metrics for planner operations."""

from typing import Protocol

from prometheus_client import Counter, Histogram

allocations_total = Counter(
    "planner_allocations_total",
    "Allocation attempts by outcome",
    ["outcome"],
)

wizard_transitions_total = Counter(
    "planner_wizard_transitions_total",
    "Wizard and placement transitions by action and outcome",
    ["action", "outcome"],
)

bookings_total = Counter(
    "planner_bookings_total",
    "Booking hand-offs by outcome",
    ["outcome"],
)

checkout_latency_ms = Histogram(
    "planner_checkout_latency_ms",
    "Booking gateway latency in milliseconds",
    buckets=[1, 5, 10, 50, 100, 250, 500, 1000, 2000],
)


class PlannerMetrics(Protocol):
    """Metrics sink used by the engine, wizard and checkout."""

    def inc_allocation(self, outcome: str) -> None: ...

    def inc_transition(self, action: str, outcome: str) -> None: ...

    def record_booking(self, outcome: str, latency_ms: float) -> None: ...


class PrometheusPlannerMetrics:
    """Prometheus-based planner metrics implementation."""

    def inc_allocation(self, outcome: str) -> None:
        """Increment allocation counter."""
        allocations_total.labels(outcome=outcome).inc()

    def inc_transition(self, action: str, outcome: str) -> None:
        """Increment transition counter."""
        wizard_transitions_total.labels(action=action, outcome=outcome).inc()

    def record_booking(self, outcome: str, latency_ms: float) -> None:
        """Record booking outcome and gateway latency."""
        bookings_total.labels(outcome=outcome).inc()
        checkout_latency_ms.observe(latency_ms)


class NullPlannerMetrics:
    """Metrics sink that records nothing."""

    def inc_allocation(self, outcome: str) -> None:
        pass

    def inc_transition(self, action: str, outcome: str) -> None:
        pass

    def record_booking(self, outcome: str, latency_ms: float) -> None:
        pass
