"""Timer observability collaborator.

The timer engine never touches metric objects directly; it is handed a
``TimerMetrics`` implementation at construction time.
"""

from functools import lru_cache
from typing import Protocol

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

# Entries range from a few seconds to a full working day and beyond
DURATION_BUCKETS = (60, 300, 900, 1800, 3600, 7200, 14400, 28800, 86400)


class TimerMetrics(Protocol):
    """What the timer engine reports about its transitions."""

    def record_transition(self, transition: str, outcome: str) -> None: ...

    def observe_duration(self, seconds: int) -> None: ...


class NullTimerMetrics:
    """Discards everything."""

    def record_transition(self, transition: str, outcome: str) -> None:
        pass

    def observe_duration(self, seconds: int) -> None:
        pass


class PrometheusTimerMetrics:
    """Prometheus-backed timer metrics bound to an explicit registry."""

    def __init__(self, registry: CollectorRegistry) -> None:
        self.transitions = Counter(
            "taskflow_timer_transitions_total",
            "Timer lifecycle transitions by outcome",
            labelnames=("transition", "outcome"),
            registry=registry,
        )
        self.durations = Histogram(
            "taskflow_timer_entry_duration_seconds",
            "Duration of stopped time entries",
            buckets=DURATION_BUCKETS,
            registry=registry,
        )

    def record_transition(self, transition: str, outcome: str) -> None:
        self.transitions.labels(transition=transition, outcome=outcome).inc()

    def observe_duration(self, seconds: int) -> None:
        self.durations.observe(seconds)


@lru_cache
def get_timer_metrics() -> TimerMetrics:
    """Metrics bound to the process registry that ``/metrics`` exposes."""
    return PrometheusTimerMetrics(REGISTRY)
