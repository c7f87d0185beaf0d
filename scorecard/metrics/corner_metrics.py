from __future__ import annotations

from prometheus_client import Counter, Histogram

from . import REGISTRY

OUTCOME_VALUE = "value"
OUTCOME_NO_DATA = "no_data"
OUTCOME_ERROR = "error"

CORNER_COMPUTE_TOTAL = Counter(
    "corner_compute_total",
    "Corner statistic computations by outcome",
    ["outcome"],
    registry=REGISTRY,
)

CORNER_COMPUTE_LATENCY = Histogram(
    "corner_compute_latency_seconds",
    "Latency of a single corner statistic computation (seconds)",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
    registry=REGISTRY,
)


def observe_corner(outcome: str, duration_s: float) -> None:
    """Record the outcome and latency of one corner computation."""

    CORNER_COMPUTE_TOTAL.labels(outcome=outcome).inc()
    CORNER_COMPUTE_LATENCY.observe(max(0.0, duration_s))


__all__ = [
    "CORNER_COMPUTE_LATENCY",
    "CORNER_COMPUTE_TOTAL",
    "OUTCOME_ERROR",
    "OUTCOME_NO_DATA",
    "OUTCOME_VALUE",
    "observe_corner",
]
