from .hole_stats import (
    HoleStatistics,
    compute_all_hole_statistics,
    compute_hole_statistics,
    compute_total_round_statistics,
)

__all__ = [
    "HoleStatistics",
    "compute_all_hole_statistics",
    "compute_hole_statistics",
    "compute_total_round_statistics",
]
