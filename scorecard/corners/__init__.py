from .accumulate import accumulate, golf_percentile, interpolated_golf_percentile
from .engine import (
    compute_cell_corner_values,
    compute_corner_value,
    compute_total_corner_values,
)
from .schemas import (
    AccumulationMode,
    CellCornerValues,
    CornerConfig,
    CornerPosition,
    CornerStatisticsConfig,
    CornerValue,
    Scope,
    UserFilterMode,
)

__all__ = [
    "AccumulationMode",
    "CellCornerValues",
    "CornerConfig",
    "CornerPosition",
    "CornerStatisticsConfig",
    "CornerValue",
    "Scope",
    "UserFilterMode",
    "accumulate",
    "compute_cell_corner_values",
    "compute_corner_value",
    "compute_total_corner_values",
    "golf_percentile",
    "interpolated_golf_percentile",
]
