"""Reduce collected scores to one displayable number.

Lower scores are better, so percentiles are inverted: the Xth percentile is
the value that X% of scores are worse (higher) than, i.e. the (100 - X)th
percentile in the usual statistical sense.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from .schemas import AccumulationMode

Number = float | int


def round_one_decimal(value: float) -> float:
    """Round half-up to one decimal place."""

    if not math.isfinite(value):
        return value
    return math.floor(value * 10 + 0.5) / 10


def golf_percentile(scores: Sequence[Number], percentile: float) -> Optional[Number]:
    """Nearest-rank inverted percentile used by corner statistics."""

    if not scores:
        return None
    ordered = sorted(scores)
    traditional = 100 - percentile
    index = math.ceil((traditional / 100) * len(ordered)) - 1
    index = max(0, min(index, len(ordered) - 1))
    return ordered[index]


def interpolated_golf_percentile(
    sorted_scores: Sequence[Number], percentile: float
) -> Optional[Number]:
    """Inverted percentile with linear interpolation, rounded to one decimal."""

    if not sorted_scores:
        return None
    traditional = 100 - percentile
    position = (traditional / 100) * (len(sorted_scores) - 1)
    lower = math.floor(position)
    upper = math.ceil(position)
    if lower == upper:
        return sorted_scores[lower]
    weight = position - lower
    blended = sorted_scores[lower] * (1 - weight) + sorted_scores[upper] * weight
    return round_one_decimal(blended)


def median(sorted_scores: Sequence[Number]) -> Optional[Number]:
    if not sorted_scores:
        return None
    mid = len(sorted_scores) // 2
    if len(sorted_scores) % 2 == 0:
        return round_one_decimal((sorted_scores[mid - 1] + sorted_scores[mid]) / 2)
    return sorted_scores[mid]


def accumulate(
    mode: AccumulationMode,
    scores: Sequence[Number],
    percentile: float | None = None,
) -> Optional[Number]:
    """Combine ``scores`` per ``mode``; ``None`` means there is nothing to show.

    A result of exactly zero (or NaN) is reported as no data: an unset cell and
    a zero score look the same on a scorecard.
    """

    if not scores:
        return None

    if mode is AccumulationMode.BEST:
        result: Optional[Number] = min(scores)
    elif mode is AccumulationMode.WORST:
        result = max(scores)
    elif mode is AccumulationMode.AVERAGE:
        result = round_one_decimal(sum(scores) / len(scores))
    elif mode is AccumulationMode.LATEST:
        result = scores[-1]
    elif mode in (AccumulationMode.FIRST, AccumulationMode.RELEVANT):
        result = scores[0]
    elif mode is AccumulationMode.PERCENTILE:
        if percentile is None:
            return None
        result = golf_percentile(scores, percentile)
    else:
        raise ValueError(f"unsupported accumulation mode {mode!r}")

    if result is None or result == 0 or (isinstance(result, float) and math.isnan(result)):
        return None
    return result


__all__ = [
    "accumulate",
    "golf_percentile",
    "interpolated_golf_percentile",
    "median",
    "round_one_decimal",
]
