"""Venue-wide hole statistics (worst, 25th, median, 75th, best).

Computed over every completed score at a venue, all players and all time,
strictly before the round being viewed. Percentiles use the inverted,
interpolated form: p25 is the value 25% of scores are worse than.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Dict, Optional, Sequence

from pydantic import BaseModel

from scorecard.corners.accumulate import interpolated_golf_percentile, median
from scorecard.corners.dates import ensure_aware, filter_by_dates
from scorecard.rounds.models import PlayerRound
from scorecard.rounds.provider import PlayerRoundProvider, get_round_provider

logger = logging.getLogger(__name__)

Number = float | int


class HoleStatistics(BaseModel):
    worst: Optional[Number] = None
    p25: Optional[Number] = None
    p50: Optional[Number] = None
    p75: Optional[Number] = None
    best: Optional[Number] = None

    @classmethod
    def empty(cls) -> "HoleStatistics":
        return cls()


def summarize(values: Sequence[Number]) -> HoleStatistics:
    if not values:
        return HoleStatistics.empty()
    ordered = sorted(values)
    return HoleStatistics(
        worst=ordered[-1],
        p25=interpolated_golf_percentile(ordered, 25),
        p50=median(ordered),
        p75=interpolated_golf_percentile(ordered, 75),
        best=ordered[0],
    )


async def _venue_records(
    provider: PlayerRoundProvider, venue_id: str, exclude_from: datetime | None
) -> list[PlayerRound]:
    exclude_from = ensure_aware(exclude_from)
    records = await provider.fetch_player_rounds(venue_id, exclude_from=exclude_from)
    return filter_by_dates(records, exclude_from=exclude_from)


async def compute_hole_statistics(
    venue_id: str | None,
    hole_number: int,
    exclude_from: datetime | None = None,
    *,
    provider: PlayerRoundProvider | None = None,
) -> HoleStatistics:
    if not venue_id:
        return HoleStatistics.empty()
    source = provider if provider is not None else get_round_provider()
    try:
        records = await _venue_records(source, venue_id, exclude_from)
    except Exception:
        logger.exception(
            "hole statistics failed for venue=%s hole=%s", venue_id, hole_number
        )
        return HoleStatistics.empty()

    values = [
        value
        for value in (record.hole_value(hole_number) for record in records)
        if value
    ]
    return summarize(values)


async def compute_all_hole_statistics(
    venue_id: str | None,
    holes: Sequence[int],
    exclude_from: datetime | None = None,
    *,
    provider: PlayerRoundProvider | None = None,
) -> Dict[int, HoleStatistics]:
    if not venue_id:
        return {}
    results = await asyncio.gather(
        *(
            compute_hole_statistics(
                venue_id, hole_number, exclude_from, provider=provider
            )
            for hole_number in holes
        )
    )
    return dict(zip(holes, results))


async def compute_total_round_statistics(
    venue_id: str | None,
    exclude_from: datetime | None = None,
    *,
    provider: PlayerRoundProvider | None = None,
) -> HoleStatistics:
    """Statistics over each player-round's total of completed scores."""

    if not venue_id:
        return HoleStatistics.empty()
    source = provider if provider is not None else get_round_provider()
    try:
        records = await _venue_records(source, venue_id, exclude_from)
    except Exception:
        logger.exception("round total statistics failed for venue=%s", venue_id)
        return HoleStatistics.empty()

    totals = [
        total for total in (record.round_total() for record in records) if total > 0
    ]
    return summarize(totals)


__all__ = [
    "HoleStatistics",
    "compute_all_hole_statistics",
    "compute_hole_statistics",
    "compute_total_round_statistics",
    "summarize",
]
