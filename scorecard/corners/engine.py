"""Compute corner statistic values for scorecard cells.

Each corner runs an isolated pipeline over a snapshot of player rounds:
date window -> completeness -> round eligibility -> round selection -> score
collection -> accumulation. The four corners of a cell, and the holes of a
total, are independent and computed concurrently.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime
from typing import Iterable, Optional, Sequence

from scorecard.metrics.corner_metrics import (
    OUTCOME_ERROR,
    OUTCOME_NO_DATA,
    OUTCOME_VALUE,
    observe_corner,
)
from scorecard.rounds.models import Score
from scorecard.rounds.provider import PlayerRoundProvider, get_round_provider

from .accumulate import Number, accumulate, round_one_decimal
from .collector import collect_scores
from .completeness import expected_hole_count, filter_completed_rounds
from .dates import ensure_aware, filter_by_dates, resolve_since, resolve_until
from .players import resolve_round_filter
from .schemas import (
    CellCornerValues,
    CornerConfig,
    CornerPosition,
    CornerStatisticsConfig,
    CornerValue,
)
from .selection import select_rounds

logger = logging.getLogger(__name__)


async def _compute(
    config: CornerConfig,
    venue_id: str,
    hole_number: int,
    player_id: str,
    todays_player_ids: Sequence[str],
    exclude_from: datetime | None,
    provider: PlayerRoundProvider,
    now: datetime | None,
) -> Optional[Number]:
    since = resolve_since(config.since_date, now)
    until = resolve_until(config.until_date, now)
    exclude_from = ensure_aware(exclude_from)

    # hole count spans the whole venue history, not the date window
    venue_records = await provider.fetch_player_rounds(venue_id)
    expected = expected_hole_count(
        venue_records, await provider.expected_hole_count(venue_id)
    )
    records = filter_by_dates(venue_records, since, until, exclude_from)

    records = filter_completed_rounds(
        records, config.score_user_filter, player_id, expected, todays_player_ids
    )
    records = resolve_round_filter(
        records,
        config.round_user_filter,
        config.user_filter_mode,
        player_id,
        todays_player_ids,
        expected,
    )
    records = select_rounds(
        records, config.round_selection, config.accumulation_mode, player_id, expected
    )
    scores = collect_scores(
        config, records, player_id, hole_number, expected, todays_player_ids
    )
    logger.debug(
        "corner venue=%s hole=%s player=%s collected %d scores from %d records",
        venue_id,
        hole_number,
        player_id,
        len(scores),
        len(records),
    )
    return accumulate(config.accumulation_mode, scores, config.percentile)


async def compute_corner_value(
    config: CornerConfig | None,
    venue_id: str | None,
    hole_number: int,
    player_id: str,
    todays_player_ids: Sequence[str] = (),
    exclude_from: datetime | None = None,
    *,
    provider: PlayerRoundProvider | None = None,
    now: datetime | None = None,
) -> CornerValue:
    """Value for one corner; never raises, hidden when there is no data."""

    if config is None or not venue_id:
        return CornerValue.hidden()

    source = provider if provider is not None else get_round_provider()
    started = time.perf_counter()
    try:
        result = await _compute(
            config,
            venue_id,
            hole_number,
            player_id,
            todays_player_ids,
            exclude_from,
            source,
            now,
        )
    except Exception:
        logger.exception(
            "corner computation failed for venue=%s hole=%s player=%s",
            venue_id,
            hole_number,
            player_id,
        )
        observe_corner(OUTCOME_ERROR, time.perf_counter() - started)
        return CornerValue.hidden()

    if result is None:
        observe_corner(OUTCOME_NO_DATA, time.perf_counter() - started)
        return CornerValue.hidden()
    observe_corner(OUTCOME_VALUE, time.perf_counter() - started)
    return CornerValue.shown(result)


async def compute_cell_corner_values(
    config: CornerStatisticsConfig | None,
    venue_id: str | None,
    hole_number: int,
    player_id: str,
    todays_player_ids: Sequence[str] = (),
    exclude_from: datetime | None = None,
    *,
    provider: PlayerRoundProvider | None = None,
    now: datetime | None = None,
) -> CellCornerValues:
    if config is None:
        return CellCornerValues()

    corners = config.by_position()
    values = await asyncio.gather(
        *(
            compute_corner_value(
                corner,
                venue_id,
                hole_number,
                player_id,
                todays_player_ids,
                exclude_from,
                provider=provider,
                now=now,
            )
            for corner in corners.values()
        )
    )
    return CellCornerValues.from_positions(dict(zip(corners.keys(), values)))


def completed_holes(scores: Iterable[Score]) -> list[int]:
    return sorted({score.hole_number for score in scores if score.complete})


def _sum_visible(values: Iterable[CornerValue]) -> CornerValue:
    numbers = [
        value.value
        for value in values
        if value.visible
        and isinstance(value.value, (int, float))
        and not isinstance(value.value, bool)
    ]
    if not numbers:
        return CornerValue.hidden()
    total = sum(numbers)
    if isinstance(total, float):
        total = round_one_decimal(total)
    return CornerValue.shown(total)


async def compute_total_corner_values(
    config: CornerStatisticsConfig | None,
    venue_id: str | None,
    scores: Sequence[Score],
    player_id: str,
    todays_player_ids: Sequence[str] = (),
    exclude_from: datetime | None = None,
    *,
    provider: PlayerRoundProvider | None = None,
    now: datetime | None = None,
) -> CellCornerValues:
    """Sum each corner over the holes the player has completed in ``scores``."""

    if config is None:
        return CellCornerValues()

    holes = completed_holes(scores)
    cells = await asyncio.gather(
        *(
            compute_cell_corner_values(
                config,
                venue_id,
                hole_number,
                player_id,
                todays_player_ids,
                exclude_from,
                provider=provider,
                now=now,
            )
            for hole_number in holes
        )
    )
    return CellCornerValues.from_positions(
        {
            position: _sum_visible(cell.get(position) for cell in cells)
            for position in CornerPosition
        }
    )


__all__ = [
    "completed_holes",
    "compute_cell_corner_values",
    "compute_corner_value",
    "compute_total_corner_values",
]
