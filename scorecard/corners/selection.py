"""Narrow eligible rounds to the ones a round-selection policy names."""

from __future__ import annotations

import logging
from typing import Sequence

from scorecard.rounds.models import PlayerRound

from .schemas import (
    AccumulationMode,
    AllRounds,
    BestRound,
    BestRounds,
    FirstRound,
    LatestRounds,
    RoundSelection,
    SpecificRounds,
    WorstRound,
    WorstRounds,
)

logger = logging.getLogger(__name__)


def _rounds_with_ids(
    records: Sequence[PlayerRound], round_ids: Sequence[str]
) -> list[PlayerRound]:
    wanted = set(round_ids)
    return [record for record in records if record.round_id in wanted]


def _subject_complete_records(
    records: Sequence[PlayerRound], subject_player_id: str, expected_hole_count: int
) -> list[PlayerRound]:
    return [
        record
        for record in records
        if record.player_id == subject_player_id
        and record.is_complete(expected_hole_count)
    ]


def select_rounds(
    records: Sequence[PlayerRound],
    selection: RoundSelection | None,
    accumulation_mode: AccumulationMode,
    subject_player_id: str,
    expected_hole_count: int = 0,
) -> list[PlayerRound]:
    """Return the records of the rounds picked by ``selection``.

    Ranking policies look at the subject player's complete records only, then
    keep every record of the chosen rounds so other players' scores in them
    stay readable. Sorts are stable: ties keep their input order.
    """

    if accumulation_mode in (AccumulationMode.LATEST, AccumulationMode.FIRST):
        # ordering and one-round-per-player happen in the collector
        return list(records)

    if selection is None or isinstance(selection, AllRounds):
        return list(records)

    if isinstance(selection, SpecificRounds):
        return _rounds_with_ids(records, selection.round_ids)

    candidates = _subject_complete_records(
        records, subject_player_id, expected_hole_count
    )

    if isinstance(selection, (LatestRounds, FirstRound)):
        newest_first = isinstance(selection, LatestRounds)
        count = selection.count if isinstance(selection, LatestRounds) else 1
        ordered = sorted(candidates, key=lambda r: r.date, reverse=newest_first)
        chosen = ordered[:count]
    elif isinstance(selection, (BestRound, BestRounds, WorstRound, WorstRounds)):
        worst_first = isinstance(selection, (WorstRound, WorstRounds))
        if worst_first:
            ordered = sorted(candidates, key=lambda r: -r.round_total())
        else:
            ordered = sorted(candidates, key=lambda r: r.round_total())
        if isinstance(selection, (BestRound, WorstRound)):
            index = selection.rank - 1
            chosen = ordered[index : index + 1]
        else:
            chosen = ordered[: selection.count]
    else:
        raise TypeError(f"unsupported round selection {selection!r}")

    logger.debug(
        "round selection %s kept %d of %d candidate rounds",
        selection,
        len(chosen),
        len(candidates),
    )
    return _rounds_with_ids(records, [record.round_id for record in chosen])


__all__ = ["select_rounds"]
