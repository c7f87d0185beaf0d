from __future__ import annotations

from typing import Iterable, Sequence

from scorecard.rounds.models import PlayerRound, group_by_round

from .players import resolve_score_filter
from .schemas import UserFilter


def is_complete(record: PlayerRound | None, expected_hole_count: int) -> bool:
    """A player-round is complete when every expected hole has a completed score."""

    if record is None:
        return False
    return record.is_complete(expected_hole_count)


def expected_hole_count(
    records: Iterable[PlayerRound], authoritative: int | None = None
) -> int:
    """Hole count a complete round needs, derived once per computation."""

    if authoritative is not None and authoritative > 0:
        return authoritative
    return max((len(record.distinct_holes()) for record in records), default=0)


def filter_completed_rounds(
    records: Sequence[PlayerRound],
    score_filter: UserFilter,
    subject_player_id: str,
    expected: int,
    todays_player_ids: Sequence[str] = (),
) -> list[PlayerRound]:
    """Keep every record of a round where a score-eligible player completed it."""

    kept: list[PlayerRound] = []
    for round_records in group_by_round(list(records)).values():
        present = [record.player_id for record in round_records]
        eligible = set(
            resolve_score_filter(
                present, score_filter, subject_player_id, todays_player_ids
            )
        )
        if any(
            record.player_id in eligible and is_complete(record, expected)
            for record in round_records
        ):
            kept.extend(round_records)
    return kept


__all__ = ["expected_hole_count", "filter_completed_rounds", "is_complete"]
