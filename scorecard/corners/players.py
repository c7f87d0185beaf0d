"""Decide which rounds are eligible and whose scores are read from them.

``round_user_filter`` narrows the rounds considered (who played in them);
``score_user_filter`` picks which players' scores are read inside the
surviving rounds. A round can be eligible through one player while the
statistic reads another player's score from it.
"""

from __future__ import annotations

from typing import Sequence

from scorecard.rounds.models import PlayerRound, group_by_round

from .schemas import (
    EachUser,
    Everyone,
    ExplicitIds,
    TodaysPlayers,
    UserFilter,
    UserFilterMode,
)


def named_player_ids(
    user_filter: UserFilter, todays_player_ids: Sequence[str] = ()
) -> tuple[str, ...]:
    """Explicit id list a filter names, empty for everyone/each-user."""

    if isinstance(user_filter, TodaysPlayers):
        return tuple(todays_player_ids)
    if isinstance(user_filter, ExplicitIds):
        return user_filter.ids
    return ()


def _round_matches_ids(
    round_records: list[PlayerRound],
    player_ids: Sequence[str],
    mode: UserFilterMode,
    expected_hole_count: int,
) -> bool:
    completed = {
        record.player_id
        for record in round_records
        if record.is_complete(expected_hole_count)
    }
    if len(player_ids) > 1 and mode is UserFilterMode.AND:
        return all(player_id in completed for player_id in player_ids)
    return any(player_id in completed for player_id in player_ids)


def resolve_round_filter(
    records: Sequence[PlayerRound],
    round_filter: UserFilter,
    mode: UserFilterMode,
    subject_player_id: str,
    todays_player_ids: Sequence[str] = (),
    expected_hole_count: int = 0,
) -> list[PlayerRound]:
    """Keep the records of rounds that pass ``round_filter``."""

    if isinstance(round_filter, Everyone):
        return list(records)

    grouped = group_by_round(list(records))
    kept: list[PlayerRound] = []

    if isinstance(round_filter, EachUser):
        for round_records in grouped.values():
            if any(record.player_id == subject_player_id for record in round_records):
                kept.extend(round_records)
        return kept

    player_ids = named_player_ids(round_filter, todays_player_ids)
    if not player_ids:
        return list(records)

    for round_records in grouped.values():
        if _round_matches_ids(round_records, player_ids, mode, expected_hole_count):
            kept.extend(round_records)
    return kept


def resolve_score_filter(
    present_player_ids: Sequence[str],
    score_filter: UserFilter,
    subject_player_id: str,
    todays_player_ids: Sequence[str] = (),
) -> list[str]:
    """Players whose scores are read from a round with the given players."""

    if isinstance(score_filter, Everyone):
        return list(dict.fromkeys(present_player_ids))
    if isinstance(score_filter, EachUser):
        return [subject_player_id] if subject_player_id in present_player_ids else []
    present = set(present_player_ids)
    return [
        player_id
        for player_id in dict.fromkeys(named_player_ids(score_filter, todays_player_ids))
        if player_id in present
    ]


__all__ = ["named_player_ids", "resolve_round_filter", "resolve_score_filter"]
