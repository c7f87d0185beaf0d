"""Collect the scalar scores a corner statistic reduces over."""

from __future__ import annotations

from typing import Optional, Sequence

from scorecard.rounds.models import PlayerRound, find_record, group_by_round

from .players import named_player_ids, resolve_score_filter
from .schemas import AccumulationMode, CornerConfig, Scope, UserFilterMode


def _order_records(
    records: Sequence[PlayerRound], mode: AccumulationMode
) -> list[PlayerRound]:
    if mode is AccumulationMode.LATEST:
        return sorted(records, key=lambda r: r.date, reverse=True)
    if mode is AccumulationMode.FIRST:
        return sorted(records, key=lambda r: r.date)
    return list(records)


def extract_scalar(
    record: PlayerRound | None, scope: Scope, hole_number: int | None
) -> Optional[int]:
    """Hole value or round total, ``None`` when there is nothing recorded."""

    if record is None:
        return None
    if scope is Scope.ROUND:
        value: Optional[int] = record.round_total()
    else:
        if hole_number is None:
            raise ValueError("hole_number is required for hole-scoped statistics")
        value = record.hole_value(hole_number)
    return value or None


def _has_scalar(
    round_records: Sequence[PlayerRound],
    player_id: str,
    scope: Scope,
    hole_number: int | None,
    expected_hole_count: int,
) -> bool:
    record = find_record(round_records, player_id)
    if record is None or not record.is_complete(expected_hole_count):
        return False
    return extract_scalar(record, scope, hole_number) is not None


def collect_scores(
    config: CornerConfig,
    records: Sequence[PlayerRound],
    subject_player_id: str,
    hole_number: int | None,
    expected_hole_count: int,
    todays_player_ids: Sequence[str] = (),
) -> list[int]:
    ordered = _order_records(records, config.accumulation_mode)
    one_per_player = config.picks_one_round_per_player
    required = named_player_ids(config.score_user_filter, todays_player_ids)
    all_or_nothing = (
        config.user_filter_mode is UserFilterMode.AND and len(required) > 1
    )

    added_players: set[str] = set()
    scores: list[int] = []

    for round_records in group_by_round(ordered).values():
        present = [record.player_id for record in round_records]
        picked: list[PlayerRound] = []
        for player_id in resolve_score_filter(
            present, config.score_user_filter, subject_player_id, todays_player_ids
        ):
            record = find_record(round_records, player_id)
            if record is None or not record.is_complete(expected_hole_count):
                continue
            if one_per_player:
                if player_id in added_players:
                    continue
                added_players.add(player_id)
            picked.append(record)

        if all_or_nothing and not all(
            _has_scalar(
                round_records,
                player_id,
                config.scope,
                hole_number,
                expected_hole_count,
            )
            for player_id in required
        ):
            continue

        for record in picked:
            value = extract_scalar(record, config.scope, hole_number)
            if value is not None:
                scores.append(value)

    return scores


__all__ = ["collect_scores", "extract_scalar"]
