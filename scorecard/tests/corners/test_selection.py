from scorecard.corners.schemas import (
    AccumulationMode,
    AllRounds,
    BestRound,
    BestRounds,
    LatestRounds,
    SpecificRounds,
    WorstRound,
    WorstRounds,
)
from scorecard.corners.selection import select_rounds
from scorecard.tests.factories import day, player_round


def _totals(*totals):
    """One single-hole round per total for player ``a``, one day apart."""

    return [
        player_round(f"r{index}", "a", day(index), {1: total})
        for index, total in enumerate(totals, start=1)
    ]


def _round_ids(records):
    return [record.round_id for record in records]


def test_all_rounds_and_missing_selection_keep_everything():
    records = _totals(90, 85, 95)
    assert select_rounds(records, None, AccumulationMode.BEST, "a", 1) == records
    assert select_rounds(records, AllRounds(), AccumulationMode.BEST, "a", 1) == records


def test_best_rounds_keeps_lowest_totals_in_input_order():
    records = _totals(90, 85, 95)
    chosen = select_rounds(
        records, BestRounds(count=2), AccumulationMode.AVERAGE, "a", 1
    )
    assert _round_ids(chosen) == ["r1", "r2"]


def test_worst_round_and_worst_rounds():
    records = _totals(90, 85, 95)
    worst = select_rounds(records, WorstRound(), AccumulationMode.BEST, "a", 1)
    assert _round_ids(worst) == ["r3"]
    worst_two = select_rounds(
        records, WorstRounds(count=2), AccumulationMode.BEST, "a", 1
    )
    assert _round_ids(worst_two) == ["r1", "r3"]


def test_best_round_rank_ties_keep_input_order():
    records = _totals(85, 90, 85)
    first = select_rounds(records, BestRound(rank=1), AccumulationMode.BEST, "a", 1)
    second = select_rounds(records, BestRound(rank=2), AccumulationMode.BEST, "a", 1)
    assert _round_ids(first) == ["r1"]
    assert _round_ids(second) == ["r3"]


def test_latest_rounds_by_date():
    records = _totals(90, 85, 95)
    chosen = select_rounds(
        records, LatestRounds(count=2), AccumulationMode.AVERAGE, "a", 1
    )
    assert _round_ids(chosen) == ["r2", "r3"]


def test_ranking_ignores_incomplete_subject_rounds():
    records = _totals(90, 95) + [
        player_round("r3", "a", day(3), {1: 70}, incomplete=(1,))
    ]
    chosen = select_rounds(records, BestRound(), AccumulationMode.BEST, "a", 1)
    assert _round_ids(chosen) == ["r1"]


def test_chosen_rounds_keep_other_players_records():
    records = _totals(90, 85) + [player_round("r2", "b", day(2), {1: 99})]
    chosen = select_rounds(records, BestRound(), AccumulationMode.BEST, "a", 1)
    assert [(r.round_id, r.player_id) for r in chosen] == [("r2", "a"), ("r2", "b")]


def test_specific_rounds_bypass_completeness():
    records = _totals(90, 85) + [
        player_round("r3", "a", day(3), {1: 4, 2: 5}, incomplete=(1, 2))
    ]
    chosen = select_rounds(
        records,
        SpecificRounds(round_ids=("r3", "missing")),
        AccumulationMode.BEST,
        "a",
        2,
    )
    assert _round_ids(chosen) == ["r3"]


def test_latest_and_first_modes_ignore_selection():
    records = _totals(90, 85, 95)
    for mode in (AccumulationMode.LATEST, AccumulationMode.FIRST):
        assert select_rounds(records, BestRound(), mode, "a", 1) == records
