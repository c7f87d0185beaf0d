import pytest

from scorecard.rounds.provider import FileRoundProvider, InMemoryRoundProvider
from scorecard.stats.hole_stats import (
    HoleStatistics,
    compute_all_hole_statistics,
    compute_hole_statistics,
    compute_total_round_statistics,
    summarize,
)
from scorecard.tests.factories import day, player_round


def _provider():
    records = [
        player_round(f"r{n}", "a" if n % 2 else "b", day(n), {1: value, 2: 4})
        for n, value in enumerate([3, 4, 5, 6, 7], start=1)
    ]
    records.append(player_round("r6", "a", day(6), {1: 2}, incomplete=(1,)))
    return InMemoryRoundProvider(records)


def test_summarize_uses_inverted_percentiles():
    stats = summarize([7, 3, 5, 4, 6])
    assert stats == HoleStatistics(worst=7, p25=6, p50=5, p75=4, best=3)


def test_summarize_empty():
    assert summarize([]) == HoleStatistics.empty()


@pytest.mark.anyio
async def test_hole_statistics_over_all_players():
    stats = await compute_hole_statistics("v1", 1, provider=_provider())
    assert stats == HoleStatistics(worst=7, p25=6, p50=5, p75=4, best=3)


@pytest.mark.anyio
async def test_hole_statistics_respect_exclusion():
    stats = await compute_hole_statistics(
        "v1", 1, exclude_from=day(3), provider=_provider()
    )
    assert stats.best == 3
    assert stats.worst == 4
    assert stats.p50 == pytest.approx(3.5)


@pytest.mark.anyio
async def test_all_hole_statistics():
    stats = await compute_all_hole_statistics("v1", [1, 2, 9], provider=_provider())
    assert set(stats) == {1, 2, 9}
    assert stats[2].best == 4
    assert stats[9] == HoleStatistics.empty()


@pytest.mark.anyio
async def test_round_total_statistics():
    stats = await compute_total_round_statistics("v1", provider=_provider())
    assert stats.best == 7
    assert stats.worst == 11
    assert stats.p50 == 9


@pytest.mark.anyio
async def test_unsafe_or_missing_venue_gives_empty_statistics(tmp_path):
    provider = FileRoundProvider(base_dir=tmp_path)
    assert await compute_hole_statistics("../x", 1, provider=provider) == (
        HoleStatistics.empty()
    )
    assert await compute_hole_statistics(None, 1, provider=provider) == (
        HoleStatistics.empty()
    )
    assert await compute_all_hole_statistics(None, [1]) == {}
