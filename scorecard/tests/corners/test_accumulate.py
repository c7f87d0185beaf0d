import pytest

from scorecard.corners.accumulate import (
    accumulate,
    golf_percentile,
    interpolated_golf_percentile,
    median,
    round_one_decimal,
)
from scorecard.corners.schemas import AccumulationMode


def test_golf_percentile_is_inverted():
    scores = [1, 2, 3, 4, 5]
    # 25th golf percentile: 25% of scores are worse (higher)
    assert golf_percentile(scores, 25) == 4
    assert golf_percentile(scores, 0) == 5
    assert golf_percentile(scores, 99) == 1
    assert golf_percentile([5, 1, 4, 2, 3], 25) == 4


def test_golf_percentile_empty():
    assert golf_percentile([], 50) is None


def test_interpolated_percentile_rounds_to_one_decimal():
    assert interpolated_golf_percentile([1, 2, 3, 4, 5], 25) == 4
    assert interpolated_golf_percentile([1, 2, 3, 4, 5], 75) == 2
    assert interpolated_golf_percentile([1, 2, 3, 4], 25) == pytest.approx(3.3)
    assert interpolated_golf_percentile([], 25) is None


def test_median_even_and_odd():
    assert median([1, 2, 3]) == 2
    assert median([1, 2, 3, 4]) == pytest.approx(2.5)
    assert median([]) is None


def test_round_one_decimal_half_up():
    assert round_one_decimal(2.25) == pytest.approx(2.3)
    assert round_one_decimal(87.5) == pytest.approx(87.5)
    assert round_one_decimal(11 / 3) == pytest.approx(3.7)


@pytest.mark.parametrize(
    "mode, expected",
    [
        (AccumulationMode.BEST, 1),
        (AccumulationMode.WORST, 5),
        (AccumulationMode.LATEST, 4),
        (AccumulationMode.FIRST, 3),
        (AccumulationMode.RELEVANT, 3),
    ],
)
def test_accumulate_simple_modes(mode, expected):
    assert accumulate(mode, [3, 5, 1, 4]) == expected


def test_accumulate_average_rounds():
    assert accumulate(AccumulationMode.AVERAGE, [3, 4, 4]) == pytest.approx(3.7)


def test_accumulate_percentile_requires_value():
    assert accumulate(AccumulationMode.PERCENTILE, [1, 2, 3, 4, 5], 25) == 4
    assert accumulate(AccumulationMode.PERCENTILE, [1, 2, 3, 4, 5]) is None


def test_accumulate_no_data():
    assert accumulate(AccumulationMode.BEST, []) is None
    assert accumulate(AccumulationMode.AVERAGE, [0, 0]) is None
    assert accumulate(AccumulationMode.AVERAGE, [float("nan")]) is None
