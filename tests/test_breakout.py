import pytest

from turtle_advisor.strategies.breakout import (
    breakout_direction, breakout_quality, breakout_strength, volume_ratio,
)
from turtle_advisor.types import Candle, DonchianBands

UPPER, LOWER, N, T = 100.0, 90.0, 5.0, 0.25


def bar(close, high=None, low=None, volume=None):
    return Candle(open=close, high=high if high is not None else close,
                  low=low if low is not None else close, close=close, volume=volume)


def test_full_long_breakout():
    cd = bar(105, high=106, low=99)
    assert breakout_direction(cd.close, UPPER, LOWER) == "long"
    # 105 >= 100 + 0.25*5
    assert breakout_quality(cd, UPPER, LOWER, N, T) == "true"


def test_marginal_long_close_is_sub():
    assert breakout_quality(bar(101, high=102), UPPER, LOWER, N, T) == "sub"
    assert breakout_quality(bar(101.25, high=102), UPPER, LOWER, N, T) == "true"


def test_volume_veto_downgrades_to_sub():
    cd = bar(105, high=106)
    assert breakout_quality(cd, UPPER, LOWER, N, T, volume_confirmed=False) == "sub"
    assert breakout_quality(cd, UPPER, LOWER, N, T, volume_confirmed=True) == "true"
    assert breakout_quality(cd, UPPER, LOWER, N, T, volume_confirmed=None) == "true"


def test_wick_only_long():
    cd = bar(99, high=102, low=95)
    assert breakout_direction(cd.close, UPPER, LOWER) == "none"
    assert breakout_quality(cd, UPPER, LOWER, N, T) == "sub"


def test_short_mirror():
    assert breakout_direction(80, UPPER, LOWER) == "short"
    assert breakout_quality(bar(80, low=79), UPPER, LOWER, N, T) == "true"
    assert breakout_quality(bar(89.5, low=89), UPPER, LOWER, N, T) == "sub"
    assert breakout_quality(bar(80, low=79), UPPER, LOWER, N, T, volume_confirmed=False) == "sub"
    # wick below, close back inside
    assert breakout_quality(bar(91, high=92, low=88), UPPER, LOWER, N, T) == "sub"


def test_inside_channel_is_none():
    cd = bar(95, high=100, low=90)
    assert breakout_direction(cd.close, UPPER, LOWER) == "none"
    assert breakout_quality(cd, UPPER, LOWER, N, T) == "none"


def test_long_wick_checked_before_short_close():
    # degenerate bar that pierces both sides: the long wick rule wins
    cd = bar(85, high=101, low=84)
    assert breakout_direction(cd.close, UPPER, LOWER) == "short"
    assert breakout_quality(cd, UPPER, LOWER, N, T) == "sub"


@pytest.mark.parametrize("close,direction,expected", [
    (105, "long", "strong"),
    (101.5, "long", "weak"),
    (99, "long", "none"),
    (80, "short", "strong"),
    (88, "short", "weak"),
    (105, "none", "none"),
])
def test_strength(close, direction, expected):
    entry = DonchianBands(upper=100, lower=90, middle=95)
    confirm = DonchianBands(upper=103, lower=85, middle=94)
    assert breakout_strength(close, entry, confirm, direction) == expected


def test_strength_medium_when_only_confirmation_is_cleared():
    entry = DonchianBands(upper=100, lower=90, middle=95)
    confirm = DonchianBands(upper=98, lower=92, middle=95)
    assert breakout_strength(99, entry, confirm, "long") == "medium"
    assert breakout_strength(91, entry, confirm, "short") == "medium"


def test_volume_ratio():
    candles = [bar(100, volume=10.0)] * 20 + [bar(100, volume=20.0)]
    assert volume_ratio(candles) == 2.0
    assert volume_ratio(candles[1:]) is None
    assert volume_ratio(candles[:-1] + [bar(100)]) is None


def test_volume_ratio_missing_and_zero_history():
    mixed = [bar(100)] * 10 + [bar(100, volume=20.0)] * 10 + [bar(100, volume=20.0)]
    assert volume_ratio(mixed) == 2.0
    silent = [bar(100, volume=0.0)] * 20 + [bar(100, volume=5.0)]
    assert volume_ratio(silent) == 1.0
