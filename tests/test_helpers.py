import random

import pytest

from turtle_advisor.strategies.helpers import position_size, risk_levels, scale_in_size, to_arrays
from turtle_advisor.types import Candle


def test_position_size_example():
    # (0.01 * 10000) / (5 * 100) = 0.2
    assert position_size(10_000, 1, 5, 100, 3) == pytest.approx(0.2)


@pytest.mark.parametrize("n,price", [(0, 100), (-1, 100), (5, 0), (5, -10)])
def test_position_size_zero_on_degenerate_inputs(n, price):
    assert position_size(10_000, 1, n, price, 4) == 0.0
    assert position_size(1e9, 100, n, price, 0) == 0.0


def test_position_size_truncates_never_rounds_up():
    # raw = 100 / 7 = 14.2857...
    assert position_size(10_000, 1, 1, 7, 2) == pytest.approx(14.28)
    assert position_size(10_000, 1, 1, 7, 0) == 14.0


def test_position_size_floor_property():
    rnd = random.Random(1)
    for _ in range(500):
        equity = rnd.uniform(100, 1e5)
        risk = rnd.uniform(0.1, 5)
        n = rnd.uniform(0.5, 50)
        price = rnd.uniform(1, 70_000)
        digits = rnd.randint(0, 6)
        raw = (risk / 100) * equity / (n * price)
        size = position_size(equity, risk, n, price, digits)
        assert size <= raw
        scaled = size * 10 ** digits
        assert abs(scaled - round(scaled)) <= 1e-9 * max(1.0, scaled)
        assert raw - size < 10 ** -digits


def test_scale_in_is_half_unit():
    assert scale_in_size(0.2) == pytest.approx(0.1)


def test_long_levels():
    lv = risk_levels(100, 5, True, take_profit_multiple=4, trailing_exit=93.5)
    assert lv.stop_loss == 90
    assert lv.take_profit == 120
    assert lv.trailing_exit == 93.5


def test_short_levels():
    lv = risk_levels(100, 5, False, take_profit_multiple=4)
    assert lv.stop_loss == 110
    assert lv.take_profit == 80
    assert lv.trailing_exit is None


def test_take_profit_omitted_without_positive_multiple():
    assert risk_levels(100, 5, True).take_profit is None
    assert risk_levels(100, 5, True, take_profit_multiple=0).take_profit is None


def test_to_arrays_column_order():
    o, h, l, c = to_arrays([Candle(1, 4, 0.5, 2), Candle(2, 5, 1.5, 3)])
    assert list(o) == [1, 2] and list(h) == [4, 5] and list(l) == [0.5, 1.5] and list(c) == [2, 3]


def test_position_size_truncates_decimal_value_not_float_product():
    # 0.29 * 100 is 28.999999999999996 in binary floating point
    assert position_size(29, 100, 1, 100, 2) == 0.29
