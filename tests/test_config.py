import pytest
from pydantic import ValidationError

from turtle_advisor.config import Settings, TurtleParams


def test_defaults_match_classic_turtle():
    p = TurtleParams()
    assert (p.entry_period, p.exit_period, p.confirmation_period, p.atr_period) == (20, 10, 55, 20)
    assert p.true_breakout_threshold == 0.25
    assert p.use_volume_filter is False
    assert p.take_profit_multiple == 4.0
    assert p.min_bars == 75
    assert p.prior_bar_channel is False


@pytest.mark.parametrize("field,value", [
    ("entry_period", 0),
    ("atr_period", -3),
    ("account_equity", 0),
    ("risk_percent", 150),
    ("size_precision_digits", -1),
    ("true_breakout_threshold", -0.1),
])
def test_invalid_params_rejected(field, value):
    with pytest.raises(ValidationError):
        TurtleParams(**{field: value})


def test_take_profit_can_be_disabled():
    assert TurtleParams(take_profit_multiple=None).take_profit_multiple is None


def test_params_are_frozen():
    p = TurtleParams()
    with pytest.raises(ValidationError):
        p.entry_period = 5


def test_settings_build_params_with_overrides():
    s = Settings(entry_period=30, risk_percent=2.0)
    p = s.turtle_params()
    assert p.entry_period == 30
    assert p.risk_percent == 2.0
    p = s.turtle_params(entry_period=15, exit_period=None)
    assert p.entry_period == 15
    assert p.exit_period == s.exit_period


def test_zero_risk_and_zero_take_profit_are_accepted():
    p = TurtleParams(risk_percent=0, take_profit_multiple=0)
    assert p.risk_percent == 0
    assert p.take_profit_multiple == 0
    assert TurtleParams(risk_percent=100).risk_percent == 100


def test_prior_bar_channel_is_opt_in():
    s = Settings(prior_bar_channel=True)
    assert s.turtle_params().prior_bar_channel is True
    assert Settings(prior_bar_channel=False).turtle_params().prior_bar_channel is False
