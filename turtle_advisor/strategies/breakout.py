# turtle_advisor/strategies/breakout.py
from __future__ import annotations
from typing import Sequence
from ..types import BreakoutQuality, Candle, Direction, DonchianBands, Strength


def breakout_direction(close: float, upper: float, lower: float) -> Direction:
    if close > upper:
        return "long"
    if close < lower:
        return "short"
    return "none"


def breakout_quality(
    candle: Candle, upper: float, lower: float, n: float, threshold: float,
    volume_confirmed: bool | None = None,
) -> BreakoutQuality:
    """
    "true" = close cleared the band by at least threshold*N (and volume did not
    veto it), "sub" = marginal close or wick-only breach, "none" = inside the channel.
    Long checks run before short checks.
    """
    h, l, c = candle.high, candle.low, candle.close
    thresh_n = threshold * n
    volume_ok = volume_confirmed is not False

    if c > upper:
        if c >= upper + thresh_n and volume_ok:
            return "true"
        return "sub"
    if h > upper and c <= upper:
        return "sub"

    if c < lower:
        if c <= lower - thresh_n and volume_ok:
            return "true"
        return "sub"
    if l < lower and c >= lower:
        return "sub"

    return "none"


def breakout_strength(
    close: float, entry: DonchianBands, confirmation: DonchianBands, direction: Direction
) -> Strength:
    if direction == "long":
        beyond_entry = close > entry.upper
        beyond_confirm = close > confirmation.upper
    elif direction == "short":
        beyond_entry = close < entry.lower
        beyond_confirm = close < confirmation.lower
    else:
        return "none"

    if beyond_entry and beyond_confirm:
        return "strong"
    if beyond_confirm:
        return "medium"
    if beyond_entry:
        return "weak"
    return "none"


def volume_ratio(candles: Sequence[Candle], lookback: int = 20) -> float | None:
    """Last bar volume / mean volume of the `lookback` bars before it."""
    if lookback < 1 or len(candles) < lookback + 1:
        return None
    last = candles[-1]
    if last.volume is None:
        return None
    prior = candles[-lookback - 1:-1]
    avg = sum(cd.volume or 0.0 for cd in prior) / lookback
    if avg <= 0:
        return 1.0
    return last.volume / avg
