# turtle_advisor/strategies/turtle.py
from __future__ import annotations
import logging
from typing import Sequence
from ..config import TurtleParams
from ..types import BreakoutQuality, Candle, Direction, Evaluation, Strength
from ..utils.ta import atr, donchian_bands, latest
from .base import Strategy
from .breakout import breakout_direction, breakout_quality, breakout_strength, volume_ratio
from .helpers import to_arrays

log = logging.getLogger(__name__)

VOLUME_LOOKBACK = 20

_DIRECTION_LABELS: dict[Direction, str] = {"long": "Long", "short": "Short", "none": "None"}
_QUALITY_LABELS: dict[BreakoutQuality, str] = {
    "true": "True (full)",
    "sub": "Sub (scale-in)",
    "none": "None",
}

SUGGEST_NO_ENTRY = "No entry."
SUGGEST_FULL = "Full size at current price."
SUGGEST_SCALE_IN = "Partial / scale-in entry: half unit first, add on confirmation."


def make_tag(direction: Direction, strength: Strength, quality: BreakoutQuality) -> str:
    if direction == "none":
        return "None"
    return f"{_DIRECTION_LABELS[direction]} / {strength} / {_QUALITY_LABELS[quality]}"


def make_suggestion(direction: Direction, quality: BreakoutQuality) -> str:
    if direction == "none" or quality == "none":
        return SUGGEST_NO_ENTRY
    if quality == "true":
        return SUGGEST_FULL
    return SUGGEST_SCALE_IN


def channel_end_index(last_idx: int, params: TurtleParams) -> int:
    return last_idx - 1 if params.prior_bar_channel else last_idx


def evaluate(candles: Sequence[Candle], params: TurtleParams, n: float) -> Evaluation | None:
    """
    Decision snapshot for the last closed bar.

    Needs at least confirmation_period + 1 bars. Both channels end at the last
    bar, or one bar earlier with params.prior_bar_channel. Direction and quality
    use the entry-period channel, strength compares it with the confirmation
    channel. With the volume filter on, a last-bar volume below the 20-bar
    average downgrades a would-be "true" breakout to "sub".
    """
    last_idx = len(candles) - 1
    if last_idx < params.confirmation_period:
        return None

    _, h, l, _ = to_arrays(candles)
    end = channel_end_index(last_idx, params)
    entry = donchian_bands(h, l, params.entry_period, end)
    confirm = donchian_bands(h, l, params.confirmation_period, end)
    if entry is None or confirm is None:
        return None

    last = candles[last_idx]
    direction = breakout_direction(last.close, entry.upper, entry.lower)

    ratio = volume_ratio(candles, VOLUME_LOOKBACK) if params.use_volume_filter else None
    confirmed = None if ratio is None else ratio >= 1

    quality = breakout_quality(last, entry.upper, entry.lower, n, params.true_breakout_threshold, confirmed)
    strength = breakout_strength(last.close, entry, confirm, direction)
    log.debug("evaluate: close=%s entry=%s confirm=%s dir=%s quality=%s", last.close, entry, confirm, direction, quality)

    return Evaluation(
        direction=direction,
        strength=strength,
        breakout_quality=quality,
        tag=make_tag(direction, strength, quality),
        suggestion=make_suggestion(direction, quality),
        volume_ratio=ratio,
    )


class TurtleStrategy(Strategy):
    name = "Turtle Donchian Breakout"

    def __init__(self, params: TurtleParams | None = None):
        self.params = params or TurtleParams()

    def volatility_unit(self, candles: Sequence[Candle]) -> float | None:
        _, h, l, c = to_arrays(candles)
        return latest(atr(h, l, c, self.params.atr_period))

    def generate(self, candles: Sequence[Candle]) -> Evaluation | None:
        n = self.volatility_unit(candles)
        if n is None or n <= 0:
            return None
        return evaluate(candles, self.params, n)
