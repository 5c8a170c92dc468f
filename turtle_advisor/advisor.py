# turtle_advisor/advisor.py
from __future__ import annotations
import logging
from typing import Sequence
from .config import TurtleParams
from .strategies.helpers import position_size, risk_levels, scale_in_size, to_arrays
from .strategies.turtle import channel_end_index, evaluate
from .types import Candle, TurtleAdvice
from .utils.ta import atr, donchian_bands, latest, trailing_exit_level

log = logging.getLogger(__name__)


def advise(
    candles: Sequence[Candle], price: float | None, params: TurtleParams | None = None,
    size_decimals: int | None = None,
) -> TurtleAdvice:
    """
    Everything a trader needs to decide on an entry at `price` right now.

    Sizing and levels are "if you enter now": they assume no open position.
    Any output that cannot be computed is None and the reason goes to `notes`.
    `size_decimals` (exchange precision) overrides params.size_precision_digits.
    """
    params = params or TurtleParams()
    decimals = params.size_precision_digits if size_decimals is None else size_decimals
    notes: list[str] = []

    bars = len(candles)
    last_idx = bars - 1
    enough = bars >= params.min_bars
    if not enough:
        notes.append(f"Only {bars} bars; need {params.min_bars}+ for Donchian + ATR.")

    _, h, l, c = to_arrays(candles)
    n = latest(atr(h, l, c, params.atr_period))
    if n is None:
        notes.append(f"ATR({params.atr_period}) unavailable.")
    elif n <= 0:
        notes.append("ATR is zero; flat market, no sizing possible.")

    # same channels the evaluation uses
    end = channel_end_index(last_idx, params)
    entry_bands = donchian_bands(h, l, params.entry_period, end) if enough else None
    confirm_bands = donchian_bands(h, l, params.confirmation_period, end) if enough else None

    evaluation = None
    if enough and n is not None and n > 0:
        evaluation = evaluate(candles, params, n)

    valid_price = price is not None and price > 0
    if not valid_price:
        notes.append("No current price; size and levels skipped.")

    full = None
    if valid_price and n is not None and n > 0:
        full = position_size(params.account_equity, params.risk_percent, n, price, decimals)

    scale_in = None
    if full is not None and evaluation is not None and evaluation.breakout_quality == "sub":
        scale_in = scale_in_size(full)

    trail_long = trailing_exit_level(h, l, params.exit_period, True, last_idx) if enough else None
    trail_short = trailing_exit_level(h, l, params.exit_period, False, last_idx) if enough else None

    levels = None
    if evaluation is not None and evaluation.direction != "none" and valid_price:
        is_long = evaluation.direction == "long"
        levels = risk_levels(
            price, n, is_long,
            take_profit_multiple=params.take_profit_multiple,
            trailing_exit=trail_long if is_long else trail_short,
        )

    log.debug("advise: bars=%d n=%s eval=%s size=%s", bars, n, evaluation, full)
    return TurtleAdvice(
        bars=bars,
        enough_data=enough,
        n=n,
        last_close=candles[last_idx].close if bars else None,
        entry_bands=entry_bands,
        confirmation_bands=confirm_bands,
        evaluation=evaluation,
        full_size=full,
        scale_in_size=scale_in,
        levels=levels,
        trailing_exit_long=trail_long,
        trailing_exit_short=trail_short,
        notes=tuple(notes),
    )
