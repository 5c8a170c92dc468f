# turtle_advisor/strategies/helpers.py
from __future__ import annotations
from decimal import ROUND_DOWN, Context, Decimal
from typing import Sequence
import numpy as np
from ..types import Candle, RiskLevels

STOP_N_MULTIPLE = 2.0


def to_arrays(candles: Sequence[Candle]):
    closes = np.array([c.close for c in candles], dtype=float)
    highs  = np.array([c.high  for c in candles], dtype=float)
    lows   = np.array([c.low   for c in candles], dtype=float)
    opens  = np.array([c.open  for c in candles], dtype=float)
    return opens, highs, lows, closes


def position_size(equity: float, risk_pct: float, n: float, price: float, size_decimals: int) -> float:
    """
    Units such that a 1N move costs risk_pct% of equity, truncated (never rounded up)
    to `size_decimals` places. Zero when N or price is not positive.
    """
    if n <= 0 or price <= 0:
        return 0.0
    risk_amount = (risk_pct / 100.0) * equity
    raw = risk_amount / (n * price)
    digits = max(0, int(size_decimals))
    # truncate the shortest decimal form of raw; a float multiply can land one tick low
    d = Decimal(repr(raw))
    ctx = Context(prec=max(28, d.adjusted() + digits + 2))
    return float(d.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_DOWN, context=ctx))


def scale_in_size(full_size: float, fraction: float = 0.5) -> float:
    return full_size * fraction


def risk_levels(entry: float, n: float, is_long: bool,
                take_profit_multiple: float | None = None,
                trailing_exit: float | None = None) -> RiskLevels:
    sl = entry - STOP_N_MULTIPLE * n if is_long else entry + STOP_N_MULTIPLE * n
    tp = None
    if take_profit_multiple is not None and take_profit_multiple > 0:
        tp = entry + take_profit_multiple * n if is_long else entry - take_profit_multiple * n
    return RiskLevels(stop_loss=sl, take_profit=tp, trailing_exit=trailing_exit)
