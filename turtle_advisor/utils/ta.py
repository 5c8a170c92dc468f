# turtle_advisor/utils/ta.py
from __future__ import annotations
from collections import deque
from typing import Sequence
import numpy as np
from ..types import DonchianBands

ArrayLike = Sequence[float] | np.ndarray


def donchian_bands(high: ArrayLike, low: ArrayLike, period: int, end_index: int) -> DonchianBands | None:
    """
    Highest high / lowest low over bars [end_index-period+1, end_index].
    None when the window is not fully populated.
    """
    h = np.asarray(high, dtype=float)
    l = np.asarray(low, dtype=float)
    if period < 1 or end_index < 0 or end_index >= len(h):
        return None
    start = max(0, end_index - period + 1)
    if end_index - start + 1 < period:
        return None
    upper = float(np.max(h[start:end_index + 1]))
    lower = float(np.min(l[start:end_index + 1]))
    return DonchianBands(upper=upper, lower=lower, middle=(upper + lower) / 2)


def donchian_channel(high: ArrayLike, low: ArrayLike, period: int):
    """
    Full (upper, lower, middle) series, NaN until the first window is complete.
    Monotonic deques keep each bar O(1) amortized instead of rescanning the window.
    """
    h = np.asarray(high, dtype=float)
    l = np.asarray(low, dtype=float)
    upper = np.full(len(h), np.nan, dtype=float)
    lower = np.full(len(h), np.nan, dtype=float)
    if period < 1:
        return upper, lower, np.full(len(h), np.nan, dtype=float)
    max_q: deque[int] = deque()
    min_q: deque[int] = deque()
    for i in range(len(h)):
        while max_q and h[max_q[-1]] <= h[i]:
            max_q.pop()
        max_q.append(i)
        while min_q and l[min_q[-1]] >= l[i]:
            min_q.pop()
        min_q.append(i)
        # evict indices that slid out of [i-period+1, i]
        if max_q[0] <= i - period:
            max_q.popleft()
        if min_q[0] <= i - period:
            min_q.popleft()
        if i >= period - 1:
            upper[i] = h[max_q[0]]
            lower[i] = l[min_q[0]]
    middle = (upper + lower) / 2
    return upper, lower, middle


def trailing_exit_level(high: ArrayLike, low: ArrayLike, exit_period: int, is_long: bool, end_index: int) -> float | None:
    bands = donchian_bands(high, low, exit_period, end_index)
    if bands is None:
        return None
    return bands.lower if is_long else bands.upper


def true_range(high: ArrayLike, low: ArrayLike, close: ArrayLike) -> np.ndarray:
    h = np.asarray(high, dtype=float)
    l = np.asarray(low, dtype=float)
    c = np.asarray(close, dtype=float)
    if len(h) == 0:
        return np.empty(0, dtype=float)
    prev_close = np.roll(c, 1)
    # no prior close on the first bar: TR collapses to high - low
    prev_close[0] = h[0]
    return np.maximum(h - l, np.maximum(np.abs(h - prev_close), np.abs(l - prev_close)))


def wilder_atr(tr: ArrayLike, period: int) -> np.ndarray:
    """
    Wilder-smoothed ATR aligned to bar index.

    ATR[period-1] is the mean of the first `period` true ranges, then
    ATR[i] = (ATR[i-1] * (period-1) + TR[i]) / period. Earlier slots are NaN.
    Returns an empty array when there are fewer than `period` values.
    """
    values = np.asarray(tr, dtype=float)
    if period < 1 or len(values) < period:
        return np.empty(0, dtype=float)
    out = np.full(len(values), np.nan, dtype=float)
    prev = float(np.sum(values[:period])) / period
    out[period - 1] = prev
    for i in range(period, len(values)):
        prev = (prev * (period - 1) + float(values[i])) / period
        out[i] = prev
    return out


def atr(high: ArrayLike, low: ArrayLike, close: ArrayLike, period: int = 20) -> np.ndarray:
    return wilder_atr(true_range(high, low, close), period)


def latest(values: ArrayLike) -> float | None:
    """Most recent defined value of an indicator series (the volatility unit N for ATR)."""
    arr = np.asarray(values, dtype=float)
    if len(arr) == 0 or np.isnan(arr[-1]):
        return None
    return float(arr[-1])
