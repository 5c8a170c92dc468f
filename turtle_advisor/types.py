from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, TypedDict, NotRequired

Interval = Literal["1m", "5m", "15m", "1h", "4h", "1d"]

INTERVAL_MS: dict[Interval, int] = {
    "1m": 60 * 1000,
    "5m": 5 * 60 * 1000,
    "15m": 15 * 60 * 1000,
    "1h": 60 * 60 * 1000,
    "4h": 4 * 60 * 60 * 1000,
    "1d": 24 * 60 * 60 * 1000,
}

Direction = Literal["long", "short", "none"]
BreakoutQuality = Literal["true", "sub", "none"]
Strength = Literal["none", "weak", "medium", "strong"]


class CandleSnapshotItem(TypedDict):
    """Raw candle as served by the exchange (prices kept as strings for precision)."""
    t: int      # open time, ms
    T: int      # close time, ms
    o: str
    c: str
    h: str
    l: str
    v: NotRequired[str]
    n: int      # trade count
    s: str
    i: str


@dataclass(frozen=True, slots=True)
class Candle:
    open: float
    high: float
    low: float
    close: float
    volume: float | None = None


@dataclass(frozen=True, slots=True)
class DonchianBands:
    upper: float
    lower: float
    middle: float


@dataclass(frozen=True, slots=True)
class Evaluation:
    direction: Direction
    strength: Strength
    breakout_quality: BreakoutQuality
    tag: str
    suggestion: str
    volume_ratio: float | None = None


@dataclass(frozen=True, slots=True)
class RiskLevels:
    stop_loss: float
    take_profit: float | None = None
    trailing_exit: float | None = None


@dataclass(frozen=True, slots=True)
class AssetMeta:
    name: str
    size_decimals: int
    max_leverage: int = 1


@dataclass(frozen=True, slots=True)
class TurtleAdvice:
    bars: int
    enough_data: bool
    n: float | None
    last_close: float | None
    entry_bands: DonchianBands | None
    confirmation_bands: DonchianBands | None
    evaluation: Evaluation | None
    full_size: float | None
    scale_in_size: float | None
    levels: RiskLevels | None
    trailing_exit_long: float | None
    trailing_exit_short: float | None
    notes: tuple[str, ...] = ()
