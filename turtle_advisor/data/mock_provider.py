from __future__ import annotations
from datetime import datetime, timezone
import math
import random
from ..types import INTERVAL_MS, AssetMeta, Candle, CandleSnapshotItem, Interval
from .base import MarketDataProvider
from .normalize import to_candles


class MockProvider(MarketDataProvider):
    """Offline random walk. Same seed, symbol, limit and now_ms always give the same candles."""

    def __init__(self, seed: int = 42, size_decimals: int = 4):
        self.seed = seed
        self.size_decimals = size_decimals
        self._last_close: dict[str, float] = {}

    def _start_price(self, symbol: str) -> float:
        return {"BTC": 60_000.0, "ETH": 3_000.0}.get(symbol.upper(), 100.0)

    def snapshot(self, symbol: str, interval: Interval, limit: int = 120,
                 now_ms: int | None = None) -> list[CandleSnapshotItem]:
        rnd = random.Random(f"{self.seed}:{symbol}")
        step = INTERVAL_MS[interval]
        if now_ms is None:
            now_ms = int(datetime.now(timezone.utc).timestamp() * 1000)
        last_close_ms = now_ms - now_ms % step
        price = self._start_price(symbol)
        items: list[CandleSnapshotItem] = []
        for i in range(limit):
            t = last_close_ms - step * (limit - i)
            drift = 0.0004 * math.sin(i / 15)
            noise = (rnd.random() - 0.5) * 0.01
            open_ = price
            close = max(0.01, price * (1 + drift + noise))
            high = max(open_, close) * (1 + abs(noise) * 0.5)
            low = min(open_, close) * (1 - abs(noise) * 0.5)
            volume = 1_000 * (1 + rnd.random())
            items.append({
                "t": t, "T": t + step - 1,
                "o": f"{open_:.4f}", "c": f"{close:.4f}", "h": f"{high:.4f}", "l": f"{low:.4f}",
                "v": f"{volume:.2f}", "n": rnd.randint(50, 500), "s": symbol, "i": interval,
            })
            price = close
        return items

    async def get_recent_candles(self, symbol: str, interval: Interval, limit: int = 120,
                                 now_ms: int | None = None) -> list[Candle]:
        candles = to_candles(self.snapshot(symbol, interval, limit, now_ms))
        if candles:
            self._last_close[symbol] = candles[-1].close
        return candles

    async def get_mid(self, symbol: str) -> float | None:
        # quote at the last close served, so the mid lines up with the window
        return self._last_close.get(symbol, self._start_price(symbol))

    async def get_asset_meta(self, symbol: str) -> AssetMeta | None:
        return AssetMeta(name=symbol, size_decimals=self.size_decimals, max_leverage=1)
