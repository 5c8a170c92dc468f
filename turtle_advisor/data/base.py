from __future__ import annotations
from abc import ABC, abstractmethod
from ..types import AssetMeta, Candle, Interval


class MarketDataProvider(ABC):
    """Common interface for market-data sources. One request per call, no streaming."""

    @abstractmethod
    async def get_recent_candles(
        self, symbol: str, interval: Interval, limit: int = 120, now_ms: int | None = None
    ) -> list[Candle]:
        """Return up to `limit` candles closed before `now_ms` (default: now), oldest first."""

    @abstractmethod
    async def get_mid(self, symbol: str) -> float | None:
        """Current mid price, or None if the symbol is not quoted."""

    @abstractmethod
    async def get_asset_meta(self, symbol: str) -> AssetMeta | None:
        """Exchange metadata (size precision) for the symbol."""

    async def close(self) -> None:
        return None
