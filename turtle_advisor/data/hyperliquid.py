from __future__ import annotations
import logging
import time
from typing import Any
import httpx
import pandas as pd
from ..config import settings
from ..types import INTERVAL_MS, AssetMeta, Candle, Interval
from .base import MarketDataProvider
from .normalize import parse_number, to_candle

log = logging.getLogger(__name__)


class HyperliquidProvider(MarketDataProvider):
    """Hyperliquid public info endpoint. No API key needed for market data."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None,
                 client: httpx.AsyncClient | None = None):
        self.base_url = base_url or settings.hyperliquid_info_url
        self._client = client or httpx.AsyncClient(timeout=timeout or settings.http_timeout)

    async def _info(self, payload: dict[str, Any]) -> Any:
        log.debug("POST %s type=%s", self.base_url, payload.get("type"))
        r = await self._client.post(self.base_url, json=payload)
        r.raise_for_status()
        return r.json()

    async def get_recent_candles(self, symbol: str, interval: Interval, limit: int = 120,
                                 now_ms: int | None = None) -> list[Candle]:
        if interval not in INTERVAL_MS:
            raise ValueError(f"Unsupported interval: {interval}")
        end_time = now_ms if now_ms is not None else int(time.time() * 1000)
        start_time = end_time - limit * INTERVAL_MS[interval]
        data = await self._info({
            "type": "candleSnapshot",
            "req": {"coin": symbol, "interval": interval, "startTime": start_time, "endTime": end_time},
        })
        if not isinstance(data, list) or not data:
            return []

        df = pd.DataFrame(data)
        missing = {"t", "T", "o", "c", "h", "l"} - set(df.columns)
        if missing:
            raise RuntimeError(f"candleSnapshot: missing fields {sorted(missing)}")
        df = df.sort_values("t", kind="stable").drop_duplicates(subset="t", keep="last")
        # the bar still forming has a close time in the future
        closed = df[df["T"] < end_time]
        if len(closed) < len(df):
            log.debug("dropped %d in-progress bar(s) for %s/%s", len(df) - len(closed), symbol, interval)
        closed = closed.tail(limit)
        records = closed.astype(object).where(pd.notna(closed), None).to_dict(orient="records")
        return [to_candle(rec) for rec in records]

    async def get_mid(self, symbol: str) -> float | None:
        data = await self._info({"type": "allMids"})
        if not isinstance(data, dict):
            raise RuntimeError(f"allMids: unexpected response {str(data)[:200]}")
        raw = data.get(symbol)
        if raw is None:
            return None
        mid = parse_number(raw)
        return mid if mid > 0 else None

    async def get_asset_meta(self, symbol: str) -> AssetMeta | None:
        data = await self._info({"type": "meta"})
        if not isinstance(data, dict) or "universe" not in data:
            raise RuntimeError(f"meta: unexpected response {str(data)[:200]}")
        for asset in data["universe"]:
            if asset.get("name") == symbol:
                return AssetMeta(
                    name=symbol,
                    size_decimals=int(asset.get("szDecimals", 4)),
                    max_leverage=int(asset.get("maxLeverage", 1)),
                )
        return None

    async def close(self) -> None:
        await self._client.aclose()
