# turtle_advisor/data/normalize.py
from __future__ import annotations
import math
from typing import Any, Iterable, Mapping
from ..types import Candle


def parse_number(raw: Any) -> float:
    """Decimal string -> float. Anything unparseable or non-finite becomes 0.0."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def to_candle(item: Mapping[str, Any]) -> Candle:
    v = item.get("v")
    return Candle(
        open=parse_number(item.get("o")),
        high=parse_number(item.get("h")),
        low=parse_number(item.get("l")),
        close=parse_number(item.get("c")),
        volume=parse_number(v) if v is not None else None,
    )


def to_candles(items: Iterable[Mapping[str, Any]]) -> list[Candle]:
    return [to_candle(it) for it in items]
