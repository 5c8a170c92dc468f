# turtle_advisor/app.py
from __future__ import annotations
import asyncio
import json
import logging
from dataclasses import asdict
from typing import Optional
from pydantic import ValidationError
from rich import print
from rich.table import Table
import numpy as np
import typer
from .advisor import advise
from .config import TurtleParams, settings
from .data.base import MarketDataProvider
from .data.mock_provider import MockProvider
from .logging_setup import configure_logging
from .strategies.helpers import to_arrays
from .types import INTERVAL_MS, Candle, Interval, TurtleAdvice
from .utils.ta import atr, donchian_channel

log = logging.getLogger(__name__)

cli = typer.Typer(help="Turtle / Donchian breakout advisor (educational, no order execution).")


@cli.callback()
def main(log_level: str = typer.Option(settings.log_level, help="DEBUG | INFO | WARNING")):
    configure_logging(log_level)


def _provider_from_name(name: str) -> MarketDataProvider:
    if name == "hyperliquid":
        from .data.hyperliquid import HyperliquidProvider
        return HyperliquidProvider()
    return MockProvider()


def _check_interval(interval: str) -> Interval:
    if interval not in INTERVAL_MS:
        raise typer.BadParameter(f"interval must be one of {', '.join(INTERVAL_MS)}")
    return interval  # type: ignore[return-value]


async def _load(provider: str, symbol: str, interval: Interval, limit: int,
                with_quote: bool) -> tuple[list[Candle], float | None, int | None]:
    """Candles, mid and size precision; falls back to the mock feed if the provider fails."""
    mdp = _provider_from_name(provider)
    try:
        candles = await mdp.get_recent_candles(symbol, interval, limit=limit)
        mid = await mdp.get_mid(symbol) if with_quote else None
        meta = await mdp.get_asset_meta(symbol) if with_quote else None
    except Exception as e:
        log.warning("Provider error: %s. Falling back to mock data.", e)
        await mdp.close()
        mdp = MockProvider()
        candles = await mdp.get_recent_candles(symbol, interval, limit=limit)
        mid = await mdp.get_mid(symbol) if with_quote else None
        meta = await mdp.get_asset_meta(symbol) if with_quote else None
    finally:
        await mdp.close()
    return candles, mid, meta.size_decimals if meta else None


def _fmt(x: float | None, dec: int = 4) -> str:
    return "-" if x is None else f"{x:,.{dec}f}"


def _at(series: np.ndarray, i: int) -> float | None:
    if i >= len(series) or np.isnan(series[i]):
        return None
    return float(series[i])


def advice_to_dict(symbol: str, interval: str, price: float | None, advice: TurtleAdvice) -> dict:
    out = asdict(advice)
    out["notes"] = list(advice.notes)
    return {"symbol": symbol, "interval": interval, "price": price, **out}


def _print_advice(symbol: str, interval: str, price: float | None, advice: TurtleAdvice, dec: int) -> None:
    table = Table(title=f"Turtle / Donchian: {symbol} {interval}", show_lines=True)
    table.add_column("Field"); table.add_column("Value")
    eb, cb = advice.entry_bands, advice.confirmation_bands
    table.add_row("Bars", str(advice.bars))
    table.add_row("Donchian (entry) U/L/M",
                  f"{_fmt(eb.upper)} / {_fmt(eb.lower)} / {_fmt(eb.middle)}" if eb else "-")
    table.add_row("Donchian (confirm) U/L",
                  f"{_fmt(cb.upper)} / {_fmt(cb.lower)}" if cb else "-")
    table.add_row("N (ATR)", _fmt(advice.n))
    table.add_row("Last close", _fmt(advice.last_close))
    table.add_row("Current price", _fmt(price, dec))
    ev = advice.evaluation
    table.add_row("Breakout", ev.direction if ev else "-")
    table.add_row("Breakout quality", ev.breakout_quality if ev else "-")
    table.add_row("Tag", ev.tag if ev else "-")
    table.add_row("Suggestion", ev.suggestion if ev else "-")
    if ev and ev.volume_ratio is not None:
        table.add_row("Volume ratio", f"{ev.volume_ratio:.2f}")
    table.add_row("Size (full)", _fmt(advice.full_size, dec))
    if advice.scale_in_size is not None:
        table.add_row("Size (scale-in, 1/2 unit)", _fmt(advice.scale_in_size, dec))
    if advice.levels:
        table.add_row("Stop loss (2N)", _fmt(advice.levels.stop_loss, dec))
        if advice.levels.take_profit is not None:
            table.add_row("Take profit", _fmt(advice.levels.take_profit, dec))
        if advice.levels.trailing_exit is not None:
            table.add_row("Trailing exit", _fmt(advice.levels.trailing_exit, dec))
    print(table)
    for note in advice.notes:
        print(f"[yellow]{note}[/]")


@cli.command()
def evaluate(
    symbol: str = typer.Option(settings.default_symbol, help="Ex: BTC"),
    interval: str = typer.Option(settings.default_interval, help="1m | 5m | 15m | 1h | 4h | 1d"),
    provider: str = typer.Option("hyperliquid", help="hyperliquid | mock"),
    limit: int = typer.Option(settings.fetch_bars, help="Closed bars to fetch"),
    price: Optional[float] = typer.Option(None, help="Entry price; defaults to the live mid"),
    entry_period: int = typer.Option(settings.entry_period),
    exit_period: int = typer.Option(settings.exit_period),
    confirmation_period: int = typer.Option(settings.confirmation_period),
    atr_period: int = typer.Option(settings.atr_period),
    threshold: float = typer.Option(settings.true_breakout_threshold, help="True breakout threshold (x N)"),
    volume_filter: bool = typer.Option(settings.use_volume_filter, help="Require volume above 20-bar average"),
    prior_bar_channel: bool = typer.Option(settings.prior_bar_channel, help="Compare the last close with channels ending one bar earlier"),
    equity: float = typer.Option(settings.account_equity, help="Account equity"),
    risk_pct: float = typer.Option(settings.risk_percent, help="Risk per N move (%)"),
    tp_multiple: Optional[float] = typer.Option(None, help="Take profit at entry +/- multiple x N"),
    no_tp: bool = typer.Option(False, "--no-tp", help="Do not compute a take profit"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
):
    """Evaluate a Turtle entry on the last closed bar at the current price."""
    iv = _check_interval(interval)
    try:
        params = settings.turtle_params(
            entry_period=entry_period, exit_period=exit_period,
            confirmation_period=confirmation_period, atr_period=atr_period,
            true_breakout_threshold=threshold, use_volume_filter=volume_filter,
            prior_bar_channel=prior_bar_channel,
            account_equity=equity, risk_percent=risk_pct, take_profit_multiple=tp_multiple,
        )
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e
    if no_tp:
        params = params.model_copy(update={"take_profit_multiple": None})
    candles, mid, size_decimals = asyncio.run(_load(provider, symbol, iv, limit, with_quote=True))
    entry_price = price if price is not None else mid
    advice = advise(candles, entry_price, params, size_decimals=size_decimals)

    if json_out:
        # plain echo: rich would treat the JSON brackets as markup
        typer.echo(json.dumps(advice_to_dict(symbol, interval, entry_price, advice), ensure_ascii=False, indent=2))
    else:
        dec = size_decimals if size_decimals is not None else params.size_precision_digits
        _print_advice(symbol, interval, entry_price, advice, dec)


@cli.command()
def channel(
    symbol: str = typer.Option(settings.default_symbol, help="Ex: BTC"),
    interval: str = typer.Option(settings.default_interval, help="1m | 5m | 15m | 1h | 4h | 1d"),
    provider: str = typer.Option("hyperliquid", help="hyperliquid | mock"),
    limit: int = typer.Option(settings.fetch_bars, help="Closed bars to fetch"),
    period: int = typer.Option(settings.entry_period, help="Donchian period"),
    atr_period: int = typer.Option(settings.atr_period),
    rows: int = typer.Option(10, help="Rows to show (newest last)"),
):
    """Print the rolling Donchian channel and ATR for the most recent bars."""
    iv = _check_interval(interval)
    params = TurtleParams(entry_period=period, atr_period=atr_period)
    candles, _, _ = asyncio.run(_load(provider, symbol, iv, limit, with_quote=False))
    _, h, l, c = to_arrays(candles)
    upper, lower, middle = donchian_channel(h, l, params.entry_period)
    a = atr(h, l, c, params.atr_period)

    table = Table(title=f"Donchian({params.entry_period}) / ATR({params.atr_period}): {symbol} {interval}")
    for col in ("Bar", "Close", "Upper", "Lower", "Middle", "ATR"):
        table.add_column(col)
    start = max(0, len(candles) - rows)
    for i in range(start, len(candles)):
        table.add_row(str(i), _fmt(float(c[i])), _fmt(_at(upper, i)), _fmt(_at(lower, i)),
                      _fmt(_at(middle, i)), _fmt(_at(a, i)))
    print(table)


if __name__ == "__main__":
    cli()
