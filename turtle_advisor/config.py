from __future__ import annotations
import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()


class TurtleParams(BaseModel):
    """Caller-owned parameters for one evaluation; validated here, never inside the core."""
    model_config = {"frozen": True}

    entry_period: int = Field(20, ge=1)
    exit_period: int = Field(10, ge=1)
    confirmation_period: int = Field(55, ge=1)
    atr_period: int = Field(20, ge=1)
    true_breakout_threshold: float = Field(0.25, ge=0)
    use_volume_filter: bool = False
    # measure the last bar against channels that end one bar earlier
    prior_bar_channel: bool = False
    account_equity: float = Field(10_000.0, gt=0)
    risk_percent: float = Field(1.0, ge=0, le=100)
    size_precision_digits: int = Field(4, ge=0)
    # None or <= 0: no target
    take_profit_multiple: float | None = 4.0

    @property
    def min_bars(self) -> int:
        # confirmation window plus ATR warm-up
        return self.confirmation_period + self.atr_period


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_optional_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None:
        return default
    if raw.strip().lower() in ("", "none", "off"):
        return None
    return float(raw)


class Settings(BaseModel):
    hyperliquid_info_url: str = os.getenv("HYPERLIQUID_INFO_URL", "https://api.hyperliquid.xyz/info")
    default_symbol: str = os.getenv("DEFAULT_SYMBOL", "BTC")
    default_interval: str = os.getenv("DEFAULT_INTERVAL", "1h")
    fetch_bars: int = int(os.getenv("FETCH_BARS", "120"))
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "15.0"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    entry_period: int = int(os.getenv("TURTLE_ENTRY_PERIOD", "20"))
    exit_period: int = int(os.getenv("TURTLE_EXIT_PERIOD", "10"))
    confirmation_period: int = int(os.getenv("TURTLE_CONFIRMATION_PERIOD", "55"))
    atr_period: int = int(os.getenv("TURTLE_ATR_PERIOD", "20"))
    true_breakout_threshold: float = float(os.getenv("TURTLE_TRUE_BREAKOUT_THRESHOLD", "0.25"))
    use_volume_filter: bool = _env_bool("TURTLE_USE_VOLUME_FILTER", False)
    prior_bar_channel: bool = _env_bool("TURTLE_PRIOR_BAR_CHANNEL", False)
    account_equity: float = float(os.getenv("TURTLE_ACCOUNT_EQUITY", "10000"))
    risk_percent: float = float(os.getenv("TURTLE_RISK_PERCENT", "1.0"))
    size_precision_digits: int = int(os.getenv("TURTLE_SIZE_PRECISION_DIGITS", "4"))
    take_profit_multiple: float | None = _env_optional_float("TURTLE_TAKE_PROFIT_MULTIPLE", 4.0)

    def turtle_params(self, **overrides) -> TurtleParams:
        values = {name: getattr(self, name) for name in TurtleParams.model_fields}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return TurtleParams(**values)


settings = Settings()
