from __future__ import annotations
import logging
from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "INFO") -> None:
    """Route all package loggers through rich. Safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False))
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
