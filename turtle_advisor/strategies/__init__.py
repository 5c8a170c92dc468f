# turtle_advisor/strategies/__init__.py
from .base import Strategy
from .turtle import TurtleStrategy, evaluate
from ..config import TurtleParams


def default_strategies(params: TurtleParams | None = None) -> list[Strategy]:
    return [TurtleStrategy(params)]
