from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Sequence
from ..types import Candle, Evaluation


class Strategy(ABC):
    name: str

    @abstractmethod
    def generate(self, candles: Sequence[Candle]) -> Evaluation | None:
        """
        Takes closed candles (newest last) and returns the decision for the last bar,
        or None when the window is too short. Implementations must be pure.
        """
