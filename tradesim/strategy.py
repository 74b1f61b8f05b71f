"""Signal generators.

A strategy is anything with ``signal(history, i) -> int``:
+1 enter long, -1 exit long, 0 hold. Only bars at index <= i may be read.
"""

from __future__ import annotations

from typing import Callable, Protocol

import pandas as pd

from .config import StrategyConfig
from .data_manager import BarSeries
from .indicators import macd, sma_at

ENTER_LONG = 1
EXIT_LONG = -1
HOLD = 0


class Strategy(Protocol):
    def signal(self, history: BarSeries, i: int) -> int:
        ...


class SmaCrossStrategy:
    """Dual moving average crossover on closes."""

    def __init__(self, fast: int = 50, slow: int = 200):
        if fast <= 0 or slow <= 0:
            raise ValueError("windows must be positive")
        if fast >= slow:
            raise ValueError(f"fast window ({fast}) must be smaller than slow window ({slow})")
        self.fast = int(fast)
        self.slow = int(slow)

    def __repr__(self) -> str:
        return f"SmaCrossStrategy(fast={self.fast}, slow={self.slow})"

    @property
    def label(self) -> str:
        return f"SMA {self.fast}/{self.slow}"

    def signal(self, history: BarSeries, i: int) -> int:
        if i < self.slow:
            return HOLD
        closes = history.closes
        f = sma_at(closes, i, self.fast)
        s = sma_at(closes, i, self.slow)
        pf = sma_at(closes, i - 1, self.fast)
        ps = sma_at(closes, i - 1, self.slow)
        if f > s and pf <= ps:
            return ENTER_LONG
        if f < s and pf >= ps:
            return EXIT_LONG
        return HOLD


class MacdCrossStrategy:
    """MACD line crossing its signal line.

    Recomputes the EMAs on closes[0..i] every call, so cost grows with i.
    """

    def __init__(self, fast: int = 12, slow: int = 26, signal: int = 9):
        if fast <= 0 or slow <= 0 or signal <= 0:
            raise ValueError("spans must be positive")
        if fast >= slow:
            raise ValueError(f"fast span ({fast}) must be smaller than slow span ({slow})")
        self.fast = int(fast)
        self.slow = int(slow)
        self.signal_span = int(signal)

    def __repr__(self) -> str:
        return f"MacdCrossStrategy(fast={self.fast}, slow={self.slow}, signal={self.signal_span})"

    @property
    def label(self) -> str:
        return f"MACD {self.fast}/{self.slow}/{self.signal_span}"

    def signal(self, history: BarSeries, i: int) -> int:
        if i < self.slow + self.signal_span:
            return HOLD
        prefix = pd.Series(history.closes[: i + 1])
        line, sig, _ = macd(prefix, self.fast, self.slow, self.signal_span)
        d_now = float(line.iloc[-1] - sig.iloc[-1])
        d_prev = float(line.iloc[-2] - sig.iloc[-2])
        if d_now > 0 and d_prev <= 0:
            return ENTER_LONG
        if d_now < 0 and d_prev >= 0:
            return EXIT_LONG
        return HOLD


_REGISTRY: dict[str, Callable[[StrategyConfig], Strategy]] = {
    "sma": lambda cfg: SmaCrossStrategy(cfg.fast_window, cfg.slow_window),
    "macd": lambda cfg: MacdCrossStrategy(cfg.macd_fast, cfg.macd_slow, cfg.macd_signal),
}


def available_strategies() -> list[str]:
    return sorted(_REGISTRY)


def build_strategy(cfg: StrategyConfig) -> Strategy:
    """Instantiate the strategy named by ``cfg.name``."""
    try:
        factory = _REGISTRY[cfg.name.lower()]
    except KeyError:
        raise ValueError(f"Unknown strategy {cfg.name!r}; choose from {available_strategies()}") from None
    return factory(cfg)
