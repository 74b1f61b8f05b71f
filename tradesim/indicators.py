"""Indicator computation utilities.

Every helper takes an explicit end index (or a prefix) so values at bar i
are built from bars <= i only.
"""

from __future__ import annotations

import numpy as np
import pandas as pd


def sma_at(closes: np.ndarray, i: int, window: int) -> float:
    """Simple moving average of closes[i-window+1 .. i]."""
    if window <= 0:
        raise ValueError("window must be positive")
    if i < window - 1 or i >= len(closes):
        return float("nan")
    return float(np.mean(closes[i - window + 1 : i + 1]))


def ema(series: pd.Series, span: int) -> pd.Series:
    """Exponential moving average with a stable definition.

    Uses pandas ewm with adjust=False (recursive form), which is causal.
    """
    if span <= 0:
        raise ValueError("span must be positive")
    return series.ewm(span=span, adjust=False, min_periods=1).mean()


def macd(close: pd.Series, fast: int, slow: int, signal: int) -> tuple[pd.Series, pd.Series, pd.Series]:
    """MACD line, signal line, and histogram."""
    close = close.astype(float)
    macd_line = ema(close, fast) - ema(close, slow)
    signal_line = ema(macd_line, signal)
    hist = macd_line - signal_line
    return macd_line, signal_line, hist
