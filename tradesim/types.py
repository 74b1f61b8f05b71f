"""Shared types for the simulator.

The guiding principle is to keep the runtime objects small and explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


BUY = "BUY"
SELL = "SELL"


@dataclass(frozen=True)
class Bar:
    """Daily OHLCV bar."""

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass(frozen=True)
class TradeRecord:
    """A single executed fill (entry / exit / forced exit)."""

    date: date
    side: str  # 'BUY'/'SELL'
    shares: int
    fill_price: float

    # Accounting fields. Defaults keep the four-field form usable in tests.
    commission: float = 0.0
    cash_after: float = 0.0
    reason: str = ""
