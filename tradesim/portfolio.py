"""Long-only cash/shares portfolio with fill accounting."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Tuple

import pandas as pd

from .config import CostConfig
from .cost_model import CostModel
from .types import BUY, SELL, Bar, TradeRecord

logger = logging.getLogger(__name__)


class Portfolio:
    """Cash, whole shares and the average entry price of the open position.

    Owned by a single Backtester for the duration of a run. Trade log and
    equity curve are append-only.
    """

    def __init__(self, initial_capital: float, cost_cfg: CostConfig = CostConfig()):
        self.cost_model = CostModel(cost_cfg)

        self.cash = float(initial_capital)
        self.shares = 0
        self.avg_entry_price: Optional[float] = None  # defined iff shares > 0

        self.trade_log: List[TradeRecord] = []
        self.equity_curve: List[Tuple[date, float]] = []

    @property
    def is_flat(self) -> bool:
        return self.shares == 0

    def equity(self, price: float) -> float:
        """Mark-to-market value at a given price."""
        return float(self.cash + self.shares * float(price))

    def mark(self, ts: date, price: float) -> None:
        self.equity_curve.append((ts, self.equity(price)))

    def equity_series(self) -> pd.Series:
        """Equity curve as a Series indexed by date (the terminal mark may repeat a date)."""
        if not self.equity_curve:
            return pd.Series([], index=pd.DatetimeIndex([], name="Date"), name="Equity", dtype=float)
        dates, values = zip(*self.equity_curve)
        return pd.Series(
            list(values),
            index=pd.DatetimeIndex(pd.to_datetime(list(dates)), name="Date"),
            name="Equity",
            dtype=float,
        )

    # ---------- orders ----------

    def buy(self, fill_bar: Bar, shares: int, reason: str = "") -> Optional[TradeRecord]:
        """Buy at the bar's open plus slippage. All-or-nothing."""
        shares = int(shares)
        if shares <= 0:
            return None

        fill = self.cost_model.fill_price(BUY, fill_bar.open)
        commission = self.cost_model.commission
        cost = shares * fill + commission
        if cost > self.cash:
            logger.debug(
                "%s BUY %d rejected: cost %.4f exceeds cash %.4f", fill_bar.date, shares, cost, self.cash
            )
            return None

        prev_value = self.shares * (self.avg_entry_price or 0.0)
        self.shares += shares
        self.avg_entry_price = (prev_value + shares * fill) / self.shares
        self.cash -= cost

        return self._record(fill_bar.date, BUY, shares, fill, commission, reason)

    def sell(self, fill_bar: Bar, shares: int, reason: str = "") -> Optional[TradeRecord]:
        """Sell at the bar's open minus slippage, clamped to holdings."""
        return self.sell_at(fill_bar.date, fill_bar.open, shares, reason=reason)

    def sell_at(self, ts: date, price: float, shares: int, reason: str = "") -> Optional[TradeRecord]:
        """Sell against an explicit reference price (slippage and commission still apply)."""
        shares = int(shares)
        if shares <= 0 or self.shares <= 0:
            return None
        shares = min(shares, self.shares)

        fill = self.cost_model.fill_price(SELL, price)
        commission = self.cost_model.commission
        self.shares -= shares
        self.cash += shares * fill - commission
        if self.shares == 0:
            self.avg_entry_price = None

        return self._record(ts, SELL, shares, fill, commission, reason)

    def _record(
        self, ts: date, side: str, shares: int, fill: float, commission: float, reason: str
    ) -> TradeRecord:
        rec = TradeRecord(
            date=ts,
            side=side,
            shares=int(shares),
            fill_price=float(fill),
            commission=float(commission),
            cash_after=float(self.cash),
            reason=reason,
        )
        self.trade_log.append(rec)
        logger.info("%s %-4s %d @ %.4f (%s)", ts, side, shares, fill, reason or "-")
        return rec
