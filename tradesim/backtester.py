"""Single-symbol backtest driver.

Bar loop:
- marks equity at Close(i) before anything else
- asks the strategy for a signal using bars <= i
- executes the resulting order at Open(i+1)
- liquidates any open position at the last Close once the data runs out
"""

from __future__ import annotations

import logging
import math

from .data_manager import BarSeries
from .portfolio import Portfolio
from .strategy import Strategy
from .types import BUY

logger = logging.getLogger(__name__)


class Backtester:
    """Drives one strategy over one bar series against one portfolio."""

    def __init__(self, bars: BarSeries, strategy: Strategy, portfolio: Portfolio, risk_fraction: float = 1.0):
        if not (0.0 < risk_fraction <= 1.0):
            raise ValueError("risk_fraction must be in (0, 1]")
        self.bars = bars
        self.strategy = strategy
        self.portfolio = portfolio
        self.risk_fraction = float(risk_fraction)

    # ---------- public API ----------

    def run_full_backtest(self) -> None:
        """Run the whole series, then force-close what is still open."""
        n = len(self.bars)
        for i in range(n):
            if not self.step(i):
                break
        self._liquidate_at_end()

    def step(self, i: int) -> bool:
        """Process bar i. Returns False when the loop must stop."""
        bar = self.bars[i]
        pf = self.portfolio

        pf.mark(bar.date, bar.close)

        sig = self.strategy.signal(self.bars, i)
        if sig == 0:
            return True
        if i + 1 >= len(self.bars):
            # no future bar to fill against
            return False

        nxt = self.bars[i + 1]
        if sig > 0 and pf.is_flat:
            shares = self.order_size(pf.equity(bar.close), nxt.open)
            pf.buy(nxt, shares, reason="SignalEntry")
        elif sig < 0 and not pf.is_flat:
            pf.sell(nxt, pf.shares, reason="SignalExit")
        return True

    def order_size(self, equity: float, next_open: float) -> int:
        """Whole shares affordable with risk_fraction of equity at the next open's buy fill."""
        fill = self.portfolio.cost_model.fill_price(BUY, next_open)
        if not (fill > 0 and math.isfinite(fill)):
            return 0
        return int(math.floor(equity * self.risk_fraction / fill))

    # ---------- internal helpers ----------

    def _liquidate_at_end(self) -> None:
        pf = self.portfolio
        if pf.is_flat or len(self.bars) == 0:
            return
        last = self.bars[len(self.bars) - 1]
        logger.info("Position still open after last bar; liquidating %d shares at close", pf.shares)
        pf.sell_at(last.date, last.close, pf.shares, reason="ForcedExit")
        pf.mark(last.date, last.close)
