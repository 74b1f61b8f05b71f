"""Performance metrics.

All functions take the finished equity curve as a float Series indexed by
date. Degenerate inputs (too few points, zero denominators) yield 0.0.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

DAYS_PER_YEAR = 365.25
TRADING_DAYS_PER_YEAR = 252


@dataclass(frozen=True)
class PerformanceSummary:
    final_equity: float
    total_return: float
    cagr: float
    sharpe: float
    max_drawdown: float


def total_return(equity: pd.Series) -> float:
    """Last over first, minus one."""
    if len(equity) == 0:
        return 0.0
    return float(equity.iloc[-1] / equity.iloc[0] - 1.0)


def cagr(equity: pd.Series) -> float:
    """CAGR from first to last point using calendar days (365.25 per year)."""
    if len(equity) < 2:
        return 0.0
    start = pd.Timestamp(equity.index[0])
    end = pd.Timestamp(equity.index[-1])
    # whole days for date-indexed curves; fractional if timestamps carry a time
    days = (end - start) / pd.Timedelta(days=1)
    if days <= 0:
        return 0.0
    total = float(equity.iloc[-1] / equity.iloc[0])
    return total ** (DAYS_PER_YEAR / days) - 1.0


def daily_returns(equity: pd.Series) -> np.ndarray:
    x = equity.astype(float).to_numpy()
    if len(x) < 2:
        return np.empty(0)
    return np.diff(x) / x[:-1]


def sharpe(equity: pd.Series) -> float:
    """Annualized Sharpe of bar-to-bar returns (zero risk-free rate, N-1 std)."""
    if len(equity) < 2:
        return 0.0
    r = daily_returns(equity)
    # identical returns have zero variance however the mean rounds
    if np.ptp(r) == 0.0:
        return 0.0
    sd = float(np.std(r, ddof=1 if len(r) > 1 else 0))
    if sd == 0.0 or not np.isfinite(sd):
        return 0.0
    return float(np.mean(r) / sd * np.sqrt(TRADING_DAYS_PER_YEAR))


def max_drawdown(equity: pd.Series) -> float:
    """Maximum drawdown (as positive fraction of the running peak)."""
    x = equity.astype(float).to_numpy()
    if len(x) == 0:
        return 0.0
    peak = np.maximum.accumulate(x)
    with np.errstate(divide="ignore", invalid="ignore"):
        dd = np.where(peak > 0, (peak - x) / peak, 0.0)
    return float(max(0.0, np.nanmax(dd)))


def compute_metrics(equity: pd.Series) -> PerformanceSummary:
    final = float(equity.iloc[-1]) if len(equity) else 0.0
    return PerformanceSummary(
        final_equity=final,
        total_return=total_return(equity),
        cagr=cagr(equity),
        sharpe=sharpe(equity),
        max_drawdown=max_drawdown(equity),
    )
