"""Backtest runner utilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

import pandas as pd

from .backtester import Backtester
from .config import BacktestConfig, CostConfig, StrategyConfig
from .data_manager import BarSeries
from .data_provider import CsvProvider
from .metrics import PerformanceSummary, compute_metrics
from .portfolio import Portfolio
from .strategy import Strategy, build_strategy
from .types import TradeRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BacktestResult:
    """Everything a finished run produced."""

    symbol: str
    strategy: Strategy
    bar_count: int
    trades: List[TradeRecord]
    equity: pd.Series
    metrics: PerformanceSummary
    final_cash: float
    final_shares: int


def run_from_csv(
    csv_path: str | Path,
    strat_cfg: StrategyConfig = StrategyConfig(),
    cost_cfg: CostConfig = CostConfig(),
    bt_cfg: BacktestConfig = BacktestConfig(),
) -> BacktestResult:
    frame = CsvProvider().fetch(csv_path=csv_path)
    return run_backtest(BarSeries(frame), build_strategy(strat_cfg), cost_cfg, bt_cfg)


def run_backtest(
    bars: BarSeries,
    strategy: Strategy,
    cost_cfg: CostConfig = CostConfig(),
    bt_cfg: BacktestConfig = BacktestConfig(),
) -> BacktestResult:
    """Run one strategy over a bar series with a fresh portfolio."""
    pf = Portfolio(initial_capital=bt_cfg.initial_capital, cost_cfg=cost_cfg)
    bt = Backtester(bars=bars, strategy=strategy, portfolio=pf, risk_fraction=bt_cfg.risk_fraction)
    bt.run_full_backtest()

    equity = pf.equity_series()
    metrics = compute_metrics(equity)
    logger.info(
        "%s on %s: %d bars, %d trades, final equity %.2f",
        strategy,
        bars.symbol or "<series>",
        len(bars),
        len(pf.trade_log),
        metrics.final_equity,
    )
    return BacktestResult(
        symbol=bars.symbol,
        strategy=strategy,
        bar_count=len(bars),
        trades=list(pf.trade_log),
        equity=equity,
        metrics=metrics,
        final_cash=float(pf.cash),
        final_shares=int(pf.shares),
    )
