"""Command-line entry point: run a backtest on a CSV and print the report."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

from .backtest import run_backtest
from .config import BacktestConfig, CostConfig, StrategyConfig, load_params_json
from .data_manager import BarSeries
from .data_provider import CsvProvider
from .logging_setup import setup_logging
from .report import format_report
from .strategy import available_strategies, build_strategy

logger = logging.getLogger(__name__)

USAGE = "Usage: tradesim <path_to_csv>\nCSV: Date,Open,High,Low,Close,Volume"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tradesim", description="Backtest a long-only strategy on daily OHLCV bars.")
    p.add_argument("csv", nargs="?", default=None, help="OHLCV CSV path (Date,Open,High,Low,Close,Volume).")
    p.add_argument("--strategy", type=str, default=None, choices=available_strategies(), help="Signal generator. Default sma.")
    p.add_argument("--fast", type=int, default=None, help="SMA fast window. Default 50.")
    p.add_argument("--slow", type=int, default=None, help="SMA slow window. Default 200.")
    p.add_argument("--capital", type=float, default=None, help="Starting cash. Default 100000.")
    p.add_argument("--commission", type=float, default=None, help="Flat commission per trade. Default 0.50.")
    p.add_argument("--slippage-bps", type=float, default=None, help="Slippage in basis points. Default 5.")
    p.add_argument("--risk-fraction", type=float, default=None, help="Fraction of equity per entry. Default 1.0.")
    p.add_argument("--params", type=str, default=None, help="JSON file with strategy/cost/backtest sections.")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity (stderr).")
    p.add_argument("--log-dir", type=str, default=None, help="Also write a rotating log file here.")
    return p


def _overrides(**kwargs) -> dict:
    return {k: v for k, v in kwargs.items() if v is not None}


def _resolve_configs(args: argparse.Namespace) -> tuple[StrategyConfig, CostConfig, BacktestConfig]:
    strat_cfg, cost_cfg, bt_cfg = StrategyConfig(), CostConfig(), BacktestConfig()
    if args.params:
        strat_cfg, cost_cfg, bt_cfg = load_params_json(args.params)

    strat_cfg = replace(strat_cfg, **_overrides(name=args.strategy, fast_window=args.fast, slow_window=args.slow))
    cost_cfg = replace(cost_cfg, **_overrides(commission=args.commission, slippage_bps=args.slippage_bps))
    bt_cfg = replace(bt_cfg, **_overrides(initial_capital=args.capital, risk_fraction=args.risk_fraction))
    return strat_cfg, cost_cfg, bt_cfg


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)
    setup_logging(args.log_level, logs_dir=args.log_dir)

    if args.csv is None:
        print(USAGE)
        return 0

    try:
        strat_cfg, cost_cfg, bt_cfg = _resolve_configs(args)
        strategy = build_strategy(strat_cfg)
    except (OSError, ValueError) as e:
        p.error(str(e))

    try:
        frame = CsvProvider().fetch(args.csv)
    except (OSError, ValueError) as e:
        logger.error("Could not load %s: %s", args.csv, e)
        return 1

    bars = BarSeries(frame)
    if len(bars) < strat_cfg.warmup_bars:
        print(f"Loaded {len(bars)} bars. ({strat_cfg.warmup_bars}+ better for {strategy.label}).")

    result = run_backtest(bars, strategy, cost_cfg, bt_cfg)
    print(format_report(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
