"""Console report formatting."""

from __future__ import annotations

from .backtest import BacktestResult
from .types import TradeRecord


def r(x: float) -> str:
    """Four-decimal rendering used everywhere in the report."""
    return f"{x:.4f}"


def format_trade(t: TradeRecord) -> str:
    return f"{t.date.isoformat()} {t.side:<4} {t.shares} @ {r(t.fill_price)}"


def format_report(result: BacktestResult) -> str:
    m = result.metrics
    label = getattr(result.strategy, "label", repr(result.strategy))
    lines = [
        f"=== Results ({label}, long-only) ===",
        f"Bars: {result.bar_count}",
        f"Trades: {len(result.trades)}",
        f"Final Equity: ${r(m.final_equity)}",
        f"Total Return: {r(m.total_return * 100)}%",
        f"CAGR: {r(m.cagr * 100)}%",
        f"Sharpe (ann.): {r(m.sharpe)}",
        f"Max Drawdown: {r(m.max_drawdown * 100)}%",
        "",
        "Trade Log:",
    ]
    lines.extend(format_trade(t) for t in result.trades)
    return "\n".join(lines)
