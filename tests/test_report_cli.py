import json
from datetime import date, timedelta

import pytest

from tradesim.backtest import run_backtest, run_from_csv
from tradesim.cli import main
from tradesim.config import BacktestConfig, CostConfig, StrategyConfig
from tradesim.report import format_report, format_trade
from tradesim.strategy import SmaCrossStrategy
from tradesim.types import TradeRecord


def _csv_text(closes, header=True, start=date(2019, 1, 1)):
    lines = ["Date,Open,High,Low,Close,Volume"] if header else []
    for i, c in enumerate(closes):
        d = start + timedelta(days=i)
        lines.append(f"{d.isoformat()},{c:.4f},{c + 1:.4f},{c - 1:.4f},{c:.4f},1000")
    return "\n".join(lines) + "\n"


class TestReport:
    def test_trade_line(self):
        t = TradeRecord(date=date(2020, 1, 2), side="BUY", shares=10, fill_price=100.05)
        assert format_trade(t) == "2020-01-02 BUY  10 @ 100.0500"
        t = TradeRecord(date=date(2020, 2, 3), side="SELL", shares=10, fill_price=99.951234)
        assert format_trade(t) == "2020-02-03 SELL 10 @ 99.9512"

    def test_report_sections(self, make_bars, rise_fall_closes):
        result = run_backtest(make_bars(rise_fall_closes), SmaCrossStrategy(10, 30))
        text = format_report(result).splitlines()
        assert text[0] == "=== Results (SMA 10/30, long-only) ==="
        assert text[1] == "Bars: 250"
        assert text[2] == "Trades: 2"
        assert text[3].startswith("Final Equity: $")
        assert text[4].startswith("Total Return: ") and text[4].endswith("%")
        assert text[5].startswith("CAGR: ")
        assert text[6].startswith("Sharpe (ann.): ")
        assert text[7].startswith("Max Drawdown: ")
        assert text[9] == "Trade Log:"
        assert len(text) == 12
        assert " BUY  " in text[10] and " SELL " in text[11]


class TestRunFromCsv:
    def test_header_plus_bad_row(self, write_csv, rise_fall_closes):
        text = _csv_text(rise_fall_closes) + "13/45/2020,1,1,1,1,1\n"
        result = run_from_csv(
            write_csv(text),
            StrategyConfig(fast_window=10, slow_window=30),
            CostConfig(),
            BacktestConfig(),
        )
        assert result.bar_count == 250
        assert len(result.trades) == 2


class TestCli:
    def test_no_argument_prints_usage(self, capsys):
        assert main([]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Usage: tradesim <path_to_csv>")

    def test_missing_file_fails(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.csv")]) == 1
        assert "Could not load" in capsys.readouterr().err

    def test_empty_file_fails(self, write_csv):
        assert main([str(write_csv(""))]) == 1

    def test_short_history_notice(self, write_csv, capsys):
        path = write_csv(_csv_text([100.0 + i for i in range(20)]))
        assert main([str(path)]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "Loaded 20 bars. (200+ better for SMA 50/200)."
        assert "Bars: 20" in out
        assert "Trades: 0" in out
        assert "Final Equity: $100000.0000" in out

    def test_short_history_notice_names_active_strategy(self, write_csv, capsys):
        path = write_csv(_csv_text([100.0 + i for i in range(20)]))
        assert main([str(path), "--strategy", "macd"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "Loaded 20 bars. (35+ better for MACD 12/26/9)."

    def test_options_and_params_file(self, write_csv, tmp_path, capsys, rise_fall_closes):
        params = tmp_path / "params.json"
        params.write_text(json.dumps({"strategy": {"FastWindow": 10, "SlowWindow": 30}}), encoding="utf-8")
        path = write_csv(_csv_text(rise_fall_closes))

        assert main([str(path), "--params", str(params), "--commission", "0", "--slippage-bps", "0"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "=== Results (SMA 10/30, long-only) ==="
        assert "Trades: 2" in out

    def test_bad_windows_exit_with_usage_error(self, write_csv):
        path = write_csv(_csv_text([1.0] * 5))
        with pytest.raises(SystemExit) as exc:
            main([str(path), "--fast", "30", "--slow", "10"])
        assert exc.value.code == 2
