# tests/conftest.py
from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

import pytest

from tradesim.data_manager import BarSeries
from tradesim.logging_setup import teardown_logging
from tradesim.types import Bar


class ScriptedStrategy:
    """Emits fixed signals at given indices and records every index it was asked about."""

    label = "scripted"

    def __init__(self, signals: dict[int, int]):
        self.signals = dict(signals)
        self.calls: list[int] = []

    def signal(self, history, i):
        self.calls.append(i)
        return self.signals.get(i, 0)


def build_bars(closes, opens=None, start=date(2020, 1, 1)) -> BarSeries:
    opens = list(closes) if opens is None else list(opens)
    bars = [
        Bar(
            date=start + timedelta(days=i),
            open=float(o),
            high=float(max(o, c)),
            low=float(min(o, c)),
            close=float(c),
            volume=1_000,
        )
        for i, (o, c) in enumerate(zip(opens, closes))
    ]
    return BarSeries.from_bars(bars, symbol="TEST")


def rise_then_fall(n: int = 250) -> list[float]:
    """Short decline, long rise, long fall: one up-cross and one down-cross for 10/30 SMAs."""
    closes = []
    px = 100.0
    for i in range(n):
        if i < 60:
            px -= 0.2
        elif i < 160:
            px += 0.5
        else:
            px -= 0.5
        closes.append(px)
    return closes


@pytest.fixture
def make_bars():
    return build_bars


@pytest.fixture
def scripted():
    return ScriptedStrategy


@pytest.fixture
def write_csv(tmp_path):
    def _write(text: str, name: str = "bars.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _reset_root_logging():
    yield
    teardown_logging()


@pytest.fixture
def rise_fall_closes():
    return rise_then_fall()
