"""Configuration objects.

Style rules:
- keep signatures stable (no alias chaos)
- prefer explicit field names
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path


def _pick(cls, d: dict, mapping: dict) -> dict:
    """Map PascalCase or snake_case keys onto dataclass fields; drop the rest."""
    fields = set(cls.__dataclass_fields__)
    kwargs = {}
    for k, v in (d or {}).items():
        if k in mapping:
            kwargs[mapping[k]] = v
        elif k in fields:
            kwargs[k] = v
    return kwargs


@dataclass(frozen=True)
class StrategyConfig:
    """Signal generator parameters."""

    # 'sma' (dual moving average crossover) or 'macd'
    name: str = "sma"

    fast_window: int = 50
    slow_window: int = 200

    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9

    @property
    def warmup_bars(self) -> int:
        """Bars needed before the strategy can emit its first signal."""
        if self.name == "macd":
            return int(self.macd_slow + self.macd_signal)
        return int(self.slow_window)

    @classmethod
    def from_params_dict(cls, d: dict) -> "StrategyConfig":
        """Create StrategyConfig from a params dict.

        Keys may be PascalCase (e.g., FastWindow) or field names. Unknown keys are ignored.
        """
        mapping = {
            "Strategy": "name",
            "FastWindow": "fast_window",
            "SlowWindow": "slow_window",
            "MACDFast": "macd_fast",
            "MACDSlow": "macd_slow",
            "MACDSignal": "macd_signal",
        }
        kwargs = _pick(cls, d, mapping)
        if isinstance(kwargs.get("name"), str):
            kwargs["name"] = kwargs["name"].lower()
        return cls(**kwargs)


@dataclass(frozen=True)
class CostConfig:
    """Execution frictions."""

    # Flat fee per trade (not per share).
    commission: float = 0.50

    # Adverse price adjustment in basis points, applied against the trade direction.
    slippage_bps: float = 5.0

    def __post_init__(self):
        if self.commission < 0:
            raise ValueError("commission must be non-negative")
        if self.slippage_bps < 0:
            raise ValueError("slippage_bps must be non-negative")

    @classmethod
    def from_params_dict(cls, d: dict) -> "CostConfig":
        mapping = {
            "Commission": "commission",
            "SlippageBps": "slippage_bps",
        }
        return cls(**_pick(cls, d, mapping))


@dataclass(frozen=True)
class BacktestConfig:
    """Backtest run configuration."""

    initial_capital: float = 100_000.0

    # Fraction of mark-to-market equity committed on each entry.
    risk_fraction: float = 1.0

    def __post_init__(self):
        if self.initial_capital < 0:
            raise ValueError("initial_capital must be non-negative")
        if not (0.0 < self.risk_fraction <= 1.0):
            raise ValueError("risk_fraction must be in (0, 1]")

    @classmethod
    def from_params_dict(cls, d: dict) -> "BacktestConfig":
        mapping = {
            "InitialCapital": "initial_capital",
            "RiskFraction": "risk_fraction",
        }
        return cls(**_pick(cls, d, mapping))


def load_params_json(path: str | Path) -> tuple[StrategyConfig, CostConfig, BacktestConfig]:
    """Read a JSON params file with optional 'strategy', 'cost' and 'backtest' sections."""
    d = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(d, dict):
        raise ValueError(f"Params file must contain a JSON object: {path}")
    return (
        StrategyConfig.from_params_dict(d.get("strategy") or {}),
        CostConfig.from_params_dict(d.get("cost") or {}),
        BacktestConfig.from_params_dict(d.get("backtest") or {}),
    )
