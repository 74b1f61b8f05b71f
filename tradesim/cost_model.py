"""Commission and slippage model."""

from __future__ import annotations

from .config import CostConfig
from .types import BUY, SELL


class CostModel:
    """Costs:
    - commission: flat fee charged once per fill, whatever the size
    - slippage: basis-point penalty against the trade direction
      (BUY fills higher, SELL fills lower)
    """

    def __init__(self, cfg: CostConfig):
        self.cfg = cfg

    @property
    def commission(self) -> float:
        return float(self.cfg.commission)

    @property
    def slippage_rate(self) -> float:
        return float(self.cfg.slippage_bps) / 10000.0

    def fill_price(self, side: str, reference_price: float) -> float:
        """Effective execution price for a side given the quoted price."""
        side_u = side.upper()
        if side_u == BUY:
            return float(reference_price) * (1.0 + self.slippage_rate)
        if side_u == SELL:
            return float(reference_price) * (1.0 - self.slippage_rate)
        raise ValueError(f"Unknown side: {side!r}")
