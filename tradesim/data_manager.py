"""Bar series: an ordered, read-only view over one symbol's OHLCV history."""

from __future__ import annotations

from datetime import date
from typing import Iterator, Sequence

import numpy as np
import pandas as pd

from .data_provider import OHLCV_COLUMNS, OhlcvFrame
from .types import Bar


class BarSeries:
    """Holds OHLCV for a single symbol and hands out immutable `Bar`s.

    Strategies receive the whole series plus an index and must only read
    positions <= that index.
    """

    def __init__(self, frame: OhlcvFrame):
        self.symbol = frame.symbol
        df = frame.df[OHLCV_COLUMNS]

        self._dates: list[date] = [ts.date() for ts in pd.DatetimeIndex(df.index)]
        self._open = df["Open"].to_numpy(dtype=float, copy=True)
        self._high = df["High"].to_numpy(dtype=float, copy=True)
        self._low = df["Low"].to_numpy(dtype=float, copy=True)
        self._close = df["Close"].to_numpy(dtype=float, copy=True)
        self._volume = df["Volume"].to_numpy(dtype=np.int64, copy=True)
        for arr in (self._open, self._high, self._low, self._close, self._volume):
            arr.setflags(write=False)

    @classmethod
    def from_bars(cls, bars: Sequence[Bar], symbol: str = "") -> "BarSeries":
        df = pd.DataFrame(
            {
                "Open": [b.open for b in bars],
                "High": [b.high for b in bars],
                "Low": [b.low for b in bars],
                "Close": [b.close for b in bars],
                "Volume": [int(b.volume) for b in bars],
            },
            index=pd.DatetimeIndex(pd.to_datetime([b.date for b in bars]), name="Date"),
        )
        return cls(OhlcvFrame(df=df, symbol=symbol))

    def __len__(self) -> int:
        return len(self._dates)

    def __getitem__(self, i: int) -> Bar:
        return Bar(
            date=self._dates[i],
            open=float(self._open[i]),
            high=float(self._high[i]),
            low=float(self._low[i]),
            close=float(self._close[i]),
            volume=int(self._volume[i]),
        )

    def __iter__(self) -> Iterator[Bar]:
        for i in range(len(self)):
            yield self[i]

    @property
    def closes(self) -> np.ndarray:
        """Read-only close prices, aligned with bar indices."""
        return self._close

    @property
    def dates(self) -> list[date]:
        return list(self._dates)
