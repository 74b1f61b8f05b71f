"""CSV data provider and a standardized OHLCV schema."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

OHLCV_COLUMNS = ["Open", "High", "Low", "Close", "Volume"]

# (shape, format) pairs tried in order; a value must match the shape exactly.
DATE_FORMATS = (
    (r"\d{4}-\d{2}-\d{2}", "%Y-%m-%d"),
    (r"\d{1,2}/\d{1,2}/\d{4}", "%m/%d/%Y"),
)
# M/D/YY is widened to M/D/20YY before parsing.
TWO_DIGIT_YEAR = r"(\d{1,2}/\d{1,2}/)(\d{2})"


@dataclass(frozen=True)
class OhlcvFrame:
    """Standard OHLCV dataframe wrapper."""

    df: pd.DataFrame  # columns: Open, High, Low, Close, Volume; index: Date (naive datetime)
    symbol: str


def is_header(line: str) -> bool:
    """A first line is a header when its first field mentions 'date'."""
    first = line.strip().split(",", 1)[0]
    return "date" in first.lower()


def parse_dates(values: pd.Series) -> pd.Series:
    """Parse date strings trying YYYY-MM-DD, then M/D/YYYY, then M/D/YY.

    ISO dates need zero-padded month and day. Two-digit years always land
    in 2000-2099. Values no format accepts come back as NaT.
    """
    values = values.astype(str).str.strip()
    short = values.str.fullmatch(TWO_DIGIT_YEAR)
    values = values.where(~short, values.str.replace(TWO_DIGIT_YEAR, r"\g<1>20\g<2>", regex=True))

    out = pd.Series(pd.NaT, index=values.index, dtype="datetime64[ns]")
    for shape, fmt in DATE_FORMATS:
        todo = out.isna() & values.str.fullmatch(shape)
        if not todo.any():
            continue
        out.loc[todo] = pd.to_datetime(values[todo], format=fmt, errors="coerce")
    return out


def _empty_frame() -> pd.DataFrame:
    df = pd.DataFrame(columns=OHLCV_COLUMNS).astype({c: float for c in OHLCV_COLUMNS[:4]})
    df["Volume"] = df["Volume"].astype("int64")
    df.index = pd.DatetimeIndex([], name="Date")
    return df


class CsvProvider:
    """Load OHLCV data from a comma-delimited file.

    Layout: optional header, then Date,Open,High,Low,Close,Volume[,...].
    Rows with fewer than six fields, an unknown date format or non-numeric
    prices are dropped; they are not an error.
    """

    def fetch(self, csv_path: str | Path, symbol: str | None = None) -> OhlcvFrame:
        path = Path(csv_path)
        if not path.exists():
            raise FileNotFoundError(str(path))

        lines = path.read_text(encoding="utf-8-sig").splitlines()
        if not lines:
            raise ValueError(f"Empty CSV: {path}")

        symbol = symbol or path.stem
        start = 1 if is_header(lines[0]) else 0

        rows = []
        for line in lines[start:]:
            fields = [f.strip() for f in line.strip().split(",")]
            if len(fields) < 6:
                continue
            rows.append(fields[:6])

        n_lines = len(lines) - start
        if not rows:
            logger.warning("No usable rows in %s (%d lines read)", path, n_lines)
            return OhlcvFrame(df=_empty_frame(), symbol=symbol)

        raw = pd.DataFrame(rows, columns=["Date"] + OHLCV_COLUMNS)
        dates = parse_dates(raw["Date"])
        nums = raw[OHLCV_COLUMNS].apply(pd.to_numeric, errors="coerce")

        ok = dates.notna() & np.isfinite(nums.to_numpy(dtype=float)).all(axis=1)
        for k in raw.index[~ok][:10]:
            logger.debug("Dropped malformed row: %s", ",".join(rows[k]))

        df = nums.loc[ok, OHLCV_COLUMNS[:4]].astype(float)
        # truncate toward zero, like a cast
        df["Volume"] = np.trunc(nums.loc[ok, "Volume"].to_numpy(dtype=float)).astype("int64")
        df.index = pd.DatetimeIndex(dates[ok], name="Date")

        if not df.index.is_monotonic_increasing:
            logger.warning("Rows in %s are not in chronological order; file order is kept", path)

        logger.info(
            "Loaded %d bars from %s (%d of %d lines dropped)",
            len(df),
            path,
            n_lines - len(df),
            n_lines,
        )
        return OhlcvFrame(df=df, symbol=symbol)
