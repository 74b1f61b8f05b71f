"""Long-only daily-bar strategy backtester."""

__version__ = "0.1.0"
