"""
Leprechaun: Candlestick Charting and Pattern Detection

Builds candles from OHLC bars or raw trades, navigates them by index, scores
trends and scans the most recent candles for classic reversal and
continuation patterns.
"""

__version__ = "0.1.0"
__author__ = "Leprechaun Team"
__description__ = "Candlestick charting and pattern detection engine"

# Package-level imports for convenience
from .config import Config
from .logger import get_logger
from .charts import CandleChart, LineChart, score_series, score_trend
from .models import Candle, PatternKind, PatternRecord, Trend

__all__ = [
    "Config",
    "get_logger",
    "CandleChart",
    "LineChart",
    "score_series",
    "score_trend",
    "Candle",
    "PatternKind",
    "PatternRecord",
    "Trend",
    "__version__",
]
