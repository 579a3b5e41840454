"""
Leprechaun Models Package

Data models for the candlestick engine: raw market data, candles,
detected patterns and trading signals.
"""

from .market_data import (
    OHLCBar,
    Timeframe,
    Trade,
    Trend,
)

from .candle import (
    Candle,
    DEFAULT_TREND_THRESHOLD,
    all_bearish,
    all_bullish,
)

from .patterns import (
    BULLISH_PATTERNS,
    PatternKind,
    PatternRecord,
)

from .signals import (
    AnalysisOptions,
    Signal,
    TradeMode,
    signal_for,
)

__all__ = [
    "OHLCBar",
    "Timeframe",
    "Trade",
    "Trend",
    "Candle",
    "DEFAULT_TREND_THRESHOLD",
    "all_bearish",
    "all_bullish",
    "BULLISH_PATTERNS",
    "PatternKind",
    "PatternRecord",
    "AnalysisOptions",
    "Signal",
    "TradeMode",
    "signal_for",
]
