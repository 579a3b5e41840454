"""
Leprechaun Charts Package

Candle and line charts, trend scoring, trade aggregation and pattern detection.
"""

from .aggregation import aggregate_trades
from .candle_chart import CandleChart
from .line_chart import LineChart
from .patterns import DEFAULT_RULES, PatternMatcher, PatternRule
from .trend import score_series, score_trend

__all__ = [
    "aggregate_trades",
    "CandleChart",
    "LineChart",
    "DEFAULT_RULES",
    "PatternMatcher",
    "PatternRule",
    "score_series",
    "score_trend",
]
