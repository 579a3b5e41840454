"""
Candlestick Pattern Recognition Module

Rule table and matcher for multi-candle reversal and continuation patterns:
engulfing, harami, harami cross, key reversal, morning/evening (doji) star,
rising/falling three and two, and the generic three-candle runs.
"""

from .matcher import PatternMatcher
from .rules import DEFAULT_RULES, PatternRule

__all__ = ["DEFAULT_RULES", "PatternMatcher", "PatternRule"]
