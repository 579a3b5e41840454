"""
Leprechaun Analysis Package

Turns candlestick pattern detection into trading signals.
"""

from .analyzer import CandleAnalyzer

__all__ = ["CandleAnalyzer"]
