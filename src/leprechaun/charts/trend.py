"""
Trend scoring over candle groups and raw price series.
"""

from typing import Iterable, Sequence

from ..models.candle import Candle
from ..models.market_data import Trend


def score_trend(candles: Iterable[Candle]) -> Trend:
    """
    Score the overall trend of a group of candles that typically follow each other.

    Bullish if bullish candles outnumber bearish ones, Bearish if the reverse,
    Indifferent on a tie (including an empty group). An odd number of candles
    always gives a decisive score.
    """
    bullish_score, bearish_score = 0, 0
    for candle in candles:
        if candle.is_bearish:
            bearish_score += 1
        elif candle.is_bullish:
            bullish_score += 1

    if bullish_score > bearish_score:
        return Trend.BULLISH
    if bearish_score > bullish_score:
        return Trend.BEARISH
    return Trend.INDIFFERENT


def score_series(prices: Sequence) -> Trend:
    """
    Score the overall sentiment of a price series.

    Each rise between consecutive prices adds one point, each drop removes
    one; the sign of the final score gives the trend.
    """
    score = 0
    for current, following in zip(prices, prices[1:]):
        if current < following:
            score += 1
        elif current > following:
            score -= 1

    if score > 0:
        return Trend.BULLISH
    if score < 0:
        return Trend.BEARISH
    return Trend.INDIFFERENT
