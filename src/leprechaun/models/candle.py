"""
Candle Model

A Candle is one OHLC bar together with the metrics the pattern matcher needs:
price range, percent change, trend direction and tail lengths. Candles are
immutable; the owning chart assigns `index` by building an indexed copy.
"""

import math
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import DivisionByZeroError, EmptyInputError
from .market_data import OHLCBar, Trend, parse_decimal, to_duration, to_utc


# Ranges below this value (in price units) are classified as bearish.
DEFAULT_TREND_THRESHOLD = Decimal('1.0')

Price = Union[Decimal, float, int, str]


class Candle(BaseModel):
    """
    One OHLC bar with derived metrics.

    Trend is Bearish when `price_range` is below the trend threshold and
    Bullish otherwise; Indifferent is only ever produced by trend scoring,
    never at construction.
    """

    open: Decimal = Field(..., description="Opening price")
    high: Decimal = Field(..., description="Highest price")
    low: Decimal = Field(..., description="Lowest price")
    close: Decimal = Field(..., description="Closing price")
    price_range: Decimal = Field(..., description="close - open")
    percent_change: Decimal = Field(..., description="price_range * 100 / open")
    period: timedelta = Field(default=timedelta(hours=1), description="Unit of time represented")
    start_time: datetime = Field(..., description="Start time of this candle (UTC)")
    total_volume: Decimal = Field(default=Decimal('0'), description="Total traded volume", ge=0)
    trend: Trend = Field(..., description="Direction of the price move")
    upper_tail: Decimal = Field(..., description="Length of the upper shadow")
    lower_tail: Decimal = Field(..., description="Length of the lower shadow")
    index: Optional[int] = Field(
        None,
        description="0-based position within the owning chart",
        ge=0
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_prices(
        cls,
        prices: Sequence[Price],
        start_time: Union[datetime, str, int],
        total_volume: Price = Decimal('0'),
        period: Union[timedelta, str, int] = timedelta(hours=1),
        threshold: Decimal = DEFAULT_TREND_THRESHOLD,
    ) -> 'Candle':
        """
        Build a candle from the trade prices of one period.

        Args:
            prices: Trade prices in chronological order, kept at full precision
            start_time: Start of the period, truncated to the minute
            total_volume: Volume traded during the period
            period: Length of the period
            threshold: Ranges below this value are bearish

        Raises:
            EmptyInputError: If `prices` is empty
            DivisionByZeroError: If the opening price is zero
        """
        if not prices:
            raise EmptyInputError("cannot build a candle from an empty price list")

        values = [parse_decimal(p) for p in prices]
        return cls._build(
            open_=values[0],
            high=max(values),
            low=min(values),
            close=values[-1],
            start_time=to_utc(start_time).replace(second=0, microsecond=0),
            total_volume=parse_decimal(total_volume),
            period=to_duration(period),
            threshold=threshold,
        )

    @classmethod
    def from_bar(cls, bar: OHLCBar, threshold: Decimal = DEFAULT_TREND_THRESHOLD) -> 'Candle':
        """Build a candle from a validated OHLC bar."""
        return cls._build(
            open_=bar.open,
            high=bar.high,
            low=bar.low,
            close=bar.close,
            start_time=bar.start_time,
            total_volume=bar.volume,
            period=bar.period,
            threshold=threshold,
        )

    @classmethod
    def _build(cls, open_, high, low, close, start_time, total_volume, period, threshold) -> 'Candle':
        if open_ == 0:
            raise DivisionByZeroError("cannot compute percent change of a candle opening at 0")

        price_range = close - open_
        trend = Trend.BEARISH if price_range < Decimal(str(threshold)) else Trend.BULLISH

        if trend is Trend.BULLISH:
            upper_tail = high - close
            lower_tail = open_ - low
        else:
            upper_tail = high - open_
            lower_tail = close - low

        return cls(
            open=open_,
            high=high,
            low=low,
            close=close,
            price_range=price_range,
            percent_change=price_range * 100 / open_,
            period=period,
            start_time=start_time,
            total_volume=total_volume,
            trend=trend,
            upper_tail=upper_tail,
            lower_tail=lower_tail,
        )

    def with_index(self, index: int) -> 'Candle':
        """Return a copy of this candle placed at `index` of a chart."""
        return self.model_copy(update={'index': index})

    @property
    def is_bullish(self) -> bool:
        return self.trend is Trend.BULLISH

    @property
    def is_bearish(self) -> bool:
        return self.trend is Trend.BEARISH

    @property
    def is_doji(self) -> bool:
        """Open and close agree once truncated to whole price units."""
        return math.floor(self.open) == math.floor(self.close)

    @property
    def is_hammer(self) -> bool:
        """Bullish candle whose lower tail is more than twice its upper tail."""
        return self.is_bullish and self.lower_tail > 2 * self.upper_tail

    def engulfs(self, other: 'Candle') -> bool:
        """True if this candle's high/low range strictly contains `other`'s."""
        return self.high > other.high and self.low < other.low


def all_bullish(candles: Iterable[Candle]) -> bool:
    return all(candle.is_bullish for candle in candles)


def all_bearish(candles: Iterable[Candle]) -> bool:
    return all(candle.is_bearish for candle in candles)
