"""
Line chart built from the closing price of each interval.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Tuple

from ..models.candle import Candle, Price
from ..models.market_data import Trend, to_decimal
from .trend import score_series


class LineChart:
    """A price chart that uses one closing price per interval as its data points."""

    def __init__(
        self,
        prices: Sequence[Price],
        start: Optional[datetime] = None,
        stop: Optional[datetime] = None,
        interval: Optional[timedelta] = None,
    ):
        self._prices: Tuple[Decimal, ...] = tuple(to_decimal(p) for p in prices)
        self.start = start
        self.stop = stop
        self.interval = interval

    @classmethod
    def from_candles(cls, candles: Iterable[Candle]) -> 'LineChart':
        candles = list(candles)
        if not candles:
            return cls([])
        return cls(
            [candle.close for candle in candles],
            start=candles[0].start_time,
            stop=candles[-1].start_time + candles[-1].period,
            interval=candles[0].period,
        )

    @property
    def prices(self) -> Tuple[Decimal, ...]:
        return self._prices

    @property
    def trend(self) -> Trend:
        """Overall sentiment of the series; see `score_series`."""
        return score_series(self._prices)

    def __len__(self) -> int:
        return len(self._prices)

    def __repr__(self) -> str:
        return f"LineChart(points={len(self._prices)}, trend={self.trend.value})"
