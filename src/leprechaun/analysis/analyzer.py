"""
Candlestick Analyzer

Analysis plugin used by the trading loop: the bot hands it OHLC data, closing
prices and the current price, then asks it to emit a market signal. The signal
comes from the patterns detected in the most recent candles, interpreted
through the configured trade mode.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Union

from ..charts.candle_chart import CandleChart
from ..charts.line_chart import LineChart
from ..config import ChartConfig
from ..exceptions import AnalyzerNotReadyError
from ..models.candle import Candle, Price
from ..models.market_data import OHLCBar, Trend, to_decimal
from ..models.signals import AnalysisOptions, Signal, signal_for


logger = logging.getLogger(__name__)


class CandleAnalyzer:
    """
    Emits a Long/Short/Wait signal from candlestick patterns.

    Bullish and bearish records found by a detection pass are netted against
    each other. A tie falls back to the trend of the closing prices (plus the
    current price, when one was set).
    """

    def __init__(
        self,
        options: Optional[AnalysisOptions] = None,
        chart_config: Optional[ChartConfig] = None,
    ):
        self.options = options or AnalysisOptions()
        self.chart_config = chart_config or ChartConfig()
        self._candles: List[Candle] = []
        self._closing_prices: List[Decimal] = []
        self._current_price: Optional[Decimal] = None
        self.chart: Optional[CandleChart] = None

    def set_options(self, options: AnalysisOptions) -> None:
        self.options = options

    def set_ohlc(self, candles: Sequence[Union[Candle, OHLCBar, Dict[str, Any]]]) -> None:
        """Receive the OHLC data the bot retrieved for the analysis period."""
        threshold = self.chart_config.trend_threshold
        parsed = []
        for item in candles:
            if isinstance(item, Candle):
                parsed.append(item)
            elif isinstance(item, OHLCBar):
                parsed.append(Candle.from_bar(item, threshold=threshold))
            else:
                parsed.append(Candle.from_bar(OHLCBar.from_dict(item), threshold=threshold))
        self._candles = parsed
        self.chart = None

    def set_closing_prices(self, prices: Sequence[Price]) -> None:
        self._closing_prices = [to_decimal(p) for p in prices]

    def set_current_price(self, price: Price) -> None:
        self._current_price = to_decimal(price)

    def description(self) -> str:
        return (
            f"Candlestick pattern analysis over the last {self.chart_config.pattern_window} "
            f"{self.options.interval.value} candles ({self.options.mode.value})"
        )

    def _period_candles(self) -> List[Candle]:
        """The most recent candles covering the analysis period."""
        data_points = self.options.data_points
        if data_points < 1:
            return self._candles
        return self._candles[-data_points:]

    def _price_trend(self, candles: List[Candle]) -> Trend:
        prices = self._closing_prices or [candle.close for candle in candles]
        if self._current_price is not None:
            prices = prices + [self._current_price]
        return LineChart(prices).trend

    def emit(self) -> Signal:
        """
        Return the market signal for the data supplied so far.

        Raises:
            AnalyzerNotReadyError: If no OHLC data has been set
            InsufficientWindowError: If the analysis period holds fewer candles than the pattern window
        """
        if not self._candles:
            raise AnalyzerNotReadyError("no OHLC data has been supplied to the analyzer")

        candles = self._period_candles()
        self.chart = CandleChart.from_config(candles, self.chart_config)
        records = self.chart.detect_patterns()

        net = sum(1 if record.kind.is_bullish else -1 for record in records)
        if net > 0:
            trend = Trend.BULLISH
        elif net < 0:
            trend = Trend.BEARISH
        else:
            trend = self._price_trend(candles)

        signal = signal_for(trend, self.options.mode)
        logger.info(
            f"Emitting {signal.value} signal: {len(records)} patterns, net {net:+d}, "
            f"trend {trend.value}, mode {self.options.mode.value}"
        )
        return signal
