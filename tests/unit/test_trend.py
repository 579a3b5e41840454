"""
Unit tests for trend scoring and line charts.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from leprechaun.charts.line_chart import LineChart
from leprechaun.charts.trend import score_series, score_trend
from leprechaun.models.candle import Candle
from leprechaun.models.market_data import Trend


BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def create_test_candle(open_price, close_price, hour=0) -> Candle:
    return Candle.from_prices([open_price, close_price], start_time=BASE_TIME + timedelta(hours=hour))


BULL = create_test_candle(10, 12)
BEAR = create_test_candle(12, 10)


class TestScoreTrend:
    """Test trend scoring of candle groups."""

    @pytest.mark.parametrize("candles,expected", [
        ([BULL, BULL, BEAR], Trend.BULLISH),
        ([BEAR, BULL, BEAR], Trend.BEARISH),
        ([BULL, BEAR], Trend.INDIFFERENT),
        ([], Trend.INDIFFERENT),
        ([BULL], Trend.BULLISH),
    ])
    def test_majority_wins(self, candles, expected):
        """Test that the majority direction gives the trend."""
        assert score_trend(candles) is expected

    def test_order_does_not_matter(self):
        """Test that the score depends only on the counts."""
        assert score_trend([BEAR, BULL, BULL]) is score_trend([BULL, BULL, BEAR])

    def test_odd_groups_are_decisive(self):
        """Test that an odd number of candles never scores indifferent."""
        groups = [[BULL], [BEAR], [BULL, BEAR, BEAR], [BULL, BULL, BEAR, BEAR, BULL]]

        for group in groups:
            assert score_trend(group) is not Trend.INDIFFERENT

    def test_accepts_generators(self):
        """Test scoring a lazily produced group."""
        assert score_trend(c for c in [BEAR, BEAR]) is Trend.BEARISH


class TestScoreSeries:
    """Test trend scoring of price series."""

    @pytest.mark.parametrize("prices,expected", [
        ([1, 2, 3], Trend.BULLISH),
        ([3, 2, 1], Trend.BEARISH),
        ([1, 2, 1], Trend.INDIFFERENT),
        ([5, 5, 5], Trend.INDIFFERENT),
        ([1, 3, 2, 4], Trend.BULLISH),
        ([7], Trend.INDIFFERENT),
        ([], Trend.INDIFFERENT),
    ])
    def test_rises_minus_drops(self, prices, expected):
        """Test that the sign of rises minus drops gives the trend."""
        assert score_series(prices) is expected

    def test_magnitude_is_ignored(self):
        """Test that one large rise is outweighed by two small drops."""
        assert score_series([Decimal('1'), Decimal('100'), Decimal('99'), Decimal('98')]) is Trend.BEARISH


class TestLineChart:
    """Test line charts of closing prices."""

    def test_trend_from_prices(self):
        """Test that the chart trend scores its price series."""
        chart = LineChart(["100.5", 101, 102.25])

        assert chart.trend is Trend.BULLISH
        assert chart.prices == (Decimal('100.5'), Decimal('101'), Decimal('102.25'))
        assert len(chart) == 3

    def test_from_candles(self):
        """Test building a line chart from candle closes."""
        candles = [create_test_candle(10, 12, 0), create_test_candle(12, 11, 1), create_test_candle(11, 9, 2)]
        chart = LineChart.from_candles(candles)

        assert chart.prices == (Decimal('12'), Decimal('11'), Decimal('9'))
        assert chart.trend is Trend.BEARISH
        assert chart.start == BASE_TIME
        assert chart.stop == BASE_TIME + timedelta(hours=3)
        assert chart.interval == timedelta(hours=1)

    def test_from_no_candles(self):
        """Test that an empty line chart is indifferent."""
        chart = LineChart.from_candles([])

        assert len(chart) == 0
        assert chart.trend is Trend.INDIFFERENT

    @pytest.mark.parametrize("price", ["nan", "inf", float("nan"), "-Infinity"])
    def test_non_finite_prices_rejected(self, price):
        """Test that NaN and infinite prices cannot enter a line chart."""
        with pytest.raises(ValueError):
            LineChart([1, price])
