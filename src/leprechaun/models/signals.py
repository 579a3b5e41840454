"""
Trading Signal Models

- TradeMode: How a detected trend is interpreted by the trading loop
- Signal: The directional recommendation handed to the trading collaborator
- AnalysisOptions: Analysis configuration passed from the bot to the analyzer
"""

from datetime import timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .market_data import Timeframe, Trend, to_duration


class TradeMode(str, Enum):
    """
    Interpretation of an upward or downward price trend.

    CONTRARIAN assumes a trend in any direction is followed by a reversal:
    a falling asset is bought and a rising one is sold.
    TREND_FOLLOWING assumes a move in any direction tends to continue.
    """
    CONTRARIAN = "contrarian"
    TREND_FOLLOWING = "trend_following"


class Signal(str, Enum):
    """Trading signal enumeration."""
    LONG = "long"
    SHORT = "short"
    WAIT = "wait"


def signal_for(trend: Trend, mode: TradeMode) -> Signal:
    """Map a trend to a signal under the given trade mode."""
    if trend is Trend.INDIFFERENT:
        return Signal.WAIT

    follows = trend is Trend.BULLISH
    if mode is TradeMode.CONTRARIAN:
        follows = not follows
    return Signal.LONG if follows else Signal.SHORT


class AnalysisOptions(BaseModel):
    """Configuration the bot hands to an analyzer."""

    analysis_period: timedelta = Field(
        default=timedelta(hours=24),
        description="Span of historical data analysed, e.g. 24 hours for the past day"
    )
    interval: Timeframe = Field(
        default=Timeframe.ONE_HOUR,
        description="Period between data points"
    )
    mode: TradeMode = Field(
        default=TradeMode.TREND_FOLLOWING,
        description="How trends are turned into signals"
    )

    model_config = ConfigDict(validate_assignment=True)

    @field_validator('analysis_period', mode='before')
    @classmethod
    def validate_analysis_period(cls, v) -> timedelta:
        return to_duration(v)

    @property
    def data_points(self) -> int:
        """Number of candles that cover the analysis period."""
        return int(self.analysis_period.total_seconds() // self.interval.seconds)
