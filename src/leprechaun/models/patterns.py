"""
Candlestick Pattern Models

- PatternKind: The catalog of multi-candle patterns the matcher recognises
- PatternRecord: An immutable detection result with the trend that preceded it

See https://www.investopedia.com/trading/candlestick-charting-what-is-it/ for
background on the individual formations.
"""

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from .market_data import Trend


class PatternKind(str, Enum):
    """Candlestick pattern enumeration."""

    # Bullish patterns
    BULLISH_ENGULFING = "BullishEngulfing"
    BULLISH_MORNING_STAR = "BullishMorningStar"
    MORNING_DOJI_STAR = "MorningDojiStar"
    BULLISH_HARAMI = "BullishHarami"
    BULLISH_HARAMI_CROSS = "BullishHaramiCross"
    BULLISH_RISING_THREE = "BullishRisingThree"
    BULLISH_RISING_TWO = "BullishRisingTwo"
    BULLISH_KEY_REVERSAL = "BullishKeyReversal"
    BULLISH_GENERIC = "BullishGenericPattern"

    # Bearish patterns
    BEARISH_ENGULFING = "BearishEngulfing"
    BEARISH_EVENING_STAR = "BearishEveningStar"
    EVENING_DOJI_STAR = "EveningDojiStar"
    BEARISH_HARAMI = "BearishHarami"
    BEARISH_HARAMI_CROSS = "BearishHaramiCross"
    BEARISH_FALLING_THREE = "BearishFallingThree"
    BEARISH_FALLING_TWO = "BearishFallingTwo"
    BEARISH_KEY_REVERSAL = "BearishKeyReversal"
    BEARISH_GENERIC = "BearishGenericPattern"

    @property
    def direction(self) -> Trend:
        """Direction the pattern signals; selects the chart list it is recorded in."""
        if self in BULLISH_PATTERNS:
            return Trend.BULLISH
        return Trend.BEARISH

    @property
    def is_bullish(self) -> bool:
        return self.direction is Trend.BULLISH

    @property
    def is_bearish(self) -> bool:
        return self.direction is Trend.BEARISH


BULLISH_PATTERNS = frozenset({
    PatternKind.BULLISH_ENGULFING,
    PatternKind.BULLISH_MORNING_STAR,
    PatternKind.MORNING_DOJI_STAR,
    PatternKind.BULLISH_HARAMI,
    PatternKind.BULLISH_HARAMI_CROSS,
    PatternKind.BULLISH_RISING_THREE,
    PatternKind.BULLISH_RISING_TWO,
    PatternKind.BULLISH_KEY_REVERSAL,
    PatternKind.BULLISH_GENERIC,
})


class PatternRecord(BaseModel):
    """
    A pattern detected in a chart.

    `preceding_trend` is the score of the candles immediately before the
    pattern's anchor candle; `anchor_index` is the anchor's chart index.
    """

    kind: PatternKind = Field(..., description="Detected pattern")
    preceding_trend: Trend = Field(..., description="Trend of the candles preceding the anchor")
    anchor_index: int = Field(..., description="Chart index of the anchor candle", ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> Tuple[PatternKind, int]:
        """Identity used to de-duplicate repeated detections."""
        return self.kind, self.anchor_index
