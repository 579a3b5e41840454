"""
Candlestick Pattern Rules

Each pattern the matcher recognises is an independent `PatternRule`:
- `applies_to` classifies the last candle of the window (bearish, bullish, doji)
- `match` navigates back from that candle and returns the pattern's anchor
  candle, or None when the formation is absent
- `kind` is the pattern recorded against the anchor

Rules never catch navigation errors themselves; a rule whose look-back runs
past the start of the chart raises NoMoreCandlesError and the matcher skips it.

Patterns ending in a bearish candle:
- Engulfing: the last candle's range contains the previous bullish candle's
- Harami: the previous bullish candle's range contains the last candle's
- Key reversal: opens above the prior close, makes a new high, closes below the prior low
- Evening star / evening doji star: bullish candle, small (or doji) gap-up candle,
  bearish candle closing back into the first
- Falling three / two: bearish candle, three (two) small bullish candles held
  below its high, bearish candle
- Generic: three consecutive bearish candles before the last one

Patterns ending in a bullish candle mirror the above. Patterns ending in a doji
are the harami crosses.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Tuple

from ...models.candle import Candle, all_bearish, all_bullish
from ...models.patterns import PatternKind

if TYPE_CHECKING:
    from ..candle_chart import CandleChart


MatchFunction = Callable[['CandleChart', Candle], Optional[Candle]]


@dataclass(frozen=True)
class PatternRule:
    """A single entry of the pattern rule table."""

    name: str
    kind: PatternKind
    applies_to: Callable[[Candle], bool]
    match: MatchFunction


def _is_bearish(candle: Candle) -> bool:
    return candle.is_bearish


def _is_bullish(candle: Candle) -> bool:
    return candle.is_bullish


def _is_doji(candle: Candle) -> bool:
    return candle.is_doji


# Patterns ending in a bearish candle

def match_bearish_engulfing(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    previous = chart.previous(last)
    if previous.is_bullish and last.engulfs(previous):
        return previous
    return None


def match_bearish_harami(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    previous = chart.previous(last)
    if previous.is_bullish and previous.engulfs(last):
        return previous
    return None


def match_bearish_key_reversal(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    previous = chart.previous(last)
    if not previous.is_bullish:
        return None
    if last.open > previous.close and last.high > last.open and last.close < previous.low:
        return previous
    return None


def match_evening_doji_star(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    previous = chart.previous(last)
    first = chart.previous(previous)
    if not first.is_bullish or not previous.is_doji:
        return None
    if (previous.low > first.close and last.open < previous.close
            and last.close > first.open):
        return first
    return None


def match_bearish_evening_star(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    previous = chart.previous(last)
    first = chart.previous(previous)
    if not first.is_bullish or previous.is_doji:
        return None
    # Small middle candle gapping above the first, last candle closing deep into the first
    if (previous.price_range <= last.price_range / 2 and previous.open > first.open
            and last.open > previous.close and last.close > first.open):
        return first
    return None


def _falling(count: int) -> MatchFunction:
    def match(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
        inner = chart.previous_n(count, last)
        if not all_bullish(inner):
            return None
        anchor = chart.previous(inner[-1])
        if anchor.is_bearish and anchor.high > max(candle.high for candle in inner):
            return anchor
        return None
    return match


def match_bearish_generic(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    if all_bearish(chart.previous_n(3, last)):
        return last
    return None


# Patterns ending in a bullish candle

def match_bullish_engulfing(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    previous = chart.previous(last)
    if previous.is_bearish and last.engulfs(previous):
        return previous
    return None


def match_bullish_harami(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    previous = chart.previous(last)
    if previous.is_bearish and previous.engulfs(last):
        return previous
    return None


def match_bullish_key_reversal(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    previous = chart.previous(last)
    if not previous.is_bearish:
        return None
    if last.open < previous.close and last.low < last.open and last.close > previous.high:
        return previous
    return None


def match_morning_doji_star(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    previous = chart.previous(last)
    first = chart.previous(previous)
    if not first.is_bearish or not previous.is_doji:
        return None
    if (previous.high < first.close and last.open > previous.close
            and last.close < first.open):
        return first
    return None


def match_bullish_morning_star(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    previous = chart.previous(last)
    first = chart.previous(previous)
    if not first.is_bearish or previous.is_doji:
        return None
    # Small middle candle gapping below the first
    if (previous.price_range <= last.price_range / 2 and previous.close < first.close
            and last.open > previous.close and last.close < first.open):
        return first
    return None


def _rising(count: int) -> MatchFunction:
    def match(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
        inner = chart.previous_n(count, last)
        if not all_bearish(inner):
            return None
        anchor = chart.previous(inner[-1])
        if anchor.is_bullish and anchor.low < min(candle.low for candle in inner):
            return anchor
        return None
    return match


def match_bullish_generic(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    if all_bullish(chart.previous_n(3, last)):
        return last
    return None


# Patterns ending in a doji

def match_bullish_harami_cross(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    previous = chart.previous(last)
    if previous.is_bearish and last.high < previous.high and last.low > previous.low:
        return previous
    return None


def match_bearish_harami_cross(chart: 'CandleChart', last: Candle) -> Optional[Candle]:
    previous = chart.previous(last)
    if previous.is_bullish and last.high < previous.high and last.low > previous.low:
        return previous
    return None


match_bearish_falling_three = _falling(3)
match_bearish_falling_two = _falling(2)
match_bullish_rising_three = _rising(3)
match_bullish_rising_two = _rising(2)


DEFAULT_RULES: Tuple[PatternRule, ...] = (
    PatternRule("bearish_engulfing", PatternKind.BEARISH_ENGULFING, _is_bearish, match_bearish_engulfing),
    PatternRule("bearish_harami", PatternKind.BEARISH_HARAMI, _is_bearish, match_bearish_harami),
    PatternRule("bearish_key_reversal", PatternKind.BEARISH_KEY_REVERSAL, _is_bearish, match_bearish_key_reversal),
    PatternRule("evening_doji_star", PatternKind.EVENING_DOJI_STAR, _is_bearish, match_evening_doji_star),
    PatternRule("bearish_evening_star", PatternKind.BEARISH_EVENING_STAR, _is_bearish, match_bearish_evening_star),
    PatternRule("bearish_falling_three", PatternKind.BEARISH_FALLING_THREE, _is_bearish, match_bearish_falling_three),
    PatternRule("bearish_falling_two", PatternKind.BEARISH_FALLING_TWO, _is_bearish, match_bearish_falling_two),
    PatternRule("bearish_generic", PatternKind.BEARISH_GENERIC, _is_bearish, match_bearish_generic),

    PatternRule("bullish_engulfing", PatternKind.BULLISH_ENGULFING, _is_bullish, match_bullish_engulfing),
    PatternRule("bullish_harami", PatternKind.BULLISH_HARAMI, _is_bullish, match_bullish_harami),
    PatternRule("bullish_key_reversal", PatternKind.BULLISH_KEY_REVERSAL, _is_bullish, match_bullish_key_reversal),
    PatternRule("morning_doji_star", PatternKind.MORNING_DOJI_STAR, _is_bullish, match_morning_doji_star),
    PatternRule("bullish_morning_star", PatternKind.BULLISH_MORNING_STAR, _is_bullish, match_bullish_morning_star),
    PatternRule("bullish_rising_three", PatternKind.BULLISH_RISING_THREE, _is_bullish, match_bullish_rising_three),
    PatternRule("bullish_rising_two", PatternKind.BULLISH_RISING_TWO, _is_bullish, match_bullish_rising_two),
    PatternRule("bullish_generic", PatternKind.BULLISH_GENERIC, _is_bullish, match_bullish_generic),

    PatternRule("bullish_harami_cross", PatternKind.BULLISH_HARAMI_CROSS, _is_doji, match_bullish_harami_cross),
    PatternRule("bearish_harami_cross", PatternKind.BEARISH_HARAMI_CROSS, _is_doji, match_bearish_harami_cross),
)
