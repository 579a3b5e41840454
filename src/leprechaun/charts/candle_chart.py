"""
Candlestick Chart

Holds an ordered, immutable sequence of candles and the patterns detected in
its most recent candles. Candles are linked purely by their `index`, which is
their position in the chart; navigation is a constant-time lookup.

A chart is not safe for concurrent `detect_patterns` calls: the pattern lists
are shared append-only state with a single writer.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple, Union

from ..config import ChartConfig
from ..exceptions import (
    CandleNotInChartError,
    InsufficientLookbackError,
    InsufficientWindowError,
    NoMoreCandlesError,
)
from ..models.candle import Candle
from ..models.market_data import OHLCBar, Timeframe, Trade, Trend
from ..models.patterns import PatternKind, PatternRecord
from .aggregation import aggregate_trades
from .patterns.matcher import PatternMatcher
from .trend import score_trend


logger = logging.getLogger(__name__)


class CandleChart:
    """
    A chart of OHLC candles in chronological order.

    Args:
        candles: Candles in time order; each is re-indexed to its position
        pattern_window: Number of trailing candles scanned per detection call
        lookback: Number of candles scored for a pattern's preceding trend
        deduplicate: Skip records whose (kind, anchor index) is already present
        matcher: Pattern matcher, defaults to the standard rule table
    """

    def __init__(
        self,
        candles: Iterable[Candle],
        pattern_window: int = 5,
        lookback: int = 3,
        deduplicate: bool = True,
        matcher: Optional[PatternMatcher] = None,
    ):
        if pattern_window < 1:
            raise ValueError(f"pattern_window must be positive, got {pattern_window}")
        if lookback < 1:
            raise ValueError(f"lookback must be positive, got {lookback}")

        self._candles: Tuple[Candle, ...] = tuple(
            candle.with_index(i) for i, candle in enumerate(candles)
        )
        self.pattern_window = pattern_window
        self.lookback = lookback
        self.deduplicate = deduplicate
        self.matcher = matcher or PatternMatcher()

        self._bullish_patterns: List[PatternRecord] = []
        self._bearish_patterns: List[PatternRecord] = []
        self._recorded: Set[Tuple[PatternKind, int]] = set()

    @classmethod
    def from_config(cls, candles: Iterable[Candle], config: ChartConfig, **kwargs) -> 'CandleChart':
        return cls(
            candles,
            pattern_window=config.pattern_window,
            lookback=config.lookback,
            deduplicate=config.deduplicate,
            **kwargs
        )

    @classmethod
    def from_bars(
        cls,
        bars: Iterable[Union[OHLCBar, Dict[str, Any]]],
        config: Optional[ChartConfig] = None,
        **kwargs
    ) -> 'CandleChart':
        """Build a chart from OHLC bars or their dict representation."""
        config = config or ChartConfig()
        candles = []
        for bar in bars:
            if not isinstance(bar, OHLCBar):
                bar = OHLCBar.from_dict(bar)
            candles.append(Candle.from_bar(bar, threshold=config.trend_threshold))
        return cls.from_config(candles, config, **kwargs)

    @classmethod
    def from_trades(
        cls,
        trades: Iterable[Union[Trade, Dict[str, Any]]],
        timeframe: Timeframe = Timeframe.ONE_HOUR,
        config: Optional[ChartConfig] = None,
        **kwargs
    ) -> 'CandleChart':
        """Build a chart with one candle per `timeframe` period of trades."""
        config = config or ChartConfig()
        candles = aggregate_trades(trades, timeframe, threshold=config.trend_threshold)
        return cls.from_config(candles, config, **kwargs)

    # Sequence access

    @property
    def candles(self) -> Tuple[Candle, ...]:
        return self._candles

    @property
    def last(self) -> Candle:
        if not self._candles:
            raise NoMoreCandlesError("the chart has no candles")
        return self._candles[-1]

    def __len__(self) -> int:
        return len(self._candles)

    def __iter__(self) -> Iterator[Candle]:
        return iter(self._candles)

    def __getitem__(self, index):
        return self._candles[index]

    def __repr__(self) -> str:
        return (
            f"CandleChart(candles={len(self._candles)}, window={self.pattern_window}, "
            f"bullish={len(self._bullish_patterns)}, bearish={len(self._bearish_patterns)})"
        )

    # Navigation

    def _locate(self, candle: Candle) -> int:
        index = candle.index
        if index is None or index >= len(self._candles) or self._candles[index] != candle:
            raise CandleNotInChartError(f"candle at index {index} does not belong to this chart")
        return index

    def next(self, candle: Candle) -> Candle:
        """Return the candle after `candle`."""
        index = self._locate(candle)
        if index + 1 >= len(self._candles):
            raise NoMoreCandlesError("there are no more candles in the chart. this is the last one", index=index)
        return self._candles[index + 1]

    def previous(self, candle: Candle) -> Candle:
        """Return the candle before `candle`."""
        index = self._locate(candle)
        if index == 0:
            raise NoMoreCandlesError("there are no candles before the first one", index=index)
        return self._candles[index - 1]

    def next_n(self, n: int, candle: Candle) -> List[Candle]:
        """
        Return exactly `n` candles after `candle`, nearest first.

        Raises NoMoreCandlesError rather than returning fewer than `n` candles.
        """
        index = self._locate(candle)
        if n < 0:
            raise ValueError(f"n must not be negative, got {n}")
        available = len(self._candles) - index - 1
        if n > available:
            raise NoMoreCandlesError(
                f"requested {n} following candles but only {available} are available",
                index=index
            )
        return [self._candles[index + i] for i in range(1, n + 1)]

    def previous_n(self, n: int, candle: Candle) -> List[Candle]:
        """
        Return exactly `n` candles before `candle`, nearest first.

        Raises InsufficientLookbackError rather than returning fewer than `n` candles.
        """
        index = self._locate(candle)
        if n < 0:
            raise ValueError(f"n must not be negative, got {n}")
        if n > index:
            raise InsufficientLookbackError(requested=n, available=index, index=index)
        return [self._candles[index - i] for i in range(1, n + 1)]

    def window(self) -> Tuple[Candle, ...]:
        """The trailing `pattern_window` candles scanned by pattern detection."""
        if len(self._candles) < self.pattern_window:
            raise InsufficientWindowError(self.pattern_window, len(self._candles))
        return self._candles[-self.pattern_window:]

    # Trend

    def detect_trend(self, candles: Optional[Iterable[Candle]] = None) -> Trend:
        """Score the trend of `candles`, or of the whole chart when omitted."""
        return score_trend(self._candles if candles is None else candles)

    # Patterns

    @property
    def bullish_patterns(self) -> Tuple[PatternRecord, ...]:
        return tuple(self._bullish_patterns)

    @property
    def bearish_patterns(self) -> Tuple[PatternRecord, ...]:
        return tuple(self._bearish_patterns)

    def add_pattern(self, anchor: Candle, kind: PatternKind) -> Optional[PatternRecord]:
        """
        Record a detected pattern together with the trend preceding its anchor.

        The match is dropped, without error, when fewer than `lookback`
        candles precede the anchor. Returns the appended record, or None.
        """
        try:
            preceding = self.previous_n(self.lookback, anchor)
        except InsufficientLookbackError:
            logger.debug(
                f"Dropping {kind.value}: fewer than {self.lookback} candles precede the anchor",
                extra={'pattern': kind.value, 'candle_index': anchor.index}
            )
            return None

        record = PatternRecord(
            kind=kind,
            preceding_trend=score_trend(preceding),
            anchor_index=anchor.index
        )
        if self.deduplicate and record.key in self._recorded:
            return None
        self._recorded.add(record.key)

        if kind.is_bullish:
            self._bullish_patterns.append(record)
        else:
            self._bearish_patterns.append(record)
        return record

    def detect_patterns(self) -> List[PatternRecord]:
        """
        Match the trailing window against the pattern rule table.

        Returns the records appended by this call.

        Raises:
            InsufficientWindowError: If the chart is smaller than the pattern window
        """
        records = self.matcher.scan(self)
        logger.debug(f"Detected {len(records)} new patterns in the last {self.pattern_window} candles")
        return records
