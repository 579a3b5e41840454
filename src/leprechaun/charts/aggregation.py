"""
Trade aggregation: groups raw trades into one candle per period.
"""

import logging
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Union

from ..models.candle import DEFAULT_TREND_THRESHOLD, Candle
from ..models.market_data import Timeframe, Trade


logger = logging.getLogger(__name__)


def aggregate_trades(
    trades: Iterable[Union[Trade, Dict[str, Any]]],
    timeframe: Timeframe = Timeframe.ONE_HOUR,
    threshold: Decimal = DEFAULT_TREND_THRESHOLD,
) -> List[Candle]:
    """
    Build chronological candles from raw trades.

    Trades are bucketed by the start of the `timeframe` period they fall in;
    empty periods produce no candle. Trades sharing a timestamp keep their
    input order.
    """
    parsed = [t if isinstance(t, Trade) else Trade(**t) for t in trades]

    buckets: Dict[datetime, List[Trade]] = defaultdict(list)
    for trade in sorted(parsed, key=lambda t: t.timestamp):
        buckets[timeframe.floor(trade.timestamp)].append(trade)

    candles = []
    for start, bucket in sorted(buckets.items()):
        candles.append(Candle.from_prices(
            [trade.price for trade in bucket],
            start_time=start,
            total_volume=sum((trade.volume for trade in bucket), Decimal('0')),
            period=timeframe.duration,
            threshold=threshold,
        ))

    logger.debug(f"Aggregated {len(parsed)} trades into {len(candles)} {timeframe.value} candles")
    return candles
