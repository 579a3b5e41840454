"""
Core Market Data Models

This module contains Pydantic models for the raw market data consumed by the
candlestick engine:
- Trend: Directional label of a candle or a sequence of candles
- Timeframe: Enumeration of supported candle intervals
- OHLCBar: Open/high/low/close bar supplied by a market-data collaborator
- Trade: A single executed trade, used to aggregate candles

Prices are carried as Decimal and validated for consistent OHLC relationships.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


PRICE_PRECISION = Decimal('0.00000001')


def parse_decimal(value) -> Decimal:
    """Convert a str/float/int price to a finite Decimal without rounding."""
    if isinstance(value, Decimal):
        decimal_val = value
    else:
        if isinstance(value, str):
            value = value.strip()
        try:
            decimal_val = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Invalid price: {value!r}") from None
    if not decimal_val.is_finite():
        raise ValueError(f"Price must be finite, got {value!r}")
    return decimal_val


def to_decimal(value) -> Decimal:
    """Convert a str/float/int price to a Decimal with 8 decimal places."""
    return parse_decimal(value).quantize(PRICE_PRECISION, rounding=ROUND_HALF_UP)


def to_utc(value) -> datetime:
    """Parse an ISO string, millisecond epoch or datetime into an aware UTC datetime."""
    if isinstance(value, str):
        if value.endswith('Z'):
            value = value[:-1] + '+00:00'
        dt = datetime.fromisoformat(value)
    elif isinstance(value, (int, float)):
        dt = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    elif isinstance(value, datetime):
        dt = value
    else:
        raise ValueError(f"Invalid timestamp format: {type(value)}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    elif dt.tzinfo != timezone.utc:
        dt = dt.astimezone(timezone.utc)

    return dt


class Trend(str, Enum):
    """General price movement of a candle or of a group of candles."""
    BULLISH = "Bullish"
    BEARISH = "Bearish"
    INDIFFERENT = "Indifferent"

    @property
    def is_bullish(self) -> bool:
        return self is Trend.BULLISH

    @property
    def is_bearish(self) -> bool:
        return self is Trend.BEARISH

    @property
    def is_indifferent(self) -> bool:
        return self is Trend.INDIFFERENT


class Timeframe(str, Enum):
    """Supported candle intervals."""

    FIFTEEN_MINUTES = "15m"
    THIRTY_MINUTES = "30m"
    FORTY_FIVE_MINUTES = "45m"
    ONE_HOUR = "1h"
    TWO_HOURS = "2h"
    THREE_HOURS = "3h"
    FOUR_HOURS = "4h"
    SIX_HOURS = "6h"
    TWELVE_HOURS = "12h"
    EIGHTEEN_HOURS = "18h"
    ONE_DAY = "24h"
    TWO_DAYS = "48h"
    THREE_DAYS = "72h"

    @property
    def seconds(self) -> int:
        """Convert timeframe to seconds."""
        mapping = {
            "15m": 900,
            "30m": 1800,
            "45m": 2700,
            "1h": 3600,
            "2h": 7200,
            "3h": 10800,
            "4h": 14400,
            "6h": 21600,
            "12h": 43200,
            "18h": 64800,
            "24h": 86400,
            "48h": 172800,
            "72h": 259200,
        }
        return mapping[self.value]

    @property
    def duration(self) -> timedelta:
        return timedelta(seconds=self.seconds)

    def floor(self, timestamp: datetime) -> datetime:
        """Return the start of the period `timestamp` falls in."""
        epoch = int(to_utc(timestamp).timestamp())
        start = epoch - (epoch % self.seconds)
        return datetime.fromtimestamp(start, tz=timezone.utc)


def to_duration(value) -> timedelta:
    """Accept a timedelta, a Timeframe value such as '1h', or a number of seconds."""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, Timeframe):
        return value.duration
    if isinstance(value, str):
        try:
            return Timeframe(value.strip()).duration
        except ValueError:
            raise ValueError(f"Unknown timeframe: {value}") from None
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)
    raise ValueError(f"Invalid period format: {type(value)}")


class OHLCBar(BaseModel):
    """
    Open/high/low/close bar as delivered by an exchange feed.

    Validates that:
    - high >= max(open, close) and high >= low
    - low <= min(open, close)
    - volume is non-negative
    """

    open: Decimal = Field(..., description="Opening price", ge=0)
    high: Decimal = Field(..., description="Highest price", ge=0)
    low: Decimal = Field(..., description="Lowest price", ge=0)
    close: Decimal = Field(..., description="Closing price", ge=0)
    volume: Decimal = Field(default=Decimal('0'), description="Total traded volume", ge=0)
    start_time: datetime = Field(..., description="Start of the bar's period (UTC)")
    period: timedelta = Field(default=timedelta(hours=1), description="Length of the bar's period")

    model_config = ConfigDict(frozen=True)

    @field_validator('open', 'high', 'low', 'close', 'volume', mode='before')
    @classmethod
    def validate_price_fields(cls, v) -> Decimal:
        """Convert and validate price/volume fields."""
        return to_decimal(v)

    @field_validator('start_time', mode='before')
    @classmethod
    def validate_start_time(cls, v) -> datetime:
        return to_utc(v)

    @field_validator('period', mode='before')
    @classmethod
    def validate_period(cls, v) -> timedelta:
        return to_duration(v)

    @model_validator(mode='after')
    def validate_ohlc_relationships(self):
        """Validate OHLC price relationships."""
        if self.high < max(self.open, self.close):
            raise ValueError(f"High price {self.high} must be >= max(open, close)")
        if self.high < self.low:
            raise ValueError(f"High price {self.high} must be >= low price {self.low}")
        if self.low > min(self.open, self.close):
            raise ValueError(f"Low price {self.low} must be <= min(open, close)")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OHLCBar':
        """
        Create a bar from a plain mapping.

        Accepts both long keys ('open', 'start_time', ...) and the compact
        exchange keys {'t': timestamp_ms, 'o', 'h', 'l', 'c', 'v'}.
        """
        if 'o' in data:
            return cls(
                open=data['o'],
                high=data['h'],
                low=data['l'],
                close=data['c'],
                volume=data.get('v', 0),
                start_time=int(data['t']),
                period=data.get('period', timedelta(hours=1)),
            )
        return cls(**data)


class Trade(BaseModel):
    """A single executed trade."""

    timestamp: datetime = Field(..., description="Execution time (UTC)")
    price: Decimal = Field(..., description="Execution price", ge=0)
    volume: Decimal = Field(default=Decimal('0'), description="Traded volume", ge=0)

    model_config = ConfigDict(frozen=True)

    @field_validator('price', 'volume', mode='before')
    @classmethod
    def validate_decimal_fields(cls, v) -> Decimal:
        return to_decimal(v)

    @field_validator('timestamp', mode='before')
    @classmethod
    def validate_timestamp(cls, v) -> datetime:
        return to_utc(v)
