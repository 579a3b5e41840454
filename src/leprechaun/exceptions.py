"""
Custom exceptions for the Leprechaun candlestick engine.
"""


class LeprechaunError(Exception):
    """Base class for all exceptions raised by the engine."""
    pass


class ConfigurationError(LeprechaunError):
    """Exception raised for invalid configuration values."""
    pass


class EmptyInputError(LeprechaunError, ValueError):
    """Exception raised when a candle is built from an empty price list."""
    pass


class DivisionByZeroError(LeprechaunError, ZeroDivisionError):
    """Exception raised when a candle opens at a price of zero."""
    pass


class ChartError(LeprechaunError):
    """Base class for candle chart errors."""
    pass


class NoMoreCandlesError(ChartError):
    """Exception raised when navigating past either end of a chart."""

    def __init__(self, message="there are no more candles in the chart", index=None):
        super().__init__(message)
        self.index = index


class InsufficientLookbackError(NoMoreCandlesError):
    """Exception raised when an N-candle look-back exceeds the available history."""

    def __init__(self, requested, available, index=None):
        super().__init__(
            f"requested {requested} previous candles but only {available} are available",
            index=index,
        )
        self.requested = requested
        self.available = available


class InsufficientWindowError(ChartError):
    """Exception raised when a chart holds fewer candles than its pattern window."""

    def __init__(self, window, length):
        super().__init__(
            f"pattern window of {window} candles needs at least {window} candles, chart has {length}"
        )
        self.window = window
        self.length = length


class CandleNotInChartError(ChartError):
    """Exception raised when a candle does not belong to the chart it is navigated in."""
    pass


class AnalyzerNotReadyError(LeprechaunError):
    """Exception raised when a signal is requested before any OHLC data was supplied."""
    pass
