"""
Configuration management for the Leprechaun candlestick engine.
"""

import os
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError
from .models.market_data import Timeframe
from .models.signals import AnalysisOptions, TradeMode


class ChartConfig(BaseModel):
    """Candle chart and pattern matcher settings."""

    pattern_window: int = Field(default=5, ge=1)
    lookback: int = Field(default=3, ge=1)
    trend_threshold: Decimal = Field(default=Decimal('1.0'))
    deduplicate: bool = Field(default=True)


class AnalysisConfig(BaseModel):
    """Signal analysis settings."""

    mode: TradeMode = Field(default=TradeMode.TREND_FOLLOWING)
    interval: Timeframe = Field(default=Timeframe.ONE_HOUR)
    analysis_period_hours: int = Field(default=24, ge=1)

    def to_options(self) -> AnalysisOptions:
        return AnalysisOptions(
            analysis_period=self.analysis_period_hours * 3600,
            interval=self.interval,
            mode=self.mode,
        )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")
    file_path: Optional[str] = Field(default=None)
    max_size: str = Field(default="10MB")
    backup_count: int = Field(default=5)


class Config(BaseModel):
    """Main configuration class."""

    chart: ChartConfig = Field(default_factory=ChartConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load_from_env(cls, env_file: Optional[str] = None) -> "Config":
        """Load configuration from environment variables."""
        if env_file:
            load_dotenv(env_file)
        else:
            env_path = Path(".env")
            if env_path.exists():
                load_dotenv(env_path)

        try:
            chart = ChartConfig(
                pattern_window=int(os.getenv("LEPRECHAUN_PATTERN_WINDOW", "5")),
                lookback=int(os.getenv("LEPRECHAUN_LOOKBACK", "3")),
                trend_threshold=Decimal(os.getenv("LEPRECHAUN_TREND_THRESHOLD", "1.0")),
                deduplicate=os.getenv("LEPRECHAUN_DEDUPLICATE", "true").lower() == "true"
            )

            analysis = AnalysisConfig(
                mode=TradeMode(os.getenv("LEPRECHAUN_TRADE_MODE", "trend_following").lower()),
                interval=Timeframe(os.getenv("LEPRECHAUN_INTERVAL", "1h")),
                analysis_period_hours=int(os.getenv("LEPRECHAUN_ANALYSIS_PERIOD_HOURS", "24"))
            )

            logging = LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                file_path=os.getenv("LOG_FILE_PATH") or None,
                max_size=os.getenv("LOG_MAX_SIZE", "10MB"),
                backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5"))
            )
        except (ValueError, InvalidOperation, ValidationError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        return cls(chart=chart, analysis=analysis, logging=logging)
