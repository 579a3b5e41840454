"""
Unit tests for configuration management.
"""

import os
from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest

from leprechaun.config import AnalysisConfig, ChartConfig, Config
from leprechaun.exceptions import ConfigurationError
from leprechaun.models.market_data import Timeframe
from leprechaun.models.signals import TradeMode


class TestConfig:
    """Test configuration loading and validation."""

    def test_config_loads_defaults(self) -> None:
        """Test that configuration loads with default values."""
        config = Config()

        assert config.chart.pattern_window == 5
        assert config.chart.lookback == 3
        assert config.chart.trend_threshold == Decimal('1.0')
        assert config.chart.deduplicate is True
        assert config.analysis.mode is TradeMode.TREND_FOLLOWING
        assert config.analysis.interval is Timeframe.ONE_HOUR
        assert config.logging.level == "INFO"
        assert config.logging.file_path is None

    def test_config_loads_from_env(self, mock_env_vars: dict) -> None:
        """Test that configuration loads from environment variables."""
        config = Config.load_from_env()

        assert config.chart.pattern_window == 7
        assert config.chart.lookback == 2
        assert config.chart.trend_threshold == Decimal('0')
        assert config.chart.deduplicate is False
        assert config.analysis.mode is TradeMode.CONTRARIAN
        assert config.analysis.interval is Timeframe.FOUR_HOURS
        assert config.analysis.analysis_period_hours == 48
        assert config.logging.level == "DEBUG"

    def test_config_loads_env_file(self, temp_dir) -> None:
        """Test that an explicit .env file is read."""
        env_file = temp_dir / ".env"
        env_file.write_text("LEPRECHAUN_PATTERN_WINDOW=9\n")

        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("LEPRECHAUN_PATTERN_WINDOW", None)
            config = Config.load_from_env(str(env_file))

            assert config.chart.pattern_window == 9

    @pytest.mark.parametrize("name,value", [
        ("LEPRECHAUN_PATTERN_WINDOW", "five"),
        ("LEPRECHAUN_PATTERN_WINDOW", "0"),
        ("LEPRECHAUN_TREND_THRESHOLD", "one"),
        ("LEPRECHAUN_TRADE_MODE", "random"),
        ("LEPRECHAUN_INTERVAL", "5m"),
    ])
    def test_invalid_values_raise_configuration_error(self, name: str, value: str) -> None:
        """Test that invalid environment values are reported as ConfigurationError."""
        with patch.dict(os.environ, {name: value}, clear=False):
            with pytest.raises(ConfigurationError):
                Config.load_from_env()

    def test_chart_config_validation(self) -> None:
        """Test chart configuration validation."""
        with pytest.raises(ValueError):
            ChartConfig(pattern_window=0)

        with pytest.raises(ValueError):
            ChartConfig(lookback=0)

    def test_analysis_options(self) -> None:
        """Test conversion of the analysis section into analyzer options."""
        options = AnalysisConfig(
            mode=TradeMode.CONTRARIAN,
            interval=Timeframe.FOUR_HOURS,
            analysis_period_hours=48
        ).to_options()

        assert options.mode is TradeMode.CONTRARIAN
        assert options.interval is Timeframe.FOUR_HOURS
        assert options.analysis_period == timedelta(hours=48)
        assert options.data_points == 12
