"""
Pytest configuration and fixtures for Leprechaun tests.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest
from unittest.mock import patch

from leprechaun.config import Config


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def mock_env_vars() -> Generator[dict, None, None]:
    """Mock environment variables for testing."""
    test_env = {
        "LEPRECHAUN_PATTERN_WINDOW": "7",
        "LEPRECHAUN_LOOKBACK": "2",
        "LEPRECHAUN_TREND_THRESHOLD": "0",
        "LEPRECHAUN_DEDUPLICATE": "false",
        "LEPRECHAUN_TRADE_MODE": "contrarian",
        "LEPRECHAUN_INTERVAL": "4h",
        "LEPRECHAUN_ANALYSIS_PERIOD_HOURS": "48",
        "LOG_LEVEL": "DEBUG",
    }

    with patch.dict(os.environ, test_env, clear=False):
        yield test_env


@pytest.fixture
def test_config(mock_env_vars: dict) -> Config:
    """Create a test configuration instance."""
    return Config.load_from_env()


@pytest.fixture
def sample_bars() -> List[dict]:
    """
    Five hourly bars ending in a bearish engulfing of the fourth bar.

    Bar 3 is bullish and bar 4 is bearish with a wider high/low range.
    """
    rows = [
        (10, 10.5, 7.5, 8),
        (8, 12.5, 7.5, 12),
        (12, 12.5, 10.5, 11),
        (11, 14.5, 10.5, 14),
        (14, 15.5, 8.5, 9),
    ]
    return [
        {
            "open": o,
            "high": h,
            "low": l,
            "close": c,
            "volume": 1.5,
            "start_time": f"2024-01-01T{hour:02d}:00:00Z",
        }
        for hour, (o, h, l, c) in enumerate(rows)
    ]


@pytest.fixture
def bars_file(temp_dir: Path, sample_bars: List[dict]) -> Path:
    """Write the sample bars to a JSON file."""
    path = temp_dir / "bars.json"
    path.write_text(json.dumps(sample_bars))
    return path
