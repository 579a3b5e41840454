"""
Unit tests for the command-line interface.
"""

import json

import pytest
from click.testing import CliRunner

from leprechaun import __version__
from leprechaun.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCLI:
    """Test the leprechaun command group."""

    def test_version(self, runner):
        """Test the version option."""
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner):
        """Test that the group help lists every command."""
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        for command in ("scan", "trend", "signal"):
            assert command in result.output


class TestScanCommand:
    """Test pattern scanning from a bars file."""

    def test_scan(self, runner, bars_file):
        """Test that the bearish engulfing in the sample bars is reported."""
        result = runner.invoke(main, ["scan", str(bars_file)])

        assert result.exit_code == 0
        assert "Bearish patterns" in result.output
        assert "BearishEngulfing" in result.output
        assert "Bullish patterns" not in result.output

    def test_scan_without_candle_table(self, runner, bars_file):
        """Test hiding the per-candle table."""
        result = runner.invoke(main, ["scan", str(bars_file), "--no-candles"])

        assert result.exit_code == 0
        assert "Candles" not in result.output
        assert "BearishEngulfing" in result.output

    def test_scan_no_patterns(self, runner, temp_dir, sample_bars):
        """Test the message printed when nothing matches."""
        sample_bars[-1].update({"open": 14, "close": 16, "high": 16.5, "low": 13.5})
        path = temp_dir / "quiet.json"
        path.write_text(json.dumps(sample_bars))

        result = runner.invoke(main, ["scan", str(path), "--no-candles"])

        assert result.exit_code == 0
        assert "No patterns detected" in result.output

    def test_scan_window_too_large(self, runner, bars_file):
        """Test that an oversized window exits with an error."""
        result = runner.invoke(main, ["scan", str(bars_file), "--window", "10"])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_scan_invalid_file(self, runner, temp_dir):
        """Test that a file without a bar array exits with an error."""
        path = temp_dir / "bad.json"
        path.write_text(json.dumps({"open": 1}))

        result = runner.invoke(main, ["scan", str(path)])

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestTrendCommand:
    """Test trend scoring of closing prices."""

    def test_bullish(self, runner):
        """Test a rising series."""
        result = runner.invoke(main, ["trend", "1", "2", "3"])

        assert result.exit_code == 0
        assert "Trend: Bullish" in result.output

    def test_indifferent(self, runner):
        """Test a series with as many rises as drops."""
        result = runner.invoke(main, ["trend", "1", "2", "1"])

        assert result.exit_code == 0
        assert "Trend: Indifferent" in result.output

    def test_invalid_price(self, runner):
        """Test that a non-numeric price exits with an error."""
        result = runner.invoke(main, ["trend", "1", "abc"])

        assert result.exit_code == 1
        assert "invalid price" in result.output

    def test_non_finite_price(self, runner):
        """Test that a NaN price exits with an error instead of a traceback."""
        result = runner.invoke(main, ["trend", "nan", "1"])

        assert result.exit_code == 1
        assert "invalid price" in result.output
        assert isinstance(result.exception, SystemExit)


class TestSignalCommand:
    """Test signal emission from a bars file."""

    def test_trend_following(self, runner, bars_file):
        """Test the default trend-following mode."""
        result = runner.invoke(main, ["signal", str(bars_file)])

        assert result.exit_code == 0
        assert "Signal: short" in result.output

    def test_contrarian(self, runner, bars_file):
        """Test the contrarian mode option."""
        result = runner.invoke(main, ["signal", str(bars_file), "--mode", "contrarian"])

        assert result.exit_code == 0
        assert "Signal: long" in result.output
