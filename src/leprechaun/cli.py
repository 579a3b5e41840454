"""
Command-line interface for the Leprechaun candlestick engine.
"""

import json
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, List, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from . import __version__
from .analysis import CandleAnalyzer
from .charts import CandleChart, LineChart
from .config import Config
from .exceptions import LeprechaunError
from .logger import configure_logging
from .models import PatternRecord, TradeMode, Trend

console = Console()

TREND_STYLES = {
    Trend.BULLISH: "green",
    Trend.BEARISH: "red",
    Trend.INDIFFERENT: "yellow",
}


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load_bars(path: Path) -> List[Any]:
    with open(path, 'r') as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of bars")
    return data


def _chart_config(config: Config, window: Optional[int], threshold: Optional[str], no_dedup: bool):
    updates = {}
    if window is not None:
        updates['pattern_window'] = window
    if threshold is not None:
        updates['trend_threshold'] = Decimal(threshold)
    if no_dedup:
        updates['deduplicate'] = False
    return config.chart.model_copy(update=updates)


def _styled(trend: Trend) -> str:
    return f"[{TREND_STYLES[trend]}]{trend.value}[/{TREND_STYLES[trend]}]"


def _pattern_table(title: str, records: List[PatternRecord]) -> Table:
    table = Table(title=title)
    table.add_column("Pattern", style="bold")
    table.add_column("Anchor", justify="right")
    table.add_column("Preceding trend")
    for record in records:
        table.add_row(record.kind.value, str(record.anchor_index), _styled(record.preceding_trend))
    return table


@click.group()
@click.version_option(version=__version__, prog_name="leprechaun")
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a .env file"
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging"
)
@click.pass_context
def main(ctx: click.Context, env_file: Optional[str], verbose: bool) -> None:
    """
    Leprechaun: candlestick charting and pattern detection.
    """
    ctx.ensure_object(dict)

    try:
        ctx.obj["config"] = Config.load_from_env(env_file)
    except LeprechaunError as e:
        _fail(f"loading configuration: {e}")

    if verbose:
        ctx.obj["config"].logging.level = "DEBUG"
    if verbose or ctx.obj["config"].logging.file_path:
        configure_logging(ctx.obj["config"].logging)


@main.command()
@click.argument("bars_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--window", "-w", type=click.IntRange(min=1), help="Number of trailing candles to scan")
@click.option("--threshold", "-t", help="Ranges below this value are bearish")
@click.option("--no-dedup", is_flag=True, help="Record repeated detections again")
@click.option("--candles/--no-candles", default=True, help="Show the per-candle classification")
@click.pass_context
def scan(ctx: click.Context, bars_file: Path, window: Optional[int], threshold: Optional[str],
         no_dedup: bool, candles: bool) -> None:
    """Scan the most recent bars in BARS_FILE for candlestick patterns."""
    config: Config = ctx.obj["config"]

    try:
        chart = CandleChart.from_bars(
            _load_bars(bars_file),
            _chart_config(config, window, threshold, no_dedup)
        )
        chart.detect_patterns()
    except (LeprechaunError, ValidationError, ValueError, ArithmeticError) as e:
        _fail(str(e))

    if candles:
        table = Table(title=f"Candles ({len(chart)})")
        table.add_column("#", justify="right")
        table.add_column("Start")
        table.add_column("Open", justify="right")
        table.add_column("Close", justify="right")
        table.add_column("Trend")
        table.add_column("Doji")
        table.add_column("Hammer")
        for candle in chart:
            table.add_row(
                str(candle.index),
                candle.start_time.strftime("%Y-%m-%d %H:%M"),
                f"{candle.open:.2f}",
                f"{candle.close:.2f}",
                _styled(candle.trend),
                "yes" if candle.is_doji else "",
                "yes" if candle.is_hammer else "",
            )
        console.print(table)

    records = list(chart.bullish_patterns) + list(chart.bearish_patterns)
    if not records:
        console.print("No patterns detected")
        return

    if chart.bullish_patterns:
        console.print(_pattern_table("Bullish patterns", list(chart.bullish_patterns)))
    if chart.bearish_patterns:
        console.print(_pattern_table("Bearish patterns", list(chart.bearish_patterns)))


@main.command()
@click.argument("prices", nargs=-1, required=True)
def trend(prices) -> None:
    """Score the overall trend of a series of closing PRICES."""
    try:
        line_trend = LineChart(prices).trend
    except (ArithmeticError, ValueError) as e:
        _fail(f"invalid price: {e}")
    console.print(f"Trend: {_styled(line_trend)}")


@main.command()
@click.argument("bars_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in TradeMode]),
    help="How trends are turned into signals"
)
@click.option("--window", "-w", type=click.IntRange(min=1), help="Number of trailing candles to scan")
@click.pass_context
def signal(ctx: click.Context, bars_file: Path, mode: Optional[str], window: Optional[int]) -> None:
    """Emit a long/short/wait signal for the bars in BARS_FILE."""
    config: Config = ctx.obj["config"]

    options = config.analysis.to_options()
    if mode:
        options.mode = TradeMode(mode)

    analyzer = CandleAnalyzer(options, _chart_config(config, window, None, False))
    try:
        analyzer.set_ohlc(_load_bars(bars_file))
        result = analyzer.emit()
    except (LeprechaunError, ValidationError, ValueError, ArithmeticError) as e:
        _fail(str(e))

    console.print(f"Signal: [bold]{result.value}[/bold]")


if __name__ == "__main__":
    main()
