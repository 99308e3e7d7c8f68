"""Click CLI commands for kline."""

from __future__ import annotations

import json
import uuid
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

import click
from pydantic import ValidationError

from kline.config import AppConfig
from kline.engine.candle_aggregator import aggregate_bars
from kline.engine.chart import ChartSnapshot, build_chart
from kline.engine.indicators import compute_rsi, compute_sma, compute_stats
from kline.market.errors import KlineError
from kline.market.format import (
    format_change_percent,
    format_clock,
    format_price,
    is_falling,
    is_rising,
)
from kline.market.loader import (
    dump_bars,
    futures_for_date,
    load_bars,
    load_futures_map,
    parse_futures,
)
from kline.market.types import Bar, KlineChartData, Period
from kline.utils.logging import bind_chart_context, set_run_id, setup_logging
from kline.utils.time import (
    calendar_days,
    format_date,
    is_same_day,
    today_string,
    utc_now,
)

_PERIOD_CHOICE = click.Choice([p.value for p in Period])
_BAR_FILE = click.Path(dir_okay=False, path_type=Path)
_WEEKDAY_HEADER = "Su Mo Tu We Th Fr Sa"


def _load(path: Path) -> list[Bar]:
    try:
        return load_bars(path)
    except KlineError as e:
        raise click.ClickException(str(e)) from e


def _trend(change_percent: float) -> str:
    if is_rising(change_percent):
        return "up"
    if is_falling(change_percent):
        return "down"
    return "flat"


def _echo_json(value: object) -> None:
    click.echo(json.dumps(value))


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """kline: OHLC statistics and indicators for futures K-line data."""
    try:
        cfg = AppConfig()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    setup_logging(level=cfg.log_level, log_format=cfg.log_format)
    set_run_id(uuid.uuid4().hex[:12])
    ctx.obj = cfg


@cli.command()
@click.argument("bar_file", type=_BAR_FILE)
def stats(bar_file: Path) -> None:
    """Print high, low, average close and total volume as JSON."""
    _echo_json(asdict(compute_stats(_load(bar_file))))


@cli.command()
@click.argument("bar_file", type=_BAR_FILE)
@click.option(
    "--period", required=True, type=click.IntRange(min=1), help="SMA window size."
)
def sma(bar_file: Path, period: int) -> None:
    """Print the simple moving average series of close as JSON."""
    _echo_json(compute_sma(_load(bar_file), period))


@cli.command()
@click.argument("bar_file", type=_BAR_FILE)
@click.option(
    "--period",
    type=click.IntRange(min=1),
    default=None,
    help="RSI window size (default: from config, 14).",
)
@click.pass_obj
def rsi(cfg: AppConfig, bar_file: Path, period: int | None) -> None:
    """Print the relative strength index series as JSON."""
    _echo_json(compute_rsi(_load(bar_file), period or cfg.indicators.rsi_period))


@cli.command()
@click.argument("bar_file", type=_BAR_FILE)
@click.option(
    "--interval",
    required=True,
    type=_PERIOD_CHOICE,
    help="Target candle period.",
)
def aggregate(bar_file: Path, interval: str) -> None:
    """Aggregate bars into candles of a longer period and print them as JSON."""
    click.echo(dump_bars(aggregate_bars(_load(bar_file), interval)))


@cli.command()
@click.argument("bar_file", type=_BAR_FILE)
@click.option(
    "--interval",
    type=_PERIOD_CHOICE,
    default=None,
    help="Candle period (default: from config, 1m).",
)
@click.option("--sma-period", type=click.IntRange(min=1), default=None)
@click.option("--rsi-period", type=click.IntRange(min=1), default=None)
@click.option(
    "--futures",
    "futures_json",
    default=None,
    help="Instrument as JSON, e.g. the list entry the chart was opened from.",
)
@click.pass_obj
def chart(
    cfg: AppConfig,
    bar_file: Path,
    interval: str | None,
    sma_period: int | None,
    rsi_period: int | None,
    futures_json: str | None,
) -> None:
    """Summarize a K-line chart: stats, latest SMA and RSI."""
    period = Period(interval) if interval else cfg.chart.interval
    bars = aggregate_bars(_load(bar_file), period)
    if cfg.chart.bar_limit:
        bars = bars[-cfg.chart.bar_limit :]

    futures = parse_futures(futures_json)
    if futures_json and futures is None:
        click.echo("Warning: could not parse --futures, showing bars only.", err=True)

    data = KlineChartData(
        futures_code=futures.code if futures else "-",
        futures_name=futures.name if futures else "-",
        period=period,
        data=tuple(bars),
    )
    bind_chart_context(data.futures_code, data.period.value)

    snapshot = build_chart(
        data.data,
        sma_period=sma_period or cfg.indicators.sma_period,
        rsi_period=rsi_period or cfg.indicators.rsi_period,
        overbought=cfg.indicators.rsi_overbought,
        oversold=cfg.indicators.rsi_oversold,
    )

    if futures is not None:
        click.echo(
            f"{futures.name} ({futures.code})  {format_price(futures.price)}  "
            f"{format_change_percent(futures.change_percent)} "
            f"{_trend(futures.change_percent)}"
        )
    _print_chart(data, snapshot, sma_period or cfg.indicators.sma_period)


def _print_chart(data: KlineChartData, snapshot: ChartSnapshot, sma_period: int) -> None:
    """Format and print a chart snapshot."""
    s = snapshot.stats
    click.echo(f"Interval: {data.period.value}  Bars: {snapshot.bar_count}")
    if not data.data:
        click.echo("No bars.")
        return

    click.echo(
        f"Range:    {format_clock(data.data[0].timestamp)} - "
        f"{format_clock(data.data[-1].timestamp)} UTC"
    )
    click.echo(f"High:     {format_price(s.high)}")
    click.echo(f"Low:      {format_price(s.low)}")
    click.echo(f"Avg:      {format_price(s.avg)}")
    click.echo(f"Volume:   {s.volume:,.0f}")

    if snapshot.bar_count >= sma_period:
        click.echo(f"SMA({sma_period}):  {format_price(snapshot.sma[-1])}")
    else:
        click.echo(f"SMA({sma_period}):  warming up")
    click.echo(
        f"RSI:      {snapshot.current_rsi:.2f} ({snapshot.rsi_zone.value})"
    )


@cli.command(name="futures")
@click.argument("futures_file", type=_BAR_FILE)
@click.argument("date", type=click.DateTime(formats=["%Y-%m-%d"]), required=False)
def futures_cmd(futures_file: Path, date: datetime | None) -> None:
    """List the instruments traded on DATE (YYYY-MM-DD, default today)."""
    day = format_date(date) if date else today_string()
    try:
        listed = futures_for_date(load_futures_map(futures_file), day)
    except KlineError as e:
        raise click.ClickException(str(e)) from e

    if not listed:
        click.echo(f"No instruments for {day}.")
        return

    today = date is None or is_same_day(date, utc_now())
    click.echo(f"{day} (today)" if today else day)
    click.echo(f"{'Name':<12} {'Code':<8} {'Price':>10} {'Change':>8}  Hours")
    for f in listed:
        click.echo(
            f"{f.name:<12} {f.code:<8} {format_price(f.price):>10} "
            f"{format_change_percent(f.change_percent):>8}  {f.trading_hours}"
        )


@cli.command(name="calendar")
@click.argument("year", type=click.IntRange(min=1, max=9999))
@click.argument("month", type=click.IntRange(min=1, max=12))
def calendar_cmd(year: int, month: int) -> None:
    """Print the month grid used by the date picker."""
    click.echo(f"{year:04d}-{month:02d}")
    click.echo(_WEEKDAY_HEADER)
    for week in calendar_days(year, month):
        click.echo(" ".join(f"{d:2d}" if d else "  " for d in week).rstrip())


@cli.command()
@click.pass_obj
def config(cfg: AppConfig) -> None:
    """Show current configuration."""
    click.echo("=== kline Configuration ===\n")

    click.echo(f"Log Level:    {cfg.log_level}")
    click.echo(f"Log Format:   {cfg.log_format}")
    click.echo("")

    click.echo("[Indicators]")
    click.echo(f"  SMA Period:      {cfg.indicators.sma_period}")
    click.echo(f"  RSI Period:      {cfg.indicators.rsi_period}")
    click.echo(f"  RSI Overbought:  {cfg.indicators.rsi_overbought}")
    click.echo(f"  RSI Oversold:    {cfg.indicators.rsi_oversold}")
    click.echo("")

    click.echo("[Chart]")
    click.echo(f"  Interval:   {cfg.chart.interval.value}")
    click.echo(f"  Bar Limit:  {cfg.chart.bar_limit}")
