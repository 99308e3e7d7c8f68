"""Display formatting for prices, changes and bar timestamps."""

from __future__ import annotations

from datetime import UTC, tzinfo

from kline.utils.time import from_epoch_ms


def format_price(price: float) -> str:
    """Two decimal places, no grouping."""
    return f"{price:.2f}"


def format_change_percent(percent: float) -> str:
    """Signed percentage: +1.23%, -0.50%, 0.00%."""
    sign = "+" if percent > 0 else ""
    return f"{sign}{percent:.2f}%"


def is_rising(change_percent: float) -> bool:
    return change_percent > 0


def is_falling(change_percent: float) -> bool:
    return change_percent < 0


def format_clock(timestamp_ms: int, tz: tzinfo = UTC) -> str:
    """HH:MM label for a bar timestamp."""
    return from_epoch_ms(timestamp_ms, tz).strftime("%H:%M")


def format_month_day(timestamp_ms: int, tz: tzinfo = UTC) -> str:
    """MM-DD label for a bar timestamp."""
    return from_epoch_ms(timestamp_ms, tz).strftime("%m-%d")
