"""Market domain types shared across the engine, loader and CLI.

Frozen dataclasses for value objects. Prices and volumes are float;
timestamps are integer milliseconds since the Unix epoch.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Period(str, Enum):
    """K-line chart periods."""

    M1 = "1m"
    M5 = "5m"
    M15 = "15m"
    H1 = "1h"
    D1 = "1d"

    @property
    def interval_ms(self) -> int:
        """Length of one candle of this period in milliseconds."""
        return _PERIOD_MS[self]


_PERIOD_MS = {
    Period.M1: 60_000,
    Period.M5: 5 * 60_000,
    Period.M15: 15 * 60_000,
    Period.H1: 60 * 60_000,
    Period.D1: 24 * 60 * 60_000,
}


# --- Value Objects (frozen) ---


@dataclass(frozen=True)
class Bar:
    """OHLCV bar (candlestick) data."""

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float


@dataclass(frozen=True)
class KlineStats:
    """Aggregate statistics over a bar sequence.

    All fields are 0 for an empty sequence.
    """

    high: float
    low: float
    avg: float
    volume: float


@dataclass(frozen=True)
class Futures:
    """One futures instrument as listed for a trading date."""

    id: str
    code: str
    name: str
    price: float
    change: float
    change_percent: float
    trading_hours: str
    date: str


@dataclass(frozen=True)
class KlineChartData:
    """Bars for one instrument at one chart period."""

    futures_code: str
    futures_name: str
    period: Period
    data: tuple[Bar, ...]


# Instruments listed per trading date, keyed by YYYY-MM-DD
FuturesByDate = dict[str, list[Futures]]
