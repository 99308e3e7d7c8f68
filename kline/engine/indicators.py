"""OHLC indicator engine: stats, SMA and RSI over an ordered bar sequence.

All functions are pure. Series outputs have the same length as the input
and stay positionally aligned with it; entries inside an indicator's
warm-up window hold a placeholder constant instead of being omitted, so
charting code can index series and bars together.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from kline.market.types import Bar, KlineStats

NO_DATA = 0.0
SMA_WARMUP = 0.0
RSI_NEUTRAL = 50.0
DEFAULT_RSI_PERIOD = 14
RSI_OVERBOUGHT = 70.0
RSI_OVERSOLD = 30.0


class RsiZone(str, Enum):
    """Display classification of an RSI value."""

    OVERBOUGHT = "overbought"
    NEUTRAL = "neutral"
    OVERSOLD = "oversold"


def _check_period(name: str, period: int) -> None:
    if period < 1:
        raise ValueError(f"{name} period must be >= 1, got {period}")


def compute_stats(bars: Sequence[Bar]) -> KlineStats:
    """Highest high, lowest low, mean close and total volume.

    An empty sequence yields NO_DATA in every field.
    """
    if not bars:
        return KlineStats(high=NO_DATA, low=NO_DATA, avg=NO_DATA, volume=NO_DATA)

    closes = [b.close for b in bars]
    return KlineStats(
        high=max(b.high for b in bars),
        low=min(b.low for b in bars),
        avg=sum(closes) / len(closes),
        volume=sum(b.volume for b in bars),
    )


def compute_sma(bars: Sequence[Bar], period: int) -> list[float]:
    """Simple moving average of close over a trailing window.

    Entry i is the mean of closes[i - period + 1 : i + 1]. The first
    period - 1 entries are SMA_WARMUP.

    Raises:
        ValueError: If period < 1.
    """
    _check_period("SMA", period)
    closes = [b.close for b in bars]

    sma: list[float] = []
    for i in range(len(closes)):
        if i < period - 1:
            sma.append(SMA_WARMUP)
        else:
            window = closes[i - period + 1 : i + 1]
            sma.append(sum(window) / period)
    return sma


def compute_rsi(bars: Sequence[Bar], period: int = DEFAULT_RSI_PERIOD) -> list[float]:
    """Relative strength index over the last `period` close-to-close changes.

    Uses simple (non-smoothed) averages of gains and losses. The first
    `period` entries are RSI_NEUTRAL. A window with gains and no losses
    is 100; a window with neither (flat prices) is RSI_NEUTRAL.

    Raises:
        ValueError: If period < 1.
    """
    _check_period("RSI", period)
    closes = [b.close for b in bars]

    rsi: list[float] = []
    for i in range(len(closes)):
        if i < period:
            rsi.append(RSI_NEUTRAL)
            continue

        gains = 0.0
        losses = 0.0
        for j in range(i - period + 1, i + 1):
            change = closes[j] - closes[j - 1]
            if change > 0:
                gains += change
            elif change < 0:
                losses -= change

        avg_gain = gains / period
        avg_loss = losses / period
        if avg_loss == 0:
            rsi.append(100.0 if avg_gain > 0 else RSI_NEUTRAL)
            continue

        rs = avg_gain / avg_loss
        rsi.append(100 - 100 / (1 + rs))
    return rsi


def rsi_zone(
    value: float,
    overbought: float = RSI_OVERBOUGHT,
    oversold: float = RSI_OVERSOLD,
) -> RsiZone:
    """Classify an RSI value for display. Thresholds are exclusive."""
    if value > overbought:
        return RsiZone.OVERBOUGHT
    if value < oversold:
        return RsiZone.OVERSOLD
    return RsiZone.NEUTRAL
