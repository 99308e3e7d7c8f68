"""Chart snapshot: everything the K-line view derives from one bar sequence."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from kline.engine.indicators import (
    DEFAULT_RSI_PERIOD,
    RSI_NEUTRAL,
    RSI_OVERBOUGHT,
    RSI_OVERSOLD,
    RsiZone,
    compute_rsi,
    compute_sma,
    compute_stats,
    rsi_zone,
)
from kline.market.types import Bar, KlineStats
from kline.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_SMA_PERIOD = 20


@dataclass(frozen=True)
class ChartSnapshot:
    """Stats and indicator series for one rendering of a chart.

    sma and rsi are aligned with the input bars. current_rsi is the last
    RSI entry, or RSI_NEUTRAL when there are no bars.
    """

    stats: KlineStats
    sma: list[float]
    rsi: list[float]
    current_rsi: float
    rsi_zone: RsiZone
    price_range: float
    bar_count: int


def build_chart(
    bars: Sequence[Bar],
    sma_period: int = DEFAULT_SMA_PERIOD,
    rsi_period: int = DEFAULT_RSI_PERIOD,
    overbought: float = RSI_OVERBOUGHT,
    oversold: float = RSI_OVERSOLD,
) -> ChartSnapshot:
    """Compute stats, SMA and RSI for a bar sequence in one pass of calls."""
    stats = compute_stats(bars)
    sma = compute_sma(bars, sma_period)
    rsi = compute_rsi(bars, rsi_period)
    current_rsi = rsi[-1] if rsi else RSI_NEUTRAL
    zone = rsi_zone(current_rsi, overbought=overbought, oversold=oversold)

    log.debug(
        "chart_built",
        bar_count=len(bars),
        sma_period=sma_period,
        rsi_period=rsi_period,
        current_rsi=current_rsi,
        rsi_zone=zone.value,
    )
    return ChartSnapshot(
        stats=stats,
        sma=sma,
        rsi=rsi,
        current_rsi=current_rsi,
        rsi_zone=zone,
        price_range=stats.high - stats.low,
        bar_count=len(bars),
    )
