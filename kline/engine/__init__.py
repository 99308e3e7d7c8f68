"""Engine layer: indicator calculation, candle aggregation, chart snapshots."""

from kline.engine.candle_aggregator import CandleAggregator, aggregate_bars
from kline.engine.chart import ChartSnapshot, build_chart
from kline.engine.indicators import (
    RsiZone,
    compute_rsi,
    compute_sma,
    compute_stats,
    rsi_zone,
)

__all__ = [
    "CandleAggregator",
    "ChartSnapshot",
    "RsiZone",
    "aggregate_bars",
    "build_chart",
    "compute_rsi",
    "compute_sma",
    "compute_stats",
    "rsi_zone",
]
