"""Market data layer.

Re-exports domain types, errors and loaders for convenient imports:
    from kline.market import Bar, load_bars, DataLoadError
"""

from kline.market.errors import DataLoadError, KlineError
from kline.market.loader import (
    dump_bars,
    futures_for_date,
    load_bars,
    load_futures_map,
    parse_bars,
    parse_futures,
    parse_futures_map,
)
from kline.market.types import (
    Bar,
    Futures,
    FuturesByDate,
    KlineChartData,
    KlineStats,
    Period,
)

__all__ = [
    "Bar",
    "DataLoadError",
    "Futures",
    "FuturesByDate",
    "KlineChartData",
    "KlineError",
    "KlineStats",
    "Period",
    "dump_bars",
    "futures_for_date",
    "load_bars",
    "load_futures_map",
    "parse_bars",
    "parse_futures",
    "parse_futures_map",
]
