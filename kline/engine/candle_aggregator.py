"""Candle aggregation from fine-grained bars to chart-period candles.

Push-based: call process_bar() with each incoming bar.
Returns a completed candle when a bar from a later window arrives.
Call flush() to emit the partial candle of the current window.
"""

from __future__ import annotations

from collections.abc import Iterable

from kline.market.types import Bar, Period


class CandleAggregator:
    """Aggregates bars into candles of one chart period.

    Windows are aligned to the epoch: a bar belongs to the window starting
    at timestamp - timestamp % interval_ms. For 5m that is :00-:04,
    :05-:09, etc. Daily windows are UTC days.
    """

    def __init__(self, period: Period | str) -> None:
        try:
            self.period = Period(period)
        except ValueError:
            raise ValueError(
                f"period must be one of {[p.value for p in Period]}, got {period!r}"
            ) from None
        self._buffer: list[Bar] = []
        self._current_window_start: int | None = None
        self._last_bar_timestamp: int | None = None

    @property
    def interval_ms(self) -> int:
        return self.period.interval_ms

    def process_bar(self, bar: Bar) -> Bar | None:
        """Process one bar. Returns the completed candle or None."""
        # Deduplication
        if (
            self._last_bar_timestamp is not None
            and bar.timestamp <= self._last_bar_timestamp
        ):
            return None
        self._last_bar_timestamp = bar.timestamp

        # 1-min pass-through
        if self.period is Period.M1:
            return bar

        window_start = self._calculate_window_start(bar.timestamp)

        # New window with buffered bars: emit the old candle
        if (
            self._current_window_start is not None
            and window_start != self._current_window_start
        ):
            candle = self._emit_candle()
            self._buffer = [bar]
            self._current_window_start = window_start
            return candle

        self._current_window_start = window_start
        self._buffer.append(bar)
        return None

    def flush(self) -> Bar | None:
        """Flush any buffered bars as a partial candle."""
        if not self._buffer:
            return None
        candle = self._emit_candle()
        self._buffer = []
        self._current_window_start = None
        return candle

    def _emit_candle(self) -> Bar:
        """Build a candle from the current buffer."""
        bars = self._buffer
        return Bar(
            timestamp=(
                self._current_window_start
                if self._current_window_start is not None
                else bars[0].timestamp
            ),
            open=bars[0].open,
            high=max(b.high for b in bars),
            low=min(b.low for b in bars),
            close=bars[-1].close,
            volume=sum(b.volume for b in bars),
        )

    def _calculate_window_start(self, timestamp: int) -> int:
        return timestamp - timestamp % self.interval_ms


def aggregate_bars(bars: Iterable[Bar], period: Period | str) -> list[Bar]:
    """Aggregate a whole bar sequence, including the trailing partial candle."""
    aggregator = CandleAggregator(period)
    candles: list[Bar] = []
    for bar in bars:
        candle = aggregator.process_bar(bar)
        if candle is not None:
            candles.append(candle)
    tail = aggregator.flush()
    if tail is not None:
        candles.append(tail)
    return candles
