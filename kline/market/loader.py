"""JSON loading for bar sequences and futures payloads.

Bars are validated for shape and types with pydantic, then converted to
domain Bar objects at the boundary. Only chronological order is checked;
OHLC consistency (low <= open/close <= high) is left to the producer.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import asdict
from pathlib import Path

from pydantic import AliasChoices, BaseModel, Field, TypeAdapter, ValidationError

from kline.market.errors import DataLoadError
from kline.market.types import Bar, Futures, FuturesByDate
from kline.utils.logging import get_logger

log = get_logger(__name__)

_PAYLOAD_SOURCE = "<payload>"


class BarRecord(BaseModel):
    """Wire shape of one bar."""

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float

    def to_bar(self) -> Bar:
        return Bar(
            timestamp=self.timestamp,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.volume,
        )


class FuturesRecord(BaseModel):
    """Wire shape of one futures instrument. Accepts camelCase or snake_case."""

    id: str
    code: str
    name: str
    price: float
    change: float
    change_percent: float = Field(
        validation_alias=AliasChoices("changePercent", "change_percent"),
    )
    trading_hours: str = Field(
        validation_alias=AliasChoices("tradingHours", "trading_hours"),
    )
    date: str

    def to_futures(self) -> Futures:
        return Futures(
            id=self.id,
            code=self.code,
            name=self.name,
            price=self.price,
            change=self.change,
            change_percent=self.change_percent,
            trading_hours=self.trading_hours,
            date=self.date,
        )


_BAR_LIST = TypeAdapter(list[BarRecord])
_FUTURES_MAP = TypeAdapter(dict[str, list[FuturesRecord]])


def parse_bars(payload: str | bytes, source: str = _PAYLOAD_SOURCE) -> list[Bar]:
    """Parse a JSON array of bars, oldest first.

    Raises:
        DataLoadError: If the payload is not valid JSON, does not match the
            bar shape, or timestamps are not strictly increasing.
    """
    try:
        records = _BAR_LIST.validate_json(payload)
    except ValidationError as e:
        raise DataLoadError(source, _summarize(e)) from e

    bars = [r.to_bar() for r in records]
    for prev, cur in zip(bars, bars[1:]):
        if cur.timestamp <= prev.timestamp:
            raise DataLoadError(
                source,
                f"timestamps must be strictly increasing "
                f"({cur.timestamp} follows {prev.timestamp})",
            )
    return bars


def load_bars(path: str | Path) -> list[Bar]:
    """Read and parse a JSON bar file.

    Raises:
        DataLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        payload = path.read_bytes()
    except OSError as e:
        raise DataLoadError(str(path), e.strerror or str(e)) from e

    bars = parse_bars(payload, source=str(path))
    log.info("bars_loaded", path=str(path), bar_count=len(bars))
    return bars


def dump_bars(bars: Sequence[Bar]) -> str:
    """Serialize bars to the JSON array shape parse_bars() accepts."""
    return json.dumps([asdict(b) for b in bars])


def parse_futures(payload: str | bytes | None) -> Futures | None:
    """Parse a futures instrument from JSON, or None if it is missing or invalid.

    Never raises: a bad payload is logged and treated as no instrument.
    """
    if not payload:
        return None
    try:
        record = FuturesRecord.model_validate_json(payload)
    except ValidationError as e:
        log.warning("futures_payload_invalid", error=_summarize(e))
        return None
    return record.to_futures()


def parse_futures_map(
    payload: str | bytes, source: str = _PAYLOAD_SOURCE
) -> FuturesByDate:
    """Parse a JSON object mapping YYYY-MM-DD dates to instrument lists.

    Raises:
        DataLoadError: If the payload is not valid JSON or any instrument
            does not match the futures shape.
    """
    try:
        records = _FUTURES_MAP.validate_json(payload)
    except ValidationError as e:
        raise DataLoadError(source, _summarize(e), kind="futures") from e
    return {day: [r.to_futures() for r in listed] for day, listed in records.items()}


def load_futures_map(path: str | Path) -> FuturesByDate:
    """Read and parse a JSON file of instruments per date.

    Raises:
        DataLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        payload = path.read_bytes()
    except OSError as e:
        raise DataLoadError(str(path), e.strerror or str(e), kind="futures") from e

    futures_map = parse_futures_map(payload, source=str(path))
    log.info("futures_loaded", path=str(path), date_count=len(futures_map))
    return futures_map


def futures_for_date(futures_map: FuturesByDate, date_str: str) -> list[Futures]:
    """Instruments listed for a date, or an empty list if none are."""
    return futures_map.get(date_str, [])


def _summarize(error: ValidationError) -> str:
    """First validation error as 'loc: msg', plus a count of the rest."""
    errors = error.errors()
    first = errors[0]
    loc = ".".join(str(part) for part in first["loc"]) or "payload"
    summary = f"{loc}: {first['msg']}"
    if len(errors) > 1:
        summary += f" (+{len(errors) - 1} more)"
    return summary
