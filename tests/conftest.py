"""Shared test fixtures for kline."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from tests.factories import make_bars


@pytest.fixture(autouse=True)
def _clear_log_context() -> Iterator[None]:
    """Keep bound structlog context from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers bound to streams that CliRunner closes after a command."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.WARNING)


@pytest.fixture
def bar_file(tmp_path: Path) -> Path:
    """A JSON bar file with 30 one-minute bars of rising then falling closes."""
    closes = [100.0 + i for i in range(20)] + [119.0 - 2 * i for i in range(1, 11)]
    bars = make_bars(closes)
    path = tmp_path / "bars.json"
    path.write_text(
        json.dumps(
            [
                {
                    "timestamp": b.timestamp,
                    "open": b.open,
                    "high": b.high,
                    "low": b.low,
                    "close": b.close,
                    "volume": b.volume,
                }
                for b in bars
            ]
        ),
        encoding="utf-8",
    )
    return path
