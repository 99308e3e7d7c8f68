"""Error hierarchy.

All package exceptions inherit from KlineError so callers at the CLI or
application boundary can catch one type.
"""

from __future__ import annotations


class KlineError(Exception):
    """Base exception for all kline errors."""


class DataLoadError(KlineError):
    """Input data could not be read or does not have the expected shape.

    Stores the source (file path or "<payload>") and the reason. kind names
    what was being loaded ("bars", "futures").
    """

    def __init__(self, source: str, reason: str, kind: str = "bars") -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load {kind} from {source}: {reason}")
