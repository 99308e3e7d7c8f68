"""Pydantic Settings configuration models.

3-tier config hierarchy (lowest to highest priority):
1. Pydantic defaults (in code below)
2. .env file (loaded by Pydantic Settings)
3. Environment variables (e.g., KLINE_INDICATORS__RSI_PERIOD=9)

CLI options override the resolved values per invocation.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kline.market.types import Period

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
VALID_LOG_FORMATS = frozenset({"console", "json"})


class IndicatorConfig(BaseModel):
    """Indicator periods and RSI display thresholds."""

    sma_period: int = Field(default=20, ge=1, le=500)
    rsi_period: int = Field(default=14, ge=1, le=500)
    rsi_overbought: float = Field(default=70.0, gt=0.0, lt=100.0)
    rsi_oversold: float = Field(default=30.0, gt=0.0, lt=100.0)

    @model_validator(mode="after")
    def validate_thresholds(self) -> IndicatorConfig:
        if self.rsi_oversold >= self.rsi_overbought:
            raise ValueError(
                f"rsi_oversold ({self.rsi_oversold}) must be below "
                f"rsi_overbought ({self.rsi_overbought})"
            )
        return self


class ChartConfig(BaseModel):
    """Chart period and how many of the most recent bars to show."""

    interval: Period = Period.M1
    bar_limit: int = Field(default=60, ge=0)


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Env var examples:
        KLINE_LOG_LEVEL=DEBUG
        KLINE_LOG_FORMAT=json
        KLINE_INDICATORS__SMA_PERIOD=10
        KLINE_CHART__INTERVAL=5m
    """

    model_config = SettingsConfigDict(
        env_prefix="KLINE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"
    log_format: str = "console"
    indicators: IndicatorConfig = IndicatorConfig()
    chart: ChartConfig = ChartConfig()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got {v}"
            )
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in VALID_LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {sorted(VALID_LOG_FORMATS)}, got {v}"
            )
        return v
