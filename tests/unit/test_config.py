"""Tests for the configuration system."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from kline.config import AppConfig, ChartConfig, IndicatorConfig
from kline.market.types import Period


class TestDefaultConfig:
    """Default configuration loads correctly."""

    def test_default_config_loads(self) -> None:
        config = AppConfig()
        assert config.log_level == "WARNING"
        assert config.log_format == "console"
        assert config.indicators.sma_period == 20
        assert config.indicators.rsi_period == 14
        assert config.chart.interval is Period.M1
        assert config.chart.bar_limit == 60

    def test_default_rsi_thresholds(self) -> None:
        config = AppConfig()
        assert config.indicators.rsi_overbought == 70.0
        assert config.indicators.rsi_oversold == 30.0


class TestIndicatorValidation:
    """Indicator periods and thresholds are bounds-checked."""

    def test_sma_period_zero_rejected(self) -> None:
        with pytest.raises(ValidationError):
            IndicatorConfig(sma_period=0)

    def test_rsi_period_too_large_rejected(self) -> None:
        with pytest.raises(ValidationError):
            IndicatorConfig(rsi_period=501)

    def test_oversold_must_be_below_overbought(self) -> None:
        with pytest.raises(ValidationError, match="rsi_oversold"):
            IndicatorConfig(rsi_overbought=40.0, rsi_oversold=60.0)

    def test_equal_thresholds_rejected(self) -> None:
        with pytest.raises(ValidationError):
            IndicatorConfig(rsi_overbought=50.0, rsi_oversold=50.0)

    def test_threshold_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            IndicatorConfig(rsi_overbought=100.0)


class TestChartValidation:
    def test_interval_from_string(self) -> None:
        assert ChartConfig(interval="15m").interval is Period.M15

    def test_unknown_interval_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ChartConfig(interval="2m")

    def test_negative_bar_limit_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ChartConfig(bar_limit=-1)


class TestLogValidation:
    def test_log_level_normalized(self) -> None:
        assert AppConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError, match="log_level"):
            AppConfig(log_level="VERBOSE")

    def test_log_format_normalized(self) -> None:
        assert AppConfig(log_format="JSON").log_format == "json"

    def test_invalid_log_format_rejected(self) -> None:
        with pytest.raises(ValidationError, match="log_format"):
            AppConfig(log_format="xml")


class TestEnvOverrides:
    """Environment variables override defaults."""

    def test_top_level_env(self) -> None:
        with patch.dict("os.environ", {"KLINE_LOG_LEVEL": "DEBUG"}):
            assert AppConfig().log_level == "DEBUG"

    def test_nested_env(self) -> None:
        env = {
            "KLINE_INDICATORS__SMA_PERIOD": "10",
            "KLINE_CHART__INTERVAL": "5m",
        }
        with patch.dict("os.environ", env):
            config = AppConfig()
        assert config.indicators.sma_period == 10
        assert config.chart.interval is Period.M5

    def test_invalid_env_rejected(self) -> None:
        with patch.dict("os.environ", {"KLINE_INDICATORS__RSI_PERIOD": "0"}):
            with pytest.raises(ValidationError):
                AppConfig()
