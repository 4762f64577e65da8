"""Tests for the config models module."""

from __future__ import annotations

from datetime import timedelta

import pytest

from pipetrigger.filter.constants import DEFAULT_KEYS
from pipetrigger.kernel.config.models import LoggingConfig, TriggersConfig
from pipetrigger.kernel.exceptions import ValidationError


class TestLoggingConfig:
    """Tests for LoggingConfig dataclass."""

    def test_default_values(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.format == "structured"
        assert config.output_file is None
        assert config.use_color is True
        assert config.include_timestamp is True

    def test_invalid_level(self) -> None:
        with pytest.raises(ValidationError, match="logging.level"):
            LoggingConfig(level="LOUD")  # type: ignore[arg-type]

    def test_invalid_format(self) -> None:
        with pytest.raises(ValidationError, match="logging.format"):
            LoggingConfig(format="xml")  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        config = LoggingConfig()
        with pytest.raises(AttributeError):
            config.level = "DEBUG"  # type: ignore[misc]


class TestTriggersConfig:
    """Tests for TriggersConfig dataclass."""

    def test_default_values(self) -> None:
        config = TriggersConfig()
        assert config.prefix == "triggers.shipwright.io"
        assert config.build_api_version == "shipwright.io/v1alpha1"
        assert config.default_pipeline_timeout() == timedelta(hours=1)
        assert config.logging == LoggingConfig()

    def test_default_reserved_keys(self) -> None:
        assert TriggersConfig().reserved_keys() == DEFAULT_KEYS

    def test_custom_prefix_keys(self) -> None:
        keys = TriggersConfig(prefix="triggers.example.com").reserved_keys()
        assert keys.build_runs_created == "triggers.example.com/buildrun-names"
        assert keys.pipeline_run_triggered_builds == (
            "triggers.example.com/pipelinerun-triggered-builds"
        )

    @pytest.mark.parametrize(
        ("kwargs", "field"),
        [
            ({"prefix": ""}, "prefix"),
            ({"prefix": "a/b"}, "prefix"),
            ({"build_api_version": ""}, "build_api_version"),
            ({"default_pipeline_timeout_seconds": -1}, "default_pipeline_timeout_seconds"),
        ],
    )
    def test_validation(self, kwargs: dict, field: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TriggersConfig(**kwargs)
        assert exc_info.value.field == field

    def test_zero_timeout_allowed(self) -> None:
        config = TriggersConfig(default_pipeline_timeout_seconds=0)
        assert config.default_pipeline_timeout() == timedelta(0)
