"""Configuration data models for pipetrigger."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Literal

from pipetrigger.filter.constants import (
    DEFAULT_PIPELINE_TIMEOUT,
    DEFAULT_PREFIX,
    SHIPWRIGHT_API_VERSION,
    TEKTON_API_V1ALPHA1,
    TEKTON_API_V1BETA1,
    ReservedKeys,
)
from pipetrigger.kernel.exceptions import ValidationError

_LOG_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
_LOG_FORMATS = frozenset({"console", "json", "structured", "rich"})


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration for pipetrigger.

    Attributes
    ----------
    level : str, default="INFO"
        Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write JSON logs to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output

    Examples
    --------
    TOML configuration:

    ```toml
    [tool.pipetrigger.logging]
    level = "DEBUG"
    format = "json"
    ```

    Environment variable overrides:

    ```bash
    export PIPETRIGGER_LOG_LEVEL=DEBUG
    export PIPETRIGGER_LOG_FORMAT=rich
    export PIPETRIGGER_LOG_FILE=/var/log/pipetrigger/controller.log
    ```
    """

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.level not in _LOG_LEVELS:
            raise ValidationError(
                "logging.level", f"must be one of {sorted(_LOG_LEVELS)}", self.level
            )
        if self.format not in _LOG_FORMATS:
            raise ValidationError(
                "logging.format", f"must be one of {sorted(_LOG_FORMATS)}", self.format
            )


@dataclass(frozen=True, slots=True)
class TriggersConfig:
    """Complete pipetrigger configuration.

    Attributes
    ----------
    prefix : str
        Reserved label/annotation prefix
    build_api_version : str
        API version of the build resources (custom tasks referencing it are skipped)
    run_api_version : str
        API version of the Tekton ``Run`` kind owning BuildRuns
    custom_run_api_version : str
        API version of the Tekton ``CustomRun`` kind owning BuildRuns
    default_pipeline_timeout_seconds : float
        Timeout applied to PipelineRuns that declare none; 0 disables timeouts
    logging : LoggingConfig
        Logging configuration

    Examples
    --------
    TOML configuration in pyproject.toml:

    ```toml
    [tool.pipetrigger]
    prefix = "triggers.shipwright.io"
    default_pipeline_timeout_seconds = 3600

    [tool.pipetrigger.logging]
    level = "INFO"
    ```
    """

    prefix: str = DEFAULT_PREFIX
    build_api_version: str = SHIPWRIGHT_API_VERSION
    run_api_version: str = TEKTON_API_V1ALPHA1
    custom_run_api_version: str = TEKTON_API_V1BETA1
    default_pipeline_timeout_seconds: float = DEFAULT_PIPELINE_TIMEOUT.total_seconds()
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        if not self.prefix:
            raise ValidationError("prefix", "cannot be empty")
        if "/" in self.prefix:
            raise ValidationError("prefix", "cannot contain '/'", self.prefix)
        if not self.build_api_version:
            raise ValidationError("build_api_version", "cannot be empty")
        if self.default_pipeline_timeout_seconds < 0:
            raise ValidationError(
                "default_pipeline_timeout_seconds",
                "must not be negative",
                self.default_pipeline_timeout_seconds,
            )

    def reserved_keys(self) -> ReservedKeys:
        return ReservedKeys(
            prefix=self.prefix,
            build_api_version=self.build_api_version,
            run_api_version=self.run_api_version,
            custom_run_api_version=self.custom_run_api_version,
        )

    def default_pipeline_timeout(self) -> timedelta:
        return timedelta(seconds=self.default_pipeline_timeout_seconds)
