"""Configuration loader for pipetrigger.

Supports two config sources:

1. **kind: Config YAML** — loaded via explicit path or the
   ``PIPETRIGGER_CONFIG_PATH`` env var.
2. **pyproject.toml [tool.pipetrigger]** — auto-discovery fallback.

Environment variables override file values, see
:meth:`ConfigLoader._apply_env_overrides`.
"""

from __future__ import annotations

import os
import re
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, cast

import yaml

from pipetrigger.kernel.config.models import LoggingConfig, TriggersConfig
from pipetrigger.kernel.exceptions import ConfigurationError, ValidationError
from pipetrigger.kernel.logging import get_logger

# Constants for boolean environment variable parsing
_TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
_FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})

logger = get_logger(__name__)


def _parse_bool_env(value: str) -> bool:
    """Parse boolean from environment variable value.

    Raises
    ------
    ValueError
        If value is not a recognized boolean string
    """
    normalized = value.lower().strip()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False
    expected = _TRUTHY_VALUES | _FALSY_VALUES
    raise ValueError(f"Invalid boolean value: {value!r}. Expected one of: {expected}")


class ConfigLoader:
    """Loads pipetrigger configuration from YAML or pyproject.toml."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def load_config_file(self, path: str | Path | None = None) -> TriggersConfig:
        """Load configuration from a file found via :meth:`_find_config_file`.

        Raises
        ------
        FileNotFoundError
            If no configuration file is found
        ConfigurationError
            If the file content is not a valid configuration
        """
        config_path = self._find_config_file(path)
        logger.info("Loading configuration from {path}", path=config_path)

        if config_path.suffix in (".yaml", ".yml"):
            data = self._load_yaml_config(config_path)
        else:
            data = self._load_toml_config(config_path)

        data = self._substitute_env_vars(data)
        return self._parse_config(self._apply_env_overrides(data), source=config_path.name)

    def _load_yaml_config(self, config_path: Path) -> dict[str, Any]:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ConfigurationError(
                config_path.name, f"expected a mapping, got {type(data).__name__}"
            )

        kind = data.get("kind")
        if kind != "Config":
            raise ConfigurationError(
                config_path.name, f"must use 'kind: Config' manifest format, got 'kind: {kind}'"
            )

        spec = data.get("spec") or {}
        if not isinstance(spec, dict):
            raise ConfigurationError(config_path.name, "'spec' must be a mapping")
        return spec

    def _load_toml_config(self, config_path: Path) -> dict[str, Any]:
        with config_path.open("rb") as f:
            data = tomllib.load(f)

        section = data.get("tool", {}).get("pipetrigger")
        if section is None:
            if config_path.name == "pyproject.toml":
                logger.warning(
                    "No [tool.pipetrigger] section found in pyproject.toml, using defaults"
                )
                return {}
            # Direct TOML file without a [tool.pipetrigger] table is flat
            section = data
        if not isinstance(section, dict):
            raise ConfigurationError(config_path.name, "[tool.pipetrigger] must be a table")
        return section

    def _find_config_file(self, path: str | Path | None) -> Path:
        """Find configuration file.

        Discovery order:
        1. Explicit path argument
        2. ``PIPETRIGGER_CONFIG_PATH`` env var
        3. ``pyproject.toml`` in CWD
        """
        if path:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return config_path

        if env_path := os.getenv("PIPETRIGGER_CONFIG_PATH"):
            config_path = Path(env_path)
            if config_path.exists():
                logger.debug("Using config from PIPETRIGGER_CONFIG_PATH: {}", config_path)
                return config_path
            logger.warning("PIPETRIGGER_CONFIG_PATH set but file not found: {}", config_path)

        if Path("pyproject.toml").exists():
            return Path("pyproject.toml")

        raise FileNotFoundError(
            "No configuration file found. Provide a kind: Config YAML path, "
            "set PIPETRIGGER_CONFIG_PATH, or add [tool.pipetrigger] to pyproject.toml"
        )

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively replace ``${VAR}`` with environment values, keeping unknown ones."""
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                var_name = match.group(1)
                value = os.environ.get(var_name)
                if value is None:
                    logger.debug(
                        "Environment variable ${{{var_name}}} not found, keeping placeholder",
                        var_name=var_name,
                    )
                    return match.group(0)
                return value

            return self.ENV_VAR_PATTERN.sub(replacer, data)

        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}

        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]

        return data

    def _apply_env_overrides(self, data: dict[str, Any]) -> dict[str, Any]:
        """Apply environment overrides on top of file values.

        - PIPETRIGGER_PREFIX: reserved label/annotation prefix
        - PIPETRIGGER_DEFAULT_TIMEOUT: default pipeline timeout in seconds
        - PIPETRIGGER_LOG_LEVEL: log level
        - PIPETRIGGER_LOG_FORMAT: console, json, structured or rich
        - PIPETRIGGER_LOG_FILE: optional file path for JSON log output
        - PIPETRIGGER_LOG_COLOR: use color output (true/false)
        """
        data = dict(data)
        if not isinstance(data.get("logging") or {}, dict):
            raise ConfigurationError("logging", "must be a mapping")
        logging_data = dict(data.get("logging") or {})

        if env_prefix := os.getenv("PIPETRIGGER_PREFIX"):
            data["prefix"] = env_prefix
            logger.debug("Overriding prefix from env: {}", env_prefix)

        if env_timeout := os.getenv("PIPETRIGGER_DEFAULT_TIMEOUT"):
            try:
                data["default_pipeline_timeout_seconds"] = float(env_timeout)
                logger.debug("Overriding default timeout from env: {}", env_timeout)
            except ValueError:
                logger.warning("Invalid PIPETRIGGER_DEFAULT_TIMEOUT value: {}", env_timeout)

        if env_level := os.getenv("PIPETRIGGER_LOG_LEVEL"):
            logging_data["level"] = env_level.upper()
            logger.debug("Overriding log level from env: {}", env_level)

        if env_format := os.getenv("PIPETRIGGER_LOG_FORMAT"):
            logging_data["format"] = env_format.lower()
            logger.debug("Overriding log format from env: {}", env_format)

        if env_file := os.getenv("PIPETRIGGER_LOG_FILE"):
            logging_data["output_file"] = env_file
            logger.debug("Overriding log file from env: {}", env_file)

        if env_color := os.getenv("PIPETRIGGER_LOG_COLOR"):
            try:
                logging_data["use_color"] = _parse_bool_env(env_color)
            except ValueError as e:
                logger.warning("Invalid PIPETRIGGER_LOG_COLOR value: {}", e)

        data["logging"] = logging_data
        return data

    def _parse_config(self, data: dict[str, Any], source: str = "defaults") -> TriggersConfig:
        """Parse raw configuration data into TriggersConfig."""
        logging_data = data.get("logging") or {}
        if not isinstance(logging_data, dict):
            raise ConfigurationError(source, "'logging' must be a mapping")

        try:
            logging_config = LoggingConfig(
                level=cast("Any", str(logging_data.get("level", "INFO")).upper()),
                format=cast("Any", str(logging_data.get("format", "structured")).lower()),
                output_file=logging_data.get("output_file"),
                use_color=bool(logging_data.get("use_color", True)),
                include_timestamp=bool(logging_data.get("include_timestamp", True)),
            )
            defaults = TriggersConfig()
            return TriggersConfig(
                prefix=data.get("prefix", defaults.prefix),
                build_api_version=data.get("build_api_version", defaults.build_api_version),
                run_api_version=data.get("run_api_version", defaults.run_api_version),
                custom_run_api_version=data.get(
                    "custom_run_api_version", defaults.custom_run_api_version
                ),
                default_pipeline_timeout_seconds=float(
                    data.get(
                        "default_pipeline_timeout_seconds",
                        defaults.default_pipeline_timeout_seconds,
                    )
                ),
                logging=logging_config,
            )
        except (TypeError, ValueError, ValidationError) as e:
            raise ConfigurationError(source, str(e)) from e


def get_default_config() -> TriggersConfig:
    """Default configuration with environment overrides applied."""
    loader = ConfigLoader()
    return loader._parse_config(loader._apply_env_overrides({}))


@lru_cache(maxsize=32)
def _cached_load_config(path_str: str | None) -> TriggersConfig:
    try:
        return ConfigLoader().load_config_file(path_str)
    except FileNotFoundError:
        if path_str:
            raise
        logger.info("No configuration file found, using defaults")
        return get_default_config()


def load_config(path: str | Path | None = None) -> TriggersConfig:
    """Load configuration from file or return defaults.

    Results are cached per path; call :func:`clear_config_cache` after
    changing files or environment variables.

    Raises
    ------
    FileNotFoundError
        If an explicit ``path`` does not exist
    ConfigurationError
        If the configuration file is invalid
    """
    return _cached_load_config(str(path) if path else None)


def clear_config_cache() -> None:
    """Clear the configuration cache."""
    _cached_load_config.cache_clear()
