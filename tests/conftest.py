"""Configuration file for pytest containing fixtures and configuration.

This module provides fixtures that can be used across multiple test files:
- log_capture: collects loguru records emitted during a test
- clean_env: removes PIPETRIGGER_* variables and clears the config cache
"""

from collections.abc import Iterator

import pytest
from loguru import logger

from pipetrigger.kernel.config import clear_config_cache


@pytest.fixture
def log_capture() -> Iterator[list[dict]]:
    """Fixture to capture loguru logs."""
    captured_logs: list[dict] = []

    def sink(message) -> None:
        record = message.record
        captured_logs.append({
            "level": record["level"].name,
            "message": record["message"],
            "extra": dict(record["extra"]),
        })

    handler_id = logger.add(sink, level="DEBUG", format="{message}")
    yield captured_logs
    logger.remove(handler_id)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Run the test without PIPETRIGGER_* environment variables and a fresh config cache."""
    import os

    for name in list(os.environ):
        if name.startswith("PIPETRIGGER_"):
            monkeypatch.delenv(name)
    clear_config_cache()
    yield monkeypatch
    clear_config_cache()
