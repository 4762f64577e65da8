"""Kernel of pipetrigger: domain models, configuration, errors and logging."""

from pipetrigger.kernel.exceptions import (
    ConfigurationError,
    ExtraFieldsDecodeError,
    ExtraFieldsError,
    ExtraFieldsNotPopulatedError,
    StatusClassificationError,
    TriggeredBuildsDecodeError,
    TriggersError,
    ValidationError,
)
from pipetrigger.kernel.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "ExtraFieldsDecodeError",
    "ExtraFieldsError",
    "ExtraFieldsNotPopulatedError",
    "StatusClassificationError",
    "TriggeredBuildsDecodeError",
    "TriggersError",
    "ValidationError",
    "configure_logging",
    "get_logger",
]
