"""Core exception hierarchy for pipetrigger.

All pipetrigger exceptions inherit from TriggersError so a controller loop can
catch the whole family in one place and decide whether to requeue.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pipetrigger.kernel.domain.meta import NamespacedName

# ============================================================================
# Base Exception
# ============================================================================


class TriggersError(Exception):
    """Base exception for all pipetrigger errors.

    Catch this to handle every error raised by the decision core.
    """

    pass


# ============================================================================
# Configuration & Validation Errors
# ============================================================================


class ConfigurationError(TriggersError):
    """Raised when configuration is invalid or missing.

    Examples
    --------
    Example usage::

        raise ConfigurationError("pyproject.toml", "[tool.pipetrigger] must be a table")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the component with invalid configuration
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


class ValidationError(TriggersError):
    """Raised when data validation fails.

    Examples
    --------
    Example usage::

        raise ValidationError("prefix", "cannot be empty", value="")
    """

    def __init__(self, field: str, constraint: str, value: object = None) -> None:
        """Initialize validation error.

        Args
        ----
            field: Name of the field that failed validation
            constraint: Description of the validation constraint
            value: The invalid value (optional)
        """
        if value is not None:
            msg = f"Validation failed for '{field}': {constraint} (got {value!r})"
        else:
            msg = f"Validation failed for '{field}': {constraint}"
        super().__init__(msg)
        self.field = field
        self.constraint = constraint
        self.value = value


# ============================================================================
# Status Classification Errors
# ============================================================================


class StatusClassificationError(TriggersError):
    """Raised when a PipelineRun status matches none of the known states.

    The caller must not build a WhenObjectRef for the run and must not mark it
    as processed; a later status update gets another chance.

    Examples
    --------
    Example usage::

        raise StatusClassificationError(NamespacedName("default", "pipeline"))
    """

    def __init__(self, namespaced_name: NamespacedName) -> None:
        """Initialize status classification error.

        Args
        ----
            namespaced_name: Identity of the PipelineRun that could not be classified
        """
        super().__init__(f"unable to parse pipelinerun '{namespaced_name}' current status")
        self.namespaced_name = namespaced_name


# ============================================================================
# Bookkeeping Payload Errors
# ============================================================================


class ExtraFieldsError(TriggersError):
    """Base exception for CustomRun extra-fields payload problems."""

    def __init__(self, namespaced_name: NamespacedName, reason: str) -> None:
        super().__init__(f"CustomRun '{namespaced_name}': {reason}")
        self.namespaced_name = namespaced_name
        self.reason = reason


class ExtraFieldsNotPopulatedError(ExtraFieldsError):
    """Raised when the extra-fields payload is absent or empty (retry later)."""


class ExtraFieldsDecodeError(ExtraFieldsError):
    """Raised when the extra-fields payload is present but malformed."""


class TriggeredBuildsDecodeError(TriggersError):
    """Raised when the triggered-builds annotation does not hold a valid JSON list."""

    def __init__(self, namespaced_name: NamespacedName, reason: str) -> None:
        super().__init__(f"PipelineRun '{namespaced_name}' triggered-builds annotation: {reason}")
        self.namespaced_name = namespaced_name
        self.reason = reason
