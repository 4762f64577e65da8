"""Object metadata shared by every resource the triggers core reads.

The models accept Kubernetes manifest dictionaries as returned by the object
store (camelCase keys), and can also be built directly with snake_case names::

    meta = ObjectMeta.model_validate({
        "namespace": "default",
        "name": "pipeline",
        "labels": {"app": "demo"},
        "deletionTimestamp": "2024-01-01T00:00:00Z",
    })
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Go's time.ParseDuration units, as used by metav1.Duration
_DURATION_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: Any) -> timedelta | None:
    """Parse a Go-style duration string (``"1h0m0s"``, ``"90s"``) into a timedelta.

    Integers and floats are taken as seconds; timedeltas and None pass through.

    Raises
    ------
    ValueError
        If the string is not a valid duration
    """
    if value is None or isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"invalid duration {value!r}")
    if isinstance(value, int | float):
        return timedelta(seconds=value)
    if not isinstance(value, str):
        raise ValueError(f"invalid duration {value!r}")

    text = value.strip()
    sign = 1
    if text[:1] in ("-", "+"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta(0)

    pos = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if not text or pos != len(text):
        raise ValueError(f"invalid duration {value!r}")
    return timedelta(seconds=sign * total)


def ensure_aware(value: datetime | None) -> datetime | None:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class ResourceModel(BaseModel):
    """Base for manifest-shaped models: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        validate_assignment=True,
    )


@dataclass(frozen=True, slots=True)
class NamespacedName:
    """Namespace-qualified object identity."""

    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


class OwnerReference(ResourceModel):
    """Reference to an owning object (API version, kind and name)."""

    api_version: str = ""
    kind: str = ""
    name: str = ""


class ObjectMeta(ResourceModel):
    """Subset of Kubernetes ObjectMeta used for reconciliation decisions."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    deletion_timestamp: datetime | None = None
    owner_references: list[OwnerReference] = Field(default_factory=list)

    @field_validator("deletion_timestamp")
    @classmethod
    def _aware_deletion_timestamp(cls, value: datetime | None) -> datetime | None:
        return ensure_aware(value)


class Condition(ResourceModel):
    """A knative-style status condition."""

    type: str
    status: Literal["True", "False", "Unknown"] = "Unknown"
    reason: str = ""
    message: str = ""

    def is_true(self) -> bool:
        return self.status == "True"

    def is_unknown(self) -> bool:
        return self.status == "Unknown"


class TaskRef(ResourceModel):
    """Reference from a pipeline task (or custom run) to the task it runs."""

    api_version: str = ""
    kind: str = ""
    name: str = ""


def get_condition(conditions: list[Condition], condition_type: str) -> Condition | None:
    """Return the condition with the given type, or None."""
    for condition in conditions:
        if condition.type == condition_type:
            return condition
    return None
