"""Domain model for Tekton CustomRun objects (a single custom-task invocation).

The ``status.extraFields`` payload is opaque to Tekton. The triggers core
stashes the identity of the BuildRun it created there, see
:mod:`pipetrigger.filter.extra_fields`.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from pipetrigger.kernel.domain.meta import (
    Condition,
    NamespacedName,
    ObjectMeta,
    ResourceModel,
    TaskRef,
    ensure_aware,
)


class CustomRunSpec(ResourceModel):
    custom_ref: TaskRef | None = None


class CustomRunStatus(ResourceModel):
    conditions: list[Condition] = Field(default_factory=list)
    start_time: datetime | None = None
    completion_time: datetime | None = None
    extra_fields: Any = None

    @field_validator("start_time", "completion_time")
    @classmethod
    def _aware_times(cls, value: datetime | None) -> datetime | None:
        return ensure_aware(value)

    def extra_fields_size(self) -> int:
        """Length in bytes of the JSON-encoded payload, 0 when absent."""
        if self.extra_fields is None:
            return 0
        if isinstance(self.extra_fields, bytes | str):
            return len(self.extra_fields)
        return len(json.dumps(self.extra_fields, separators=(",", ":")).encode("utf-8"))


class CustomRun(ResourceModel):
    """A custom task invocation bound to one task reference."""

    api_version: str = "tekton.dev/v1beta1"
    kind: str = "CustomRun"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: CustomRunSpec = Field(default_factory=CustomRunSpec)
    status: CustomRunStatus = Field(default_factory=CustomRunStatus)

    @property
    def namespaced_name(self) -> NamespacedName:
        return NamespacedName(self.metadata.namespace, self.metadata.name)

    def has_started(self) -> bool:
        return self.status.start_time is not None
