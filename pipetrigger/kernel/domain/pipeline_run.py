"""Domain model for Tekton PipelineRun objects.

Only the fields the triggers core reads are modelled. The derived predicates
(``is_done``, ``is_cancelled``, ``has_timed_out`` ...) follow the semantics of
the Tekton API types so classification matches what the cluster reports.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import Field, field_validator

from pipetrigger.kernel.domain.meta import (
    Condition,
    NamespacedName,
    ObjectMeta,
    ResourceModel,
    TaskRef,
    ensure_aware,
    get_condition,
    parse_duration,
)

CONDITION_SUCCEEDED = "Succeeded"

# spec.status requesting an immediate cancel. CancelledRunFinally and
# StoppedRunFinally keep finally tasks running, so the run is not cancelled yet.
SPEC_STATUS_CANCELLED = "Cancelled"


class PipelineRef(ResourceModel):
    """Reference to the Pipeline definition a run follows."""

    name: str = ""


class PipelineTask(ResourceModel):
    """A task declared in the resolved pipeline spec."""

    name: str = ""
    task_ref: TaskRef | None = None


class PipelineSpec(ResourceModel):
    """Resolved pipeline spec recorded on the run status."""

    description: str = ""
    tasks: list[PipelineTask] = Field(default_factory=list)


class TimeoutFields(ResourceModel):
    """``spec.timeouts`` block."""

    pipeline: timedelta | None = None

    @field_validator("pipeline", mode="before")
    @classmethod
    def _parse_pipeline(cls, value: object) -> timedelta | None:
        return parse_duration(value)


class PipelineRunSpec(ResourceModel):
    pipeline_ref: PipelineRef | None = None
    status: str | None = None
    timeout: timedelta | None = None
    timeouts: TimeoutFields | None = None

    @field_validator("timeout", mode="before")
    @classmethod
    def _parse_timeout(cls, value: object) -> timedelta | None:
        return parse_duration(value)


class PipelineRunStatus(ResourceModel):
    conditions: list[Condition] = Field(default_factory=list)
    start_time: datetime | None = None
    completion_time: datetime | None = None
    pipeline_spec: PipelineSpec | None = None

    @field_validator("start_time", "completion_time")
    @classmethod
    def _aware_times(cls, value: datetime | None) -> datetime | None:
        return ensure_aware(value)


class PipelineRun(ResourceModel):
    """A single workflow run and the status recorded by the orchestrator.

    Examples
    --------
    >>> run = PipelineRun.model_validate({
    ...     "metadata": {"namespace": "default", "name": "build-and-test"},
    ...     "spec": {"pipelineRef": {"name": "build-and-test"}},
    ... })
    >>> run.has_started()
    False
    """

    api_version: str = "tekton.dev/v1beta1"
    kind: str = "PipelineRun"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PipelineRunSpec = Field(default_factory=PipelineRunSpec)
    status: PipelineRunStatus = Field(default_factory=PipelineRunStatus)

    @property
    def namespaced_name(self) -> NamespacedName:
        return NamespacedName(self.metadata.namespace, self.metadata.name)

    def succeeded_condition(self) -> Condition | None:
        return get_condition(self.status.conditions, CONDITION_SUCCEEDED)

    def is_done(self) -> bool:
        """Whether the Succeeded condition has settled (True or False)."""
        condition = self.succeeded_condition()
        return condition is not None and not condition.is_unknown()

    def is_succeeded(self) -> bool:
        condition = self.succeeded_condition()
        return condition is not None and condition.is_true()

    def is_cancelled(self) -> bool:
        return self.spec.status == SPEC_STATUS_CANCELLED

    def has_started(self) -> bool:
        return self.status.start_time is not None

    def is_marked_for_deletion(self) -> bool:
        return self.metadata.deletion_timestamp is not None

    def pipeline_timeout(self, default: timedelta) -> timedelta:
        """Effective pipeline timeout: ``spec.timeouts.pipeline``, ``spec.timeout``, default."""
        if self.spec.timeouts is not None and self.spec.timeouts.pipeline is not None:
            return self.spec.timeouts.pipeline
        if self.spec.timeout is not None:
            return self.spec.timeout
        return default

    def has_timed_out(self, now: datetime, default: timedelta) -> bool:
        """Whether the run has been going for longer than its timeout at ``now``.

        A zero timeout means the run never times out.
        """
        if self.status.start_time is None:
            return False
        timeout = self.pipeline_timeout(default)
        if timeout == timedelta(0):
            return False
        runtime = ensure_aware(now) - self.status.start_time
        return runtime > timeout

    def mark_succeeded(self, reason: str = "Succeeded", message: str = "") -> None:
        self._set_succeeded_condition("True", reason, message)

    def mark_failed(self, reason: str = "Failed", message: str = "") -> None:
        self._set_succeeded_condition("False", reason, message)

    def _set_succeeded_condition(self, status: str, reason: str, message: str) -> None:
        conditions = [c for c in self.status.conditions if c.type != CONDITION_SUCCEEDED]
        conditions.append(
            Condition(type=CONDITION_SUCCEEDED, status=status, reason=reason, message=message)
        )
        self.status.conditions = conditions
