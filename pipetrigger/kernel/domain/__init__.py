"""Domain layer exports for pipetrigger."""

from pipetrigger.kernel.domain.build_run import BuildRef, BuildRun, BuildRunSpec, WhenObjectRef
from pipetrigger.kernel.domain.custom_run import CustomRun, CustomRunSpec, CustomRunStatus
from pipetrigger.kernel.domain.meta import (
    Condition,
    NamespacedName,
    ObjectMeta,
    OwnerReference,
    TaskRef,
    parse_duration,
)
from pipetrigger.kernel.domain.pipeline_run import (
    PipelineRef,
    PipelineRun,
    PipelineRunSpec,
    PipelineRunStatus,
    PipelineSpec,
    PipelineTask,
    TimeoutFields,
)

__all__ = [
    # Object metadata
    "Condition",
    "NamespacedName",
    "ObjectMeta",
    "OwnerReference",
    "TaskRef",
    "parse_duration",
    # Tekton side
    "CustomRun",
    "CustomRunSpec",
    "CustomRunStatus",
    "PipelineRef",
    "PipelineRun",
    "PipelineRunSpec",
    "PipelineRunStatus",
    "PipelineSpec",
    "PipelineTask",
    "TimeoutFields",
    # Build side
    "BuildRef",
    "BuildRun",
    "BuildRunSpec",
    "WhenObjectRef",
]
