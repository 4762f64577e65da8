"""Domain models on the build side: BuildRun and the WhenObjectRef build request."""

from __future__ import annotations

from pydantic import Field

from pipetrigger.kernel.domain.meta import NamespacedName, ObjectMeta, ResourceModel


class BuildRef(ResourceModel):
    name: str = ""


class BuildRunSpec(ResourceModel):
    build_ref: BuildRef | None = None


class BuildRun(ResourceModel):
    """A single build execution record, possibly owned by a Tekton Run."""

    api_version: str = "shipwright.io/v1alpha1"
    kind: str = "BuildRun"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: BuildRunSpec = Field(default_factory=BuildRunSpec)

    @property
    def namespaced_name(self) -> NamespacedName:
        return NamespacedName(self.metadata.namespace, self.metadata.name)


class WhenObjectRef(ResourceModel):
    """Build request translated from a PipelineRun.

    Matched by the execution engine against the ``when`` triggers declared on
    Builds: the pipeline name, the run status and a label selector.

    Attributes
    ----------
    name:
        Name of the Pipeline the run follows.
    status:
        Single-element list holding the canonical run status.
    selector:
        Labels of the run, without the keys this package reserves.
    """

    name: str = ""
    status: list[str] = Field(default_factory=list)
    selector: dict[str, str] = Field(default_factory=dict)
