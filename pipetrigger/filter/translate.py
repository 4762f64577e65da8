"""Translation of a PipelineRun into the WhenObjectRef matched against Build triggers."""

from __future__ import annotations

from datetime import datetime, timedelta

from pipetrigger.filter.constants import DEFAULT_KEYS, DEFAULT_PIPELINE_TIMEOUT, ReservedKeys
from pipetrigger.filter.labels import pipeline_run_get_labels
from pipetrigger.filter.status import parse_pipeline_run_status
from pipetrigger.kernel.domain.build_run import WhenObjectRef
from pipetrigger.kernel.domain.pipeline_run import PipelineRun
from pipetrigger.kernel.exceptions import ValidationError


def pipeline_run_to_object_ref(
    now: datetime,
    pipeline_run: PipelineRun,
    keys: ReservedKeys = DEFAULT_KEYS,
    default_timeout: timedelta = DEFAULT_PIPELINE_TIMEOUT,
) -> WhenObjectRef:
    """Transform the PipelineRun into a WhenObjectRef.

    Raises
    ------
    StatusClassificationError
        Propagated from :func:`parse_pipeline_run_status`
    ValidationError
        When the run has no ``spec.pipelineRef``
    """
    status = parse_pipeline_run_status(now, pipeline_run, default_timeout)

    if pipeline_run.spec.pipeline_ref is None:
        raise ValidationError("spec.pipelineRef", "is required to build an object reference")

    # labels added by triggers must not end up on the selector
    labels = {
        key: value
        for key, value in pipeline_run_get_labels(pipeline_run).items()
        if not keys.is_reserved(key)
    }

    return WhenObjectRef(
        name=pipeline_run.spec.pipeline_ref.name,
        status=[str(status)],
        selector=labels,
    )
