"""Decision core: which PipelineRuns to reconcile and what they translate to."""

from pipetrigger.filter.constants import DEFAULT_KEYS, DEFAULT_PIPELINE_TIMEOUT, ReservedKeys
from pipetrigger.filter.extra_fields import ExtraFields, decode_extra_fields, encode_extra_fields
from pipetrigger.filter.labels import (
    append_issued_build_runs_label,
    pipeline_run_get_annotations,
    pipeline_run_get_labels,
)
from pipetrigger.filter.predicate import (
    event_filter_predicate,
    filter_build_run_owned_by_run,
    pipeline_run_references_build_api,
    search_build_run_for_run_owner,
)
from pipetrigger.filter.status import PipelineRunReason, parse_pipeline_run_status
from pipetrigger.filter.translate import pipeline_run_to_object_ref
from pipetrigger.filter.triggered_builds import (
    TriggeredBuild,
    pipeline_run_annotate_name,
    pipeline_run_annotated_name_matches_object,
    pipeline_run_append_triggered_builds_annotation,
    pipeline_run_get_triggered_builds,
    triggered_builds_contains_object_ref,
)

__all__ = [
    "DEFAULT_KEYS",
    "DEFAULT_PIPELINE_TIMEOUT",
    "ExtraFields",
    "PipelineRunReason",
    "ReservedKeys",
    "TriggeredBuild",
    "append_issued_build_runs_label",
    "decode_extra_fields",
    "encode_extra_fields",
    "event_filter_predicate",
    "filter_build_run_owned_by_run",
    "parse_pipeline_run_status",
    "pipeline_run_annotate_name",
    "pipeline_run_annotated_name_matches_object",
    "pipeline_run_append_triggered_builds_annotation",
    "pipeline_run_get_annotations",
    "pipeline_run_get_labels",
    "pipeline_run_get_triggered_builds",
    "pipeline_run_references_build_api",
    "pipeline_run_to_object_ref",
    "search_build_run_for_run_owner",
    "triggered_builds_contains_object_ref",
]
