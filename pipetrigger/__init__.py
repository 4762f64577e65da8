"""pipetrigger: decision core bridging Tekton PipelineRuns and Shipwright BuildRuns.

Decides whether a PipelineRun event should be reconciled, classifies the run
status, translates the run into the WhenObjectRef matched against Build
triggers, and records the BuildRuns issued for it so replayed events never
trigger the same work twice.
"""

# Version is defined in pyproject.toml and read dynamically
try:
    from importlib.metadata import version

    __version__ = version("pipetrigger")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

from pipetrigger.filter import (
    DEFAULT_KEYS,
    ExtraFields,
    PipelineRunReason,
    ReservedKeys,
    TriggeredBuild,
    append_issued_build_runs_label,
    decode_extra_fields,
    encode_extra_fields,
    event_filter_predicate,
    filter_build_run_owned_by_run,
    parse_pipeline_run_status,
    pipeline_run_get_labels,
    pipeline_run_to_object_ref,
    search_build_run_for_run_owner,
)
from pipetrigger.kernel.config import TriggersConfig, load_config
from pipetrigger.kernel.domain import (
    BuildRun,
    CustomRun,
    NamespacedName,
    PipelineRun,
    WhenObjectRef,
)
from pipetrigger.kernel.exceptions import (
    ExtraFieldsDecodeError,
    ExtraFieldsNotPopulatedError,
    StatusClassificationError,
    TriggersError,
)
from pipetrigger.kernel.logging import configure_logging, get_logger

__all__ = [
    "DEFAULT_KEYS",
    "BuildRun",
    "CustomRun",
    "ExtraFields",
    "ExtraFieldsDecodeError",
    "ExtraFieldsNotPopulatedError",
    "NamespacedName",
    "PipelineRun",
    "PipelineRunReason",
    "ReservedKeys",
    "StatusClassificationError",
    "TriggeredBuild",
    "TriggersConfig",
    "TriggersError",
    "WhenObjectRef",
    "__version__",
    "append_issued_build_runs_label",
    "configure_logging",
    "decode_extra_fields",
    "encode_extra_fields",
    "event_filter_predicate",
    "filter_build_run_owned_by_run",
    "get_logger",
    "load_config",
    "parse_pipeline_run_status",
    "pipeline_run_get_labels",
    "pipeline_run_to_object_ref",
    "search_build_run_for_run_owner",
]
