"""Event filters deciding which objects go through reconciliation."""

from __future__ import annotations

from pipetrigger.filter.constants import CUSTOM_RUN_KIND, DEFAULT_KEYS, RUN_KIND, ReservedKeys
from pipetrigger.kernel.domain.build_run import BuildRun
from pipetrigger.kernel.domain.meta import NamespacedName
from pipetrigger.kernel.domain.pipeline_run import PipelineRun
from pipetrigger.kernel.logging import get_logger

logger = get_logger(__name__)


def search_build_run_for_run_owner(
    build_run: BuildRun, keys: ReservedKeys = DEFAULT_KEYS
) -> NamespacedName | None:
    """Return the Tekton run owning the BuildRun, otherwise None.

    Both owner kinds are accepted: a ``Run`` under ``keys.run_api_version`` and a
    ``CustomRun`` under ``keys.custom_run_api_version``. The first matching owner
    reference wins and the namespace is the BuildRun's own.
    """
    for owner_ref in build_run.metadata.owner_references:
        if (owner_ref.api_version == keys.run_api_version and owner_ref.kind == RUN_KIND) or (
            owner_ref.api_version == keys.custom_run_api_version
            and owner_ref.kind == CUSTOM_RUN_KIND
        ):
            return NamespacedName(build_run.metadata.namespace, owner_ref.name)
    return None


def filter_build_run_owned_by_run(obj: object, keys: ReservedKeys = DEFAULT_KEYS) -> bool:
    """Filter out BuildRun objects not owned by a Tekton Run."""
    if not isinstance(obj, BuildRun):
        return False
    return search_build_run_for_run_owner(obj, keys) is not None


def pipeline_run_references_build_api(
    pipeline_run: PipelineRun, keys: ReservedKeys = DEFAULT_KEYS
) -> bool:
    """Whether any declared task refers to the build API via its TaskRef."""
    if pipeline_run.status.pipeline_spec is None:
        return False
    for task in pipeline_run.status.pipeline_spec.tasks:
        if task.task_ref is None:
            continue
        if task.task_ref.api_version == keys.build_api_version:
            return True
    return False


def event_filter_predicate(obj: object, keys: ReservedKeys = DEFAULT_KEYS) -> bool:
    """Basic inspections filtering only what needs to go through reconciliation.

    PipelineRuns that are part of a Custom-Task (a task referencing the build
    API) are skipped as well, triggering on them would expand forever.

    Parameters
    ----------
    obj : object
        Object delivered by the watch, expected to be a PipelineRun
    keys : ReservedKeys
        Reserved keys and API versions in use

    Returns
    -------
    bool
        True when the object should be reconciled
    """
    metadata = getattr(obj, "metadata", None)
    log = logger.bind(
        namespace=getattr(metadata, "namespace", ""),
        name=getattr(metadata, "name", ""),
    )

    if not isinstance(obj, PipelineRun):
        log.error("Unable to cast object as PipelineRun (got {})", type(obj).__name__)
        return False

    if obj.is_marked_for_deletion():
        log.info("Marked for deletion")
        return False

    if obj.spec.pipeline_ref is None:
        log.info("Skipping due nil .spec.pipelineRef")
        return False

    if obj.status.pipeline_spec is None:
        log.info("Skipping due to nil .status.pipelineSpec")
        return False

    if pipeline_run_references_build_api(obj, keys):
        log.info("Skipping due to being part of a Custom-Task")
        return False
    return True
